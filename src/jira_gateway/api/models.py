"""Request and response models for the gateway API.

Field names follow the gateway's public JSON contract (camelCase).
Request fields are optional at the model level so the routes can report
every missing field in a single 400 response.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field


class CreateIssueRequest(BaseModel):
    """Issue creation request."""

    projectKey: Optional[str] = Field(None, description="Project key", examples=["PROJ"])
    issueType: Optional[str] = Field(None, description="Issue type name", examples=["Task"])
    summary: Optional[str] = Field(None, description="Issue summary")
    description: Any = Field(
        None,
        description="Plain text (converted to ADF) or an ADF document",
    )

    def missing_fields(self) -> list[str]:
        return [
            name
            for name in ("projectKey", "issueType", "summary", "description")
            if not getattr(self, name)
        ]


class TransitionRequest(BaseModel):
    transitionId: Optional[Union[str, int]] = Field(None, description="Transition ID", examples=["11"])


class CreateProjectRequest(BaseModel):
    projectName: Optional[str] = Field(None, description="Project name")


class MessageResponse(BaseModel):
    message: str = Field(..., description="Human-readable status message")


class CreateIssueResponse(MessageResponse):
    issueKey: str = Field(..., description="Key of the created issue", examples=["PROJ-123"])


class CreateProjectResponse(MessageResponse):
    projectKey: str = Field(..., description="Key of the created project", examples=["PROJ"])


class ErrorResponse(BaseModel):
    """Error body returned for 4xx/5xx responses."""

    message: str = Field(..., description="Error message")
    error: Optional[str] = Field(None, description="Detailed error information")


class ServiceInfo(BaseModel):
    message: str
    version: str
    timestamp: str = Field(..., description="UTC ISO 8601 timestamp")
    documentation: str = Field(..., description="Swagger UI URL")
