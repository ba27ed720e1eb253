"""Jira Cloud gateway API.

FastAPI service exposing simplified REST endpoints for Jira Cloud issues,
projects, users and workflow transitions:
- Async endpoints backed by one long-lived JiraClient
- Plain-text descriptions converted to ADF before they reach Jira
- Pydantic request/response models with Field descriptions
- Structured logging with extras dict
- OpenAPI auto-documentation at /api-docs
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse, Response

from ..__version__ import __version__
from ..config import GatewayConfig, get_config
from ..jira.client import JiraClient, JiraClientError, create_client
from ..logging_config import configure_logging
from .models import (
    CreateIssueRequest,
    CreateIssueResponse,
    CreateProjectRequest,
    CreateProjectResponse,
    ErrorResponse,
    MessageResponse,
    ServiceInfo,
    TransitionRequest,
)

logger = logging.getLogger("jira_gateway.api")

__all__ = ["app", "create_app", "get_jira_client", "main"]

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Missing required fields"},
    500: {"model": ErrorResponse, "description": "Jira request failed"},
}


def sanitize_log_input(value: str, max_length: int = 200) -> str:
    """Escape control characters and truncate user input before logging."""
    if not isinstance(value, str):
        value = str(value)
    sanitized = repr(value)[1:-1]
    sanitized = "".join(c for c in sanitized if c.isprintable())
    return sanitized[:max_length]


def _error(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    content: dict[str, Any] = {"message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


def _upstream_error(event: str, message: str, exc: Exception, **extra: Any) -> JSONResponse:
    logger.error(event, extra={"error": str(exc), **extra})
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, message, str(exc))


class ClientUnavailable(Exception):
    """Raised when the gateway has no Jira client (credentials missing)."""


def get_jira_client(request: Request) -> JiraClient:
    """FastAPI dependency returning the shared JiraClient.

    Raises:
        ClientUnavailable: If credentials were missing at startup
    """
    client = getattr(request.app.state, "jira_client", None)
    if client is None:
        raise ClientUnavailable(request.app.state.client_error)
    return client


def create_app(config: Optional[GatewayConfig] = None) -> FastAPI:
    """Build the gateway application.

    Args:
        config: GatewayConfig instance (defaults to get_config())
    """
    config = config or get_config()
    configure_logging(config.log_level, config.log_format)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the shared Jira client on startup, close it on shutdown."""
        try:
            app.state.jira_client = create_client(config)
            app.state.client_error = None
            logger.info("jira_client_ready", extra={"instance_url": config.instance_url})
        except ValueError as e:
            app.state.jira_client = None
            app.state.client_error = str(e)
            logger.warning("jira_client_unavailable", extra={"error": str(e)})
        yield
        if app.state.jira_client is not None:
            await app.state.jira_client.close()

    app = FastAPI(
        title="Jira Cloud REST API Gateway",
        description=(
            "Simplified REST endpoints for Jira Cloud REST API v3: projects, "
            "issues, users and workflow transitions. Plain-text issue "
            "descriptions are converted to Atlassian Document Format."
        ),
        version=__version__,
        docs_url="/api-docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.jira_client = None
    app.state.client_error = "Jira client not initialized"

    @app.exception_handler(ClientUnavailable)
    async def client_unavailable_handler(request: Request, exc: ClientUnavailable):
        logger.error("jira_client_unavailable", extra={"path": request.url.path})
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Jira client is not configured",
            str(exc),
        )

    @app.get("/", response_model=ServiceInfo, tags=["Service"])
    async def root(request: Request):
        """Service banner with version and documentation link."""
        return ServiceInfo(
            message="Jira Cloud REST API Gateway is running!",
            version=__version__,
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            documentation=str(request.base_url).rstrip("/") + "/api-docs",
        )

    @app.get("/live", tags=["Service"])
    async def liveness():
        """Liveness probe."""
        return {"status": "alive"}

    # ----------------------------------------------------------------- issues

    @app.post(
        "/issues",
        status_code=status.HTTP_201_CREATED,
        response_model=CreateIssueResponse,
        responses=ERROR_RESPONSES,
        tags=["Issues"],
    )
    async def create_issue(
        body: Optional[CreateIssueRequest] = None,
        client: JiraClient = Depends(get_jira_client),
    ):
        """Create an issue.

        ``description`` may be plain text (blank lines separate paragraphs)
        or a ready-made ADF document, which is sent unchanged.
        """
        body = body or CreateIssueRequest()
        missing = body.missing_fields()
        if missing:
            return _error(
                status.HTTP_400_BAD_REQUEST,
                f"Bad Request. Missing required fields: {', '.join(missing)}",
            )

        try:
            issue_key = await client.create_issue(
                body.projectKey, body.issueType, body.summary, body.description
            )
        except JiraClientError as e:
            return _upstream_error(
                "create_issue_failed",
                "Internal Server Error. Failed to create issue.",
                e,
                project_key=sanitize_log_input(body.projectKey),
            )
        return CreateIssueResponse(message="Issue created successfully", issueKey=issue_key)

    @app.get("/issues", responses=ERROR_RESPONSES, tags=["Issues"])
    async def list_issues(
        projectId: Optional[str] = None,
        client: JiraClient = Depends(get_jira_client),
    ):
        """Search issues, optionally restricted to one project."""
        try:
            return await client.search_issues(projectId)
        except JiraClientError as e:
            return _upstream_error("list_issues_failed", "Error getting issues", e)

    @app.get(
        "/issues/{issueKey}",
        responses={404: {"model": ErrorResponse}, **ERROR_RESPONSES},
        tags=["Issues"],
    )
    async def get_issue(issueKey: str, client: JiraClient = Depends(get_jira_client)):
        """Get one issue by key or ID."""
        try:
            issue = await client.get_issue(issueKey)
        except JiraClientError as e:
            return _upstream_error(
                "get_issue_failed",
                "Error getting issue",
                e,
                issue_key=sanitize_log_input(issueKey),
            )
        if issue is None:
            return _error(status.HTTP_404_NOT_FOUND, "Issue not found")
        return issue

    @app.delete(
        "/issues/{issueKey}",
        status_code=status.HTTP_204_NO_CONTENT,
        responses={404: {"model": ErrorResponse}, **ERROR_RESPONSES},
        tags=["Issues"],
    )
    async def delete_issue(issueKey: str, client: JiraClient = Depends(get_jira_client)):
        """Delete an issue."""
        try:
            await client.delete_issue(issueKey)
        except JiraClientError as e:
            if e.status_code == 404:
                return _error(status.HTTP_404_NOT_FOUND, "Issue not found")
            return _upstream_error(
                "delete_issue_failed",
                "Error deleting issue",
                e,
                issue_key=sanitize_log_input(issueKey),
            )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/issues/{issueKey}/transitions", responses=ERROR_RESPONSES, tags=["Workflow"])
    async def get_transitions(issueKey: str, client: JiraClient = Depends(get_jira_client)):
        """List the transitions available for an issue."""
        try:
            return await client.get_transitions(issueKey)
        except JiraClientError as e:
            return _upstream_error(
                "get_transitions_failed",
                "Error getting transitions",
                e,
                issue_key=sanitize_log_input(issueKey),
            )

    @app.post(
        "/issues/{issueKey}/transitions",
        response_model=MessageResponse,
        responses={204: {"description": "Transition applied"}, **ERROR_RESPONSES},
        tags=["Workflow"],
    )
    async def transition_issue(
        issueKey: str,
        body: Optional[TransitionRequest] = None,
        client: JiraClient = Depends(get_jira_client),
    ):
        """Apply a workflow transition to an issue."""
        if body is None or body.transitionId in (None, ""):
            return _error(status.HTTP_400_BAD_REQUEST, "Transition ID is required")

        try:
            upstream_status = await client.transition_issue(issueKey, str(body.transitionId))
        except JiraClientError as e:
            return _upstream_error(
                "transition_issue_failed",
                "Error updating issue status",
                e,
                issue_key=sanitize_log_input(issueKey),
            )
        if upstream_status == status.HTTP_204_NO_CONTENT:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return MessageResponse(message="Issue status updated successfully")

    # --------------------------------------------------------------- projects

    @app.get("/projects", responses=ERROR_RESPONSES, tags=["Projects"])
    async def list_projects(client: JiraClient = Depends(get_jira_client)):
        """List all accessible projects."""
        try:
            return await client.list_projects()
        except JiraClientError as e:
            return _upstream_error("list_projects_failed", "Error getting projects", e)

    @app.post(
        "/projects",
        status_code=status.HTTP_201_CREATED,
        response_model=CreateProjectResponse,
        responses=ERROR_RESPONSES,
        tags=["Projects"],
    )
    async def create_project(
        body: Optional[CreateProjectRequest] = None,
        client: JiraClient = Depends(get_jira_client),
    ):
        """Create a software project led by LEAD_ACCT_ID."""
        if body is None or not body.projectName:
            return _error(status.HTTP_400_BAD_REQUEST, "Project name is required")

        try:
            project_key = await client.create_project(body.projectName, config.lead_acct_id)
        except ValueError as e:
            return _error(status.HTTP_400_BAD_REQUEST, "Invalid project name", str(e))
        except JiraClientError as e:
            return _upstream_error("create_project_failed", "Error creating project", e)
        return CreateProjectResponse(
            message="Project created successfully", projectKey=project_key
        )

    # ------------------------------------------------------------------ users

    @app.get("/users", responses=ERROR_RESPONSES, tags=["Users"])
    async def list_users(client: JiraClient = Depends(get_jira_client)):
        """List users."""
        try:
            return await client.list_users()
        except JiraClientError as e:
            return _upstream_error("list_users_failed", "Error getting users", e)

    return app


app = create_app()


def main() -> None:
    """Run the gateway with uvicorn using HOST/PORT from configuration."""
    import uvicorn

    config = get_config()
    configure_logging(config.log_level, config.log_format)
    logger.info("gateway_starting", extra={"host": config.host, "port": config.port})
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
