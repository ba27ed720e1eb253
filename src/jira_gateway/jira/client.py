"""Jira Cloud REST API client.

Provides an async httpx-based client for Jira Cloud API v3 with Basic Auth.
Each method maps to one upstream call; descriptions are converted to ADF
before they are sent.

Reference: https://developer.atlassian.com/cloud/jira/platform/rest/v3/intro/
"""

import base64
import logging
import re
from typing import Any

import httpx

from ..adf import coerce_description
from ..config import GatewayConfig

logger = logging.getLogger("jira_gateway.jira.client")

__all__ = [
    "API_PREFIX",
    "JiraClient",
    "JiraClientError",
    "create_client",
    "derive_project_key",
]

API_PREFIX = "/rest/api/3"

# /search/jql rejects unbounded queries, so searches without a project
# are limited to recent issues
DEFAULT_SEARCH_JQL = "created >= -30d order by created DESC"

PROJECT_KEY_MAX_LENGTH = 10


class JiraClientError(Exception):
    """Raised when a Jira API request fails.

    Wraps httpx transport and HTTP status errors for consistent handling.

    Attributes:
        status_code: Upstream HTTP status, None for transport failures
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def derive_project_key(project_name: str) -> str:
    """Derive a Jira project key from a project name.

    Keeps ASCII letters and digits, uppercased, drops leading digits and
    truncates to 10 characters.

    Raises:
        ValueError: If the name has no usable letters

    Example:
        >>> derive_project_key("Mobile App 2")
        'MOBILEAPP2'
    """
    key = re.sub(r"[^A-Za-z0-9]", "", project_name).upper().lstrip("0123456789")
    if not key:
        raise ValueError(f"cannot derive a project key from {project_name!r}")
    return key[:PROJECT_KEY_MAX_LENGTH]


class JiraClient:
    """Jira Cloud REST API client using httpx with Basic Auth.

    Uses a long-lived httpx.AsyncClient with connection pooling. Reuse one
    instance for the lifetime of the gateway.

    Attributes:
        base_url: Jira instance URL (e.g., https://company.atlassian.net)
        auth_header: Basic Auth header (base64 encoded email:api_token)

    Example:
        >>> async with JiraClient("https://company.atlassian.net", "user@example.com", "token") as client:
        ...     key = await client.create_issue("PROJ", "Task", "Title", "Body")
    """

    def __init__(
        self,
        instance_url: str,
        email: str,
        api_token: str,
        read_timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Jira client with authentication.

        Args:
            instance_url: Jira instance URL (e.g., https://company.atlassian.net)
            email: Atlassian account email for Basic Auth
            api_token: Atlassian API token
            read_timeout: Read timeout for API responses in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.base_url = instance_url.rstrip("/")

        credentials = f"{email}:{api_token}"
        encoded = base64.b64encode(credentials.encode()).decode()
        self.auth_header = f"Basic {encoded}"

        timeout_config = httpx.Timeout(
            connect=3.0,
            read=read_timeout,
            write=5.0,
            pool=3.0,
        )

        limits = httpx.Limits(
            max_keepalive_connections=20,
            max_connections=100,
            keepalive_expiry=10.0,
        )

        self.client = httpx.AsyncClient(
            base_url=f"{self.base_url}{API_PREFIX}",
            timeout=timeout_config,
            limits=limits,
            transport=transport,
            headers={
                "Authorization": self.auth_header,
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )

    async def _request(
        self, operation: str, method: str, path: str, **kwargs: Any
    ) -> httpx.Response:
        """Send one request, translating httpx failures to JiraClientError.

        Args:
            operation: Upper-case operation name used in error codes and
                log events (e.g. "CREATE_ISSUE")
            method: HTTP method
            path: Path relative to /rest/api/3
        """
        event = f"jira_{operation.lower()}"
        try:
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.TimeoutException as e:
            logger.error(f"{event}_timeout", extra={"path": path, "error": str(e)})
            raise JiraClientError(f"JIRA_{operation}_TIMEOUT") from e
        except httpx.HTTPStatusError as e:
            logger.error(
                f"{event}_failed",
                extra={
                    "path": path,
                    "status_code": e.response.status_code,
                    "error": _error_detail(e.response),
                },
            )
            raise JiraClientError(
                f"JIRA_{operation}_ERROR: HTTP {e.response.status_code}: "
                f"{_error_detail(e.response)}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"{event}_error", extra={"path": path, "error": str(e)})
            raise JiraClientError(f"JIRA_{operation}_ERROR: {e}") from e

    async def test_connection(self) -> dict[str, Any]:
        """Test Jira API connectivity and authentication.

        Sends GET request to /myself to verify credentials.

        Returns:
            dict with keys:
                - success (bool): True if authenticated successfully
                - user_email (str | None): Authenticated user's email
                - error (str | None): Error message if failed
        """
        try:
            response = await self._request("TEST_CONNECTION", "GET", "/myself")
        except JiraClientError as e:
            return {"success": False, "user_email": None, "error": str(e)}
        return {
            "success": True,
            "user_email": response.json().get("emailAddress"),
            "error": None,
        }

    async def server_info(self) -> dict[str, Any]:
        """Get site version and build information (GET /serverInfo)."""
        response = await self._request("SERVER_INFO", "GET", "/serverInfo")
        return response.json()

    async def create_issue(
        self,
        project_key: str,
        issue_type: str,
        summary: str,
        description: Any = None,
    ) -> str:
        """Create an issue and return its key.

        Args:
            project_key: Project key (e.g., 'PROJ')
            issue_type: Issue type name (e.g., 'Task', 'Bug')
            summary: Issue summary
            description: Plain text, ADF document (dict or Document), or None

        Returns:
            New issue key (e.g., 'PROJ-123')

        Raises:
            JiraClientError: If request fails
        """
        payload = {
            "fields": {
                "project": {"key": project_key},
                "summary": summary,
                "description": coerce_description(description),
                "issuetype": {"name": issue_type},
            }
        }
        response = await self._request("CREATE_ISSUE", "POST", "/issue", json=payload)
        issue_key = response.json().get("key")
        logger.info(
            "jira_issue_created",
            extra={"project_key": project_key, "issue_key": issue_key},
        )
        return issue_key

    async def search_issues(
        self, project_key: str | None = None, max_results: int = 50
    ) -> dict[str, Any]:
        """Search issues with JQL, first page only.

        Args:
            project_key: Restrict to one project; recent issues otherwise
            max_results: Page size

        Returns:
            Raw /search/jql response (issues, nextPageToken, isLast)
        """
        jql = f"project = {_jql_string(project_key)}" if project_key else DEFAULT_SEARCH_JQL
        response = await self._request(
            "SEARCH_ISSUES",
            "GET",
            "/search/jql",
            params={"jql": jql, "maxResults": max_results, "fields": "*navigable"},
        )
        return response.json()

    async def get_issue(self, issue_key: str) -> dict[str, Any] | None:
        """Get one issue; returns None if it does not exist.

        Raises:
            JiraClientError: For failures other than 404
        """
        try:
            response = await self._request("GET_ISSUE", "GET", f"/issue/{issue_key}")
        except JiraClientError as e:
            if e.status_code == 404:
                return None
            raise
        return response.json()

    async def delete_issue(self, issue_key: str) -> None:
        """Delete an issue.

        Raises:
            JiraClientError: If request fails (status_code 404 if missing)
        """
        await self._request("DELETE_ISSUE", "DELETE", f"/issue/{issue_key}")
        logger.info("jira_issue_deleted", extra={"issue_key": issue_key})

    async def get_transitions(self, issue_key: str) -> dict[str, Any]:
        """List workflow transitions available for an issue."""
        response = await self._request(
            "GET_TRANSITIONS", "GET", f"/issue/{issue_key}/transitions"
        )
        return response.json()

    async def transition_issue(self, issue_key: str, transition_id: str) -> int:
        """Move an issue through a workflow transition.

        Returns:
            Upstream HTTP status code (Jira answers 204 on success)
        """
        response = await self._request(
            "TRANSITION_ISSUE",
            "POST",
            f"/issue/{issue_key}/transitions",
            json={"transition": {"id": str(transition_id)}},
        )
        logger.info(
            "jira_issue_transitioned",
            extra={"issue_key": issue_key, "transition_id": str(transition_id)},
        )
        return response.status_code

    async def list_projects(self) -> list[dict[str, Any]]:
        """List all accessible projects (GET /project)."""
        response = await self._request("LIST_PROJECTS", "GET", "/project")
        return response.json()

    async def create_project(self, project_name: str, lead_account_id: str) -> str:
        """Create a software project and return its key.

        Raises:
            ValueError: If no key can be derived from the name
            JiraClientError: If request fails
        """
        project_key = derive_project_key(project_name)
        payload = {
            "key": project_key,
            "name": project_name,
            "projectTypeKey": "software",
            "leadAccountId": lead_account_id,
            "assigneeType": "PROJECT_LEAD",
        }
        response = await self._request("CREATE_PROJECT", "POST", "/project", json=payload)
        created_key = response.json().get("key", project_key)
        logger.info("jira_project_created", extra={"project_key": created_key})
        return created_key

    async def list_users(self) -> list[dict[str, Any]]:
        """List users visible to the authenticated account."""
        response = await self._request("LIST_USERS", "GET", "/users/search")
        return response.json()

    async def close(self) -> None:
        """Close the HTTP client connection."""
        if hasattr(self, "client") and self.client is not None:
            await self.client.aclose()

    async def __aenter__(self) -> "JiraClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _jql_string(value: str) -> str:
    """Quote a value as a JQL string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _error_detail(response: httpx.Response) -> str:
    """Extract Jira's errorMessages/errors from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if not isinstance(body, dict):
        return str(body)[:200]
    messages = list(body.get("errorMessages") or [])
    messages.extend(f"{k}: {v}" for k, v in (body.get("errors") or {}).items())
    return "; ".join(messages) or response.reason_phrase


def create_client(config: GatewayConfig) -> JiraClient:
    """Build a JiraClient from configuration.

    Raises:
        ValueError: If credentials are missing
    """
    missing = config.missing_credentials()
    if missing:
        raise ValueError(f"Jira credentials not configured: {', '.join(missing)}")
    return JiraClient(
        instance_url=config.instance_url,
        email=config.atlassian_username,
        api_token=config.atlassian_api_key.get_secret_value(),
        read_timeout=config.request_timeout,
    )
