"""Jira Cloud integration package.

Provides the async REST client used by the gateway routes.
"""

from .client import JiraClient, JiraClientError, create_client, derive_project_key

__all__ = [
    "JiraClient",
    "JiraClientError",
    "create_client",
    "derive_project_key",
]
