"""FastAPI gateway for Jira Cloud."""

from .app import app, create_app, get_jira_client

__all__ = ["app", "create_app", "get_jira_client"]
