"""Jira Cloud REST gateway.

Provides:
- ADF document builder/validator for Jira rich-text fields
- Async Jira Cloud REST API v3 client
- FastAPI gateway exposing simplified issue/project/user endpoints
- Configuration management with environment overrides

Python Version: 3.10+ required
"""

# Configure logging before other imports
from .logging_config import StructuredFormatter, configure_logging

configure_logging()

from .__version__ import __version__  # noqa: E402
from .adf import (  # noqa: E402
    Document,
    coerce_description,
    combine_blocks,
    is_valid_document,
    text_to_document,
)
from .config import GatewayConfig, get_config, reset_config  # noqa: E402
from .jira import JiraClient, JiraClientError  # noqa: E402

__all__ = [
    "Document",
    "GatewayConfig",
    "JiraClient",
    "JiraClientError",
    "StructuredFormatter",
    "__version__",
    "coerce_description",
    "combine_blocks",
    "configure_logging",
    "get_config",
    "is_valid_document",
    "reset_config",
    "text_to_document",
]
