"""Allow ``python -m jira_gateway.api``."""

from .app import main

main()
