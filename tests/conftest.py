"""Shared pytest fixtures for the Jira gateway tests.

Fixture Organization:
    - Config fixtures: isolated GatewayConfig instances, env cleanup
    - Client fixtures: JiraClient wired to an httpx.MockTransport
    - Integration gating: --run-integration for live-site tests
"""

import json

import httpx
import pytest
import pytest_asyncio

from src.jira_gateway.config import GatewayConfig, reset_config
from src.jira_gateway.jira.client import JiraClient

# Env vars read by GatewayConfig; cleared so a developer's .env/shell
# settings never leak into unit tests
GATEWAY_ENV_VARS = (
    "ATLASSIAN_USERNAME",
    "ATLASSIAN_API_KEY",
    "DOMAIN",
    "LEAD_ACCT_ID",
    "PROJECT_KEY",
    "HOST",
    "PORT",
    "JIRA_TIMEOUT_SECONDS",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


def pytest_addoption(parser):
    """Add custom command line options for test selection."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against a live Jira Cloud site",
    )


def pytest_collection_modifyitems(session, config, items):
    """Skip integration tests unless --run-integration is provided."""
    if config.getoption("--run-integration"):
        return
    skip_integration = pytest.mark.skip(reason="needs --run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove gateway env vars and run from an empty dir (no .env)."""
    for name in GATEWAY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield monkeypatch
    reset_config()


@pytest.fixture
def gateway_config(clean_env):
    """Fully configured GatewayConfig for a fake site."""
    return GatewayConfig(
        atlassian_username="test@example.com",
        atlassian_api_key="test-token-123",
        domain="test",
        lead_acct_id="lead-123",
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport that records requests and replies from a route table.

    Routes map ``(method, path)`` to ``(status, json_body)`` or to an
    exception instance to raise. Unrouted requests get 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"errorMessages": ["Not found"]})
        if isinstance(route, Exception):
            raise route
        status_code, body = route
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest_asyncio.fixture
async def jira_client(transport):
    """JiraClient for https://test.atlassian.net backed by ``transport``."""
    client = JiraClient(
        instance_url="https://test.atlassian.net",
        email="test@example.com",
        api_token="test-token-123",
        transport=transport,
    )
    yield client
    await client.close()
