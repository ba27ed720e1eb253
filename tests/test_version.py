"""Tests for version tracking.

Tests verify:
- PEP 440 compliant version format
- Consistency between __version__, __version_info__ and the API banner
"""

from src.jira_gateway import __version__ as package_version
from src.jira_gateway.__version__ import __version__, __version_info__
from src.jira_gateway.api.app import create_app


class TestVersionModule:
    """Test src/jira_gateway/__version__.py functionality."""

    def test_version_format_pep440_compliant(self):
        """Test that __version__ follows Major.Minor.Patch format."""
        parts = __version__.split(".")
        assert len(parts) == 3, "Version must be Major.Minor.Patch format"

        for part in parts:
            assert part.isdigit(), f"Version part '{part}' must be integer"

    def test_version_info_tuple(self):
        assert isinstance(__version_info__, tuple)
        assert len(__version_info__) == 3
        assert all(isinstance(part, int) for part in __version_info__)

    def test_version_and_version_info_match(self):
        version_parts = tuple(int(x) for x in __version__.split("."))
        assert version_parts == __version_info__, "Version string and tuple must match"

    def test_package_reexports_version(self):
        assert package_version == __version__

    def test_openapi_version_matches(self, gateway_config):
        assert create_app(gateway_config).version == __version__
