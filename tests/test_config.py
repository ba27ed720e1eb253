"""Unit tests for gateway configuration with pydantic-settings."""

import pytest
from pydantic import ValidationError

from src.jira_gateway.config import GatewayConfig, get_config, reset_config


class TestGatewayConfig:
    """Test GatewayConfig loading and validation."""

    def test_default_values(self, clean_env):
        config = GatewayConfig()

        assert config.atlassian_username == ""
        assert config.atlassian_api_key.get_secret_value() == ""
        assert config.domain == ""
        assert config.project_key == "TEST"
        assert config.port == 3000
        assert config.request_timeout == 15.0
        assert config.log_level == "INFO"
        assert config.log_format == "json"
        assert config.is_configured is False

    def test_env_overrides(self, clean_env):
        clean_env.setenv("ATLASSIAN_USERNAME", "me@example.com")
        clean_env.setenv("ATLASSIAN_API_KEY", "secret-token")
        clean_env.setenv("DOMAIN", "acme")
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("JIRA_TIMEOUT_SECONDS", "30")

        config = GatewayConfig()

        assert config.atlassian_username == "me@example.com"
        assert config.atlassian_api_key.get_secret_value() == "secret-token"
        assert config.instance_url == "https://acme.atlassian.net"
        assert config.port == 8080
        assert config.request_timeout == 30.0
        assert config.is_configured is True

    def test_env_file_loaded(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("DOMAIN=fromfile\nLEAD_ACCT_ID=lead-9\n")

        config = GatewayConfig()

        assert config.domain == "fromfile"
        assert config.lead_acct_id == "lead-9"

    def test_api_key_not_in_repr(self, clean_env):
        config = GatewayConfig(atlassian_api_key="super-secret")

        assert "super-secret" not in repr(config)

    @pytest.mark.parametrize(
        "value",
        [
            "acme",
            "acme.atlassian.net",
            "acme.atlassian.net/",
            "https://acme.atlassian.net",
            "https://acme.atlassian.net/",
        ],
    )
    def test_domain_normalized(self, clean_env, value):
        assert GatewayConfig(domain=value).domain == "acme"

    def test_missing_credentials_listed(self, clean_env):
        config = GatewayConfig(domain="acme")

        assert config.missing_credentials() == ["ATLASSIAN_USERNAME", "ATLASSIAN_API_KEY"]

    def test_log_level_normalized(self, clean_env):
        assert GatewayConfig(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize(
        ("field", "value"),
        [("log_level", "VERBOSE"), ("log_format", "xml"), ("port", 0), ("port", 70000)],
    )
    def test_invalid_values_rejected(self, clean_env, field, value):
        with pytest.raises(ValidationError):
            GatewayConfig(**{field: value})

    def test_frozen(self, clean_env):
        config = GatewayConfig()

        with pytest.raises(ValidationError):
            config.port = 1


class TestConfigSingleton:
    def test_cached(self, clean_env):
        assert get_config() is get_config()

    def test_reset_reloads(self, clean_env):
        first = get_config()
        clean_env.setenv("PROJECT_KEY", "NEW")
        reset_config()

        second = get_config()

        assert second is not first
        assert second.project_key == "NEW"
