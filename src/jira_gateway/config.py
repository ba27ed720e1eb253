"""Configuration management with pydantic-settings for the Jira gateway.

Loads from (in order of precedence):
1. Environment variables (highest priority)
2. .env file in the working directory
3. Default values (lowest priority)

Credentials are optional at load time so the service can start and serve
its docs; the Jira client factory refuses to run without them.

References:
- Pydantic Settings: https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "ATLASSIAN_HOST_SUFFIX",
    "GatewayConfig",
    "get_config",
    "reset_config",
]

ATLASSIAN_HOST_SUFFIX = ".atlassian.net"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class GatewayConfig(BaseSettings):
    """Configuration for the Jira Cloud gateway.

    Attributes:
        atlassian_username: Atlassian account email used for Basic Auth
        atlassian_api_key: Atlassian API token (SecretStr)
        domain: Site subdomain, e.g. "acme" for https://acme.atlassian.net
        lead_acct_id: Account ID set as lead on projects created via the API
        project_key: Default project key used by scripts
        host: Bind address for the HTTP server
        port: Bind port for the HTTP server
        request_timeout: Read timeout for Jira API calls, in seconds
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json for production, text for development)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        validate_default=True,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    atlassian_username: str = Field(
        default="", description="Atlassian account email for Basic Auth"
    )

    atlassian_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Atlassian API token (stored securely)",
    )

    domain: str = Field(
        default="",
        description="Jira Cloud site subdomain (acme for acme.atlassian.net)",
    )

    lead_acct_id: str = Field(
        default="", description="Lead account ID for newly created projects"
    )

    project_key: str = Field(
        default="TEST", description="Default project key for example scripts"
    )

    host: str = Field(default="0.0.0.0", description="HTTP bind address")

    port: int = Field(default=3000, ge=1, le=65535, description="HTTP bind port")

    request_timeout: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        validation_alias="JIRA_TIMEOUT_SECONDS",
        description="Read timeout for Jira API requests in seconds",
    )

    log_level: str = Field(default="INFO", description="Logging level")

    log_format: str = Field(
        default="json", description="Log format: json or text"
    )

    @field_validator("domain", mode="before")
    @classmethod
    def normalize_domain(cls, v):
        """Accept a bare subdomain, a hostname or a full site URL."""
        if not isinstance(v, str):
            return v
        value = v.strip()
        if "://" in value:
            value = urlparse(value).hostname or ""
        value = value.strip("/")
        if value.endswith(ATLASSIAN_HOST_SUFFIX):
            value = value[: -len(ATLASSIAN_HOST_SUFFIX)]
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got {v!r}"
            )
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in ("json", "text"):
            raise ValueError(f"log_format must be 'json' or 'text', got {v!r}")
        return fmt

    @property
    def instance_url(self) -> str:
        """Jira Cloud base URL, e.g. https://acme.atlassian.net."""
        return f"https://{self.domain}{ATLASSIAN_HOST_SUFFIX}"

    def missing_credentials(self) -> list[str]:
        """Names of required environment variables that are not set."""
        missing = []
        if not self.atlassian_username:
            missing.append("ATLASSIAN_USERNAME")
        if not self.atlassian_api_key.get_secret_value():
            missing.append("ATLASSIAN_API_KEY")
        if not self.domain:
            missing.append("DOMAIN")
        return missing

    @property
    def is_configured(self) -> bool:
        return not self.missing_credentials()


@lru_cache(maxsize=1)
def get_config() -> GatewayConfig:
    """Get global configuration singleton.

    First call loads from environment + .env file, subsequent calls return
    the cached instance.

    Raises:
        ValidationError: If configuration values are invalid.
    """
    return GatewayConfig()


def reset_config() -> None:
    """Reset configuration singleton for testing.

    Warning:
        Only use in test code.
    """
    get_config.cache_clear()
