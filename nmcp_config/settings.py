"""
Application Settings (Pydantic Settings).

Loads configuration from environment variables (.env file or system env).

The MCP host usually passes configuration through the server's process
environment, e.g. the `env` block of a Claude Desktop server entry:

    "notion": {
        "command": "notion-mcp-server",
        "env": {"NOTION_API_KEY": "secret_..."}
    }
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    An empty NOTION_API_KEY is valid: the server then starts in degraded mode.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # ========================================================================
    # NOTION
    # ========================================================================
    NOTION_API_KEY: str = Field(default="", description="Notion integration token")
    NOTION_API_VERSION: str = Field(
        default="2022-06-28", description="Value sent as the Notion-Version header"
    )
    NOTION_TIMEOUT_SECONDS: int = Field(default=30, ge=1, description="HTTP request timeout")
    RATE_LIMIT_DEFAULT_RETRY_AFTER: float = Field(
        default=5.0,
        ge=0.0,
        description="Wait (seconds) before the single retry when Notion sends no Retry-After",
    )

    # ========================================================================
    # MCP SERVER
    # ========================================================================
    MCP_SERVER_NAME: str = Field(default="notion-mcp-server")
    MCP_SERVER_VERSION: str = Field(default="1.0.0")

    # ========================================================================
    # LOGGING
    # ========================================================================
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FORMAT: str = Field(default="json", pattern="^(json|text)$")

    # ========================================================================
    # METRICS (Prometheus)
    # ========================================================================
    METRICS_PORT: int = Field(
        default=0, ge=0, le=65535, description="Prometheus exporter port (0 disables)"
    )

    # ========================================================================
    # OPENTELEMETRY
    # ========================================================================
    OTEL_EXPORTER_OTLP_ENDPOINT: str = Field(default="http://localhost:4317")
    OTEL_SERVICE_NAME: str = Field(default="notion-mcp-server")
    OTEL_TRACES_ENABLED: bool = Field(default=False)

    # ========================================================================
    # DEPLOYMENT
    # ========================================================================
    ENVIRONMENT: str = Field(
        default="development", pattern="^(development|staging|production)$"
    )

    @property
    def notion_configured(self) -> bool:
        """True when a Notion credential is present."""
        return bool(self.NOTION_API_KEY.strip())
