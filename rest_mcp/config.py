"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "rest-mcp"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Outbound requests
    REST_API_AUTH_TOKEN: str | None = Field(
        default=None,
        description="Token sent as a Bearer Authorization header on every request",
    )
    REQUEST_TIMEOUT: float = 30.0
    DEFAULT_CONTENT_TYPE: str = "application/json"
    SSL_VERIFY: bool = True
    SSL_CA_BUNDLE: str | None = Field(
        default=None,
        description="Path to a CA bundle for corporate/enterprise certificates",
    )

    # Logging
    LOG_PREVIEW_CHARS: int = Field(
        default=200,
        description="Number of response characters echoed to the log per tool call",
    )

    # MCP transport
    MCP_TRANSPORT: str = "stdio"
    MCP_HOST: str = "0.0.0.0"
    MCP_PORT: int = 8080
    CORS_ORIGINS: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins for the HTTP transport"
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v) -> list[str]:
        """Parse CORS origins from list or comma-separated string."""
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        if isinstance(v, list):
            return [str(origin).rstrip("/") for origin in v if origin]
        return []

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v_upper

    @field_validator("REST_API_AUTH_TOKEN")
    @classmethod
    def empty_token_is_none(cls, v: str | None) -> str | None:
        """Treat an empty token as no token."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("REQUEST_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout values are positive."""
        if v <= 0:
            raise ValueError("Timeout must be a positive number")
        if v > 600:
            raise ValueError("Timeout should not exceed 600 seconds")
        return v

    @field_validator("LOG_PREVIEW_CHARS")
    @classmethod
    def validate_preview_chars(cls, v: int) -> int:
        """Validate the log preview length is non-negative."""
        if v < 0:
            raise ValueError("LOG_PREVIEW_CHARS must be a non-negative integer")
        return v

    @field_validator("MCP_TRANSPORT")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        """Validate the MCP transport name."""
        v_lower = v.lower()
        if v_lower not in ("stdio", "http"):
            raise ValueError("MCP_TRANSPORT must be 'stdio' or 'http'")
        return v_lower

    @field_validator("MCP_PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate the HTTP port range."""
        if v < 1 or v > 65535:
            raise ValueError("MCP_PORT must be between 1 and 65535")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
