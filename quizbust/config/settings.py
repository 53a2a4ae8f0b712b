"""Application settings and configuration."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Load .env file if present
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Provider Configuration
    api_key: str | None = Field(
        default=None,
        description="Provider API key (only needed server-side or for direct play)",
        validation_alias="DEEPSEEK_API_KEY",
    )
    provider_base_url: str = Field(
        default="https://api.deepseek.com/v1",
        description="Base URL of the OpenAI-compatible chat completions API",
        validation_alias="PROVIDER_BASE_URL",
    )

    # Model Configuration
    model_name: str = Field(
        default="deepseek-chat",
        description="Model used to generate questions",
        validation_alias="MODEL_NAME",
    )

    # Generation Settings
    default_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for question generation",
        validation_alias="DEFAULT_TEMPERATURE",
    )

    max_tokens: int = Field(
        default=1000,
        ge=1,
        description="Maximum tokens in a model reply",
        validation_alias="MAX_TOKENS",
    )

    request_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Timeout in seconds for one question request",
        validation_alias="REQUEST_TIMEOUT",
    )

    reply_format: Literal["delimited", "json"] = Field(
        default="delimited",
        description="Reply format requested from the model",
        validation_alias="REPLY_FORMAT",
    )

    # Client Settings
    proxy_url: str | None = Field(
        default=None,
        description="Proxy endpoint to request questions through (e.g. http://localhost:3000/deepseek)",
        validation_alias="QUIZBUST_PROXY_URL",
    )

    # Server Settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Host the proxy server binds to",
        validation_alias="SERVER_HOST",
    )

    server_port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port the proxy server listens on",
        validation_alias="SERVER_PORT",
    )

    cors_origins: str = Field(
        default="*",
        description="Comma separated list of allowed CORS origins",
        validation_alias="CORS_ORIGINS",
    )

    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = Field(
        default="WARNING",
        description="Root log level",
        validation_alias="LOG_LEVEL",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept level names in any case."""
        return v.strip().upper() if isinstance(v, str) else v

    @property
    def completions_url(self) -> str:
        """Full URL of the provider's chat completions endpoint."""
        return f"{self.provider_base_url.rstrip('/')}/chat/completions"

    @property
    def allowed_origins(self) -> list[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Loaded the first time and then cached for the rest of the process
@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with loaded configuration
    """
    return Settings()
