"""
Application settings and configuration management.
Uses pydantic-settings for environment variable loading.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Review Insight Service"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # API Settings
    api_prefix: str = "/api/v1"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Inference service (OpenAI)
    openai_api_key: str = Field("", description="OpenAI API key")
    openai_base_url: Optional[str] = None
    openai_model: str = "gpt-4.1-mini"
    inference_timeout_seconds: float = Field(60.0, gt=0)

    @property
    def inference_configured(self) -> bool:
        return bool(self.openai_api_key.strip())

    # Rate Limiting
    rate_limit: str = "100/minute"
    rate_limit_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Monitoring - Elastic APM
    apm_enabled: bool = False
    apm_server_url: str = "http://localhost:8200"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
