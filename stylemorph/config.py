"""Configuration management for the StyleMorph try-on service."""

import logging

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class GeminiConfig(BaseModel):
    """Gemini generation settings."""
    api_key: str | None = None
    model: str = "gemini-2.5-flash-image"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


class TryOnConfig(BaseSettings):
    """Main service configuration."""

    # Sub-configs
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)

    # Logging
    log_level: str = "INFO"

    # Credentials (loaded from .env)
    gemini_api_key: str | None = None
    api_key: str | None = None  # legacy name used by the web client

    class Config:
        env_file = ".env"
        env_prefix = ""
        extra = "ignore"


def load_config() -> TryOnConfig:
    """Load configuration from environment and defaults."""
    config = TryOnConfig()
    if config.gemini.api_key is None:
        config.gemini.api_key = config.gemini_api_key or config.api_key
    return config


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging for the service."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig does nothing once handlers exist
    logging.getLogger().setLevel(numeric_level)
