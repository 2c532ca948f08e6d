"""Configuration for Adeline using environment variables."""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_COMPONENT_TYPES = [
    "handDrawnIllustration",
    "dynamicLedger",
    "guidingQuestion",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Environment Variables:
        GOOGLE_API_KEY: API key for Gemini (required for AI composition)
        GEMINI_BASE_URL: OpenAI-compatible Gemini endpoint
        GEMINI_MODEL: Model name to use (default: gemini-2.0-flash)
        GEMINI_TEMPERATURE: Sampling temperature (default: 0.7)
        ADELINE_GENUI_COMPONENT_TYPES: JSON list of component types the renderer knows
        ADELINE_LOG_LEVEL: Logging level (default: INFO)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Gemini Configuration
    gemini_api_key: str = Field(
        default="",
        validation_alias="GOOGLE_API_KEY",
        description="API key for Gemini",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/openai/",
        validation_alias="GEMINI_BASE_URL",
        description="OpenAI-compatible base URL for the Gemini API",
    )
    gemini_model: str = Field(
        default="gemini-2.0-flash",
        validation_alias="GEMINI_MODEL",
        description="Model name to use",
    )
    gemini_temperature: float = Field(
        default=0.7,
        validation_alias="GEMINI_TEMPERATURE",
        description="Sampling temperature for page composition",
    )

    # Generative UI
    genui_component_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_COMPONENT_TYPES),
        validation_alias="ADELINE_GENUI_COMPONENT_TYPES",
        description="Component types shared with the rendering layer",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        validation_alias="ADELINE_LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    @property
    def log_level_int(self) -> int:
        """Get log level as integer for logging module."""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
