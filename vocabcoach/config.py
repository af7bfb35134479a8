"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

AIProvider = Literal["ollama", "openai", "anthropic", "google"]

# Setting that must be present for each AI provider
PROVIDER_CREDENTIALS: dict[str, str] = {
    "ollama": "OPENAI_BASE_URL",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "google": "GEMINI_API_KEY",
}


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Document store database
    DATABASE_URL: str = "sqlite:///./vocabcoach.db"

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "VocabCoach API"
    VERSION: str = "0.1.0"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Question sessions
    ORACLE_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    RECENT_SESSIONS_LIMIT: int = Field(default=3, ge=1)
    TRACKER_IDLE_TIMEOUT_SECONDS: float = Field(default=3600.0, gt=0)

    # AI configuration
    AI_PROVIDER: AIProvider | None = None
    AI_MODEL_NAME: str | None = None

    # ollama
    OPENAI_BASE_URL: str | None = None
    # openai
    OPENAI_API_KEY: str | None = None
    # anthropic
    ANTHROPIC_API_KEY: str | None = None
    # google
    GEMINI_API_KEY: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ai_enabled(self) -> bool:
        """Whether open-ended answers are graded by the AI oracle."""
        return self.AI_PROVIDER is not None

    @model_validator(mode="after")
    def validate_ai_provider_config(self) -> "Settings":
        """Require a model name and the provider's credential once AI grading is on."""
        if self.AI_PROVIDER is None:
            return self

        required = ["AI_MODEL_NAME", PROVIDER_CREDENTIALS[self.AI_PROVIDER]]
        missing = [name for name in required if not getattr(self, name)]
        if missing:
            msg = f"{', '.join(missing)} required when AI_PROVIDER is '{self.AI_PROVIDER}'"
            raise ValueError(msg)
        return self


LOG_LEVELS = {"development": logging.DEBUG, "production": logging.INFO, "test": logging.WARNING}


def configure_logging(environment: str = "development") -> None:
    """
    Route structlog through stdlib logging.

    Production logs are JSON lines, other environments get the console
    renderer. Tests only see warnings and errors.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=LOG_LEVELS.get(environment, logging.INFO),
    )

    renderer: Callable[..., Any] = (
        structlog.processors.JSONRenderer()
        if environment == "production"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
