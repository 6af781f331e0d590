"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./talkbuddy.db"

    SECRET_KEY: str = ""

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "talkbuddy API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Inference service
    INFERENCE_SERVICE_URL: str = "http://localhost:8000"
    INFERENCE_PATH_PREFIX: str = ""
    INFERENCE_TIMEOUT_SECONDS: float = 30.0

    # Learner profile
    ACCURACY_HISTORY_MODE: Literal["recent", "full"] = "recent"
    ACCURACY_HISTORY_LIMIT: int = 20
    DEFAULT_LANGUAGE_LEVEL: str = "beginner"

    # Progress and achievements
    ACHIEVEMENT_EVALUATION_MODE: Literal["problem", "feedback", "disabled"] = "problem"
    PROGRESS_UPDATE_MODE: Literal["background", "sync"] = "background"
    PROGRESS_TIMEZONE: str = "UTC"
    PROGRESS_BOOTSTRAP_FIRST_BUCKET: bool = False

    # Uploads
    MAX_VOICE_UPLOAD_BYTES: int = 10 * 1024 * 1024

    @property
    def accuracy_history_limit(self) -> int | None:
        """Number of attempts the accuracy rate is computed over (None means all)."""
        if self.ACCURACY_HISTORY_MODE == "full":
            return None
        return self.ACCURACY_HISTORY_LIMIT

    @property
    def progress_timezone(self) -> ZoneInfo:
        """Timezone used to decide which calendar day a progress bucket belongs to."""
        return ZoneInfo(self.PROGRESS_TIMEZONE)

    @field_validator("INFERENCE_SERVICE_URL", mode="after")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Strip trailing slash so paths can be appended directly."""
        return value.rstrip("/")

    @field_validator("ACCURACY_HISTORY_LIMIT", mode="after")
    @classmethod
    def validate_history_limit(cls, value: int) -> int:
        """History window must contain at least one attempt."""
        if value <= 0:
            msg = "ACCURACY_HISTORY_LIMIT must be positive"
            raise ValueError(msg)
        return value

    @field_validator("PROGRESS_TIMEZONE", mode="after")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Reject timezone names the zoneinfo database does not know."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            msg = f"Unknown PROGRESS_TIMEZONE '{value}'"
            raise ValueError(msg) from e
        return value


def configure_logging(environment: str = "development") -> None:
    """Configure structured logging with structlog."""
    # Determine if we should use JSON output (production) or console output (dev)
    use_json = environment == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
