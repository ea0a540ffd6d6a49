"""
Tavern Farkle - Application Settings

Loads configuration from environment variables (and an optional .env file)
using Pydantic Settings, and configures logging from it.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from src.engine.base import TARGET_SCORE_PRESETS

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Rules
    target_score: int = 10000
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    opening_score_rule: bool = False
    opening_score: int = Field(default=500, ge=0)
    ai_max_rolls: int = Field(default=20, ge=1)

    # Presentation pacing, in seconds
    message_delay: float = Field(default=1.0, ge=0)
    roll_delay: float = Field(default=0.6, ge=0)
    bust_delay: float = Field(default=2.0, ge=0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level {value!r}.")
        return level

    @field_validator("target_score")
    @classmethod
    def _preset_target_score(cls, value: int) -> int:
        if value not in TARGET_SCORE_PRESETS:
            raise ValueError(f"Target score must be one of {sorted(TARGET_SCORE_PRESETS)}.")
        return value

    @field_validator("difficulty", mode="before")
    @classmethod
    def _lowercase_difficulty(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("src").setLevel(level)
