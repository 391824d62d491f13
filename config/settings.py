"""Application settings and configuration management."""
from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    GEMINI_API_KEY: Optional[str] = None
    COMPLETION_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    COMPLETION_MODEL: str = "gemini-pro"
    COMPLETION_TIMEOUT_S: float = Field(default=30.0, ge=0.1)
    COMPLETION_MAX_RETRIES: int = Field(default=2, ge=0)
    COMPLETION_BACKOFF_S: float = Field(default=1.0, ge=0.0)

    DB_PATH: str = Field(default="data/viva.db")
    HISTORY_KEY: str = "vivaHistory"
    HISTORY_LIMIT: int = Field(default=10, ge=1)
    PREFERENCES_KEY: str = "cppCoursePreferences"

    TICK_SECONDS: float = Field(default=1.0, gt=0.0)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_assignment=True)


settings = Settings()
