"""
Runtime configuration helpers for the Prylics service.

Loads DATABASE_URL, JWT and AI endpoint settings from the environment and the
.env file located in the project root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Final

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

# Absolute path to .env
ENV_PATH = BASE_DIR / ".env"

# Load .env defaults without overriding environment variables provided by the platform
load_dotenv(dotenv_path=ENV_PATH, override=False)

_PLACEHOLDER_VALUES: Final[set[str]] = {
    "changeme",
    "change-me",
    "placeholder",
    "example",
    "sample",
    "your-key-here",
}


def is_placeholder(value: str | None) -> bool:
    if not value:
        return True
    normalized = value.strip().lower()
    return not normalized or normalized in _PLACEHOLDER_VALUES


class Settings(BaseSettings):
    database_url: str = Field(default="sqlite+pysqlite:///./prylics.db", alias="DATABASE_URL")

    app_name: str = Field(default="Prylics", alias="APP_NAME")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Session tokens issued after the identity provider hand-off
    jwt_secret_key: str = Field(..., alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expires_minutes: int = Field(default=1440, alias="JWT_EXPIRES_MINUTES")

    # AI tag suggestions
    ai_tags_url: str | None = Field(default=None, alias="AI_TAGS_URL")
    ai_tags_timeout: float = Field(default=20.0, alias="AI_TAGS_TIMEOUT")
    ai_tags_min_chars: int = Field(default=20, alias="AI_TAGS_MIN_CHARS")

    placeholder_avatar_url: str = Field(default="https://placehold.co/40x40.png", alias="PLACEHOLDER_AVATAR_URL")
    seed_demo_data: bool = Field(default=True, alias="SEED_DEMO_DATA")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @field_validator("jwt_secret_key")
    @classmethod
    def _reject_placeholder_secret(cls, value: str) -> str:
        if is_placeholder(value):
            raise ValueError("JWT_SECRET_KEY is required and must not use placeholder defaults")
        return value.strip()

    @property
    def allowed_origins(self) -> list[str]:
        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return origins or ["*"]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings", "is_placeholder"]
