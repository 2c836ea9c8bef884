# backend/careersync/core/config.py
"""
Application settings.

Values come from environment variables (case-insensitive) and, outside CI,
from a ``.env`` file next to the backend directory.
"""

from decimal import Decimal
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_BACKEND_ROOT = Path(__file__).resolve().parents[2]

if not os.getenv("CI"):
    env_path = _BACKEND_ROOT / ".env"
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


class Settings(BaseSettings):
    environment: str = Field(default="development", description="development | production | test")
    log_level: str = Field(default="INFO", description="Root log level for the API process")

    database_url: str = Field(
        default="sqlite:///./careersync.db",
        description="SQLAlchemy URL. PostgreSQL in production, SQLite locally.",
    )
    auto_create_tables: bool = Field(
        default=True,
        description="Run metadata.create_all on startup (development convenience).",
    )
    sqlite_busy_timeout_seconds: float = Field(default=30.0, ge=0)
    db_pool_size: int = Field(default=5, ge=1)
    db_max_overflow: int = Field(default=10, ge=0)
    db_pool_timeout: int = Field(default=30, ge=1)
    db_pool_recycle: int = Field(default=1800, ge=-1)

    secret_key: SecretStr = Field(
        default=SecretStr("careersync-dev-secret-change-me"),
        description="Key used to verify bearer tokens",
    )
    algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=720, ge=1)

    default_session_rate: Decimal = Field(default=Decimal("60"), ge=0)
    default_meeting_location: str = "Online"
    auto_create_session_sentinel: str = "auto-create"

    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: Optional[str]) -> str:
        return (v or "INFO").strip().upper()

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_environment(cls, v: Optional[str]) -> str:
        return (v or "development").strip().lower()

    @property
    def is_production(self) -> bool:
        return self.environment in {"prod", "production"}


settings = Settings()
