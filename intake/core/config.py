"""Application settings and environment configuration loading."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
DEFAULT_DATABASE_PATH = PROJECT_ROOT / "data" / "intake.db"
LOG_FORMATS = frozenset({"text", "json"})


class Settings(BaseSettings):
    """Typed runtime configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        # Load the project `.env` regardless of current working directory.
        env_file=[DEFAULT_ENV_FILE, ".env"],
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "dev"
    database_url: str = f"sqlite+aiosqlite:///{DEFAULT_DATABASE_PATH}"

    # Database lifecycle
    db_auto_migrate: bool = False
    db_echo: bool = False

    cors_origins: str = ""

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"
    log_use_utc: bool = False

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_log_format(cls, value: object) -> object:
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized not in LOG_FORMATS:
                raise ValueError(f"LOG_FORMAT must be one of: {', '.join(sorted(LOG_FORMATS))}.")
            return normalized
        return value

    @model_validator(mode="after")
    def _defaults(self) -> Self:
        # In dev, default to applying Alembic migrations at startup so the
        # local SQLite file tracks the current schema.
        if "db_auto_migrate" not in self.model_fields_set and self.environment == "dev":
            self.db_auto_migrate = True
        return self

    def allowed_cors_origins(self) -> tuple[str, ...]:
        """Return normalized CORS origins from config."""
        values: list[str] = []
        for raw in self.cors_origins.split(","):
            normalized = raw.strip()
            if normalized and normalized not in values:
                values.append(normalized)
        return tuple(values)


settings = Settings()
