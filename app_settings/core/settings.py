"""Service configuration powered by Pydantic."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory (one level up from app_settings/)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ServiceSettings(BaseSettings):
    """Top-level configuration for the settings cache and its clients."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: str = Field(default="development", alias="APP_SETTINGS_ENV")
    log_level: str = Field(default="INFO", alias="APP_SETTINGS_LOG_LEVEL")

    client_backend: Literal["memory", "sql"] = Field(
        default="memory", alias="APP_SETTINGS_CLIENT"
    )
    default_language: str = Field(
        default="en", alias="APP_SETTINGS_DEFAULT_LANGUAGE"
    )

    sqlalchemy_database_uri_override: Optional[str] = Field(
        default=None, alias="SQLALCHEMY_DATABASE_URI"
    )
    sqlite_db_path: str = Field(
        default="instance/app_settings.db", alias="SQLITE_DB_PATH"
    )
    sqlalchemy_echo: bool = Field(default=False, alias="SQLALCHEMY_ECHO")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, value: object) -> str:
        if value is None:
            return "INFO"
        candidate = str(value).strip().upper()
        if candidate not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level '{value}'")
        return candidate

    @field_validator("client_backend", mode="before")
    @classmethod
    def normalise_backend(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("default_language")
    @classmethod
    def validate_default_language(cls, value: str) -> str:
        """Language codes are opaque, but never blank."""
        if not value or value.strip() == "":
            raise ValueError("Default language cannot be empty")
        return value.strip()

    @field_validator("sqlalchemy_echo", mode="before")
    @classmethod
    def cast_sqlalchemy_echo(cls, value: object) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @property
    def sqlalchemy_database_uri(self) -> str:
        """Construct the SQLAlchemy database URI used by the SQL client."""
        if self.sqlalchemy_database_uri_override:
            return self.sqlalchemy_database_uri_override

        sqlite_path = Path(self.sqlite_db_path)
        if not sqlite_path.is_absolute():
            sqlite_path = (BASE_DIR / sqlite_path).resolve()
        return f"sqlite:///{sqlite_path.as_posix()}"
