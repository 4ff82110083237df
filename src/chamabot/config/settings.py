"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).

It picks the reply engine (local ledger or remote webhook) and the member store (in-memory or
PostgreSQL), and keeps the DB session timezone locked to UTC.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, HttpUrl, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ReplyEngineName = Literal["local", "webhook"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str = Field(alias="TELEGRAM_BOT_TOKEN")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    db_timezone: str = Field(default="UTC", alias="DB_TIMEZONE")

    reply_engine: ReplyEngineName = Field(default="local", alias="REPLY_ENGINE")
    webhook_url: HttpUrl | None = Field(default=None, alias="WEBHOOK_URL")
    webhook_timeout_s: float = Field(default=15.0, gt=0, alias="WEBHOOK_TIMEOUT_S")

    currency: str = Field(default="KES", alias="CURRENCY")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("db_timezone")
    @classmethod
    def validate_db_timezone_is_utc(cls, value: str) -> str:
        """Validate that the DB timezone is locked to UTC.

        Join timestamps must read back exactly as written. Any other timezone is rejected at startup.
        """

        if value.upper() != "UTC":
            raise ValueError("DB_TIMEZONE must be UTC")
        return "UTC"

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, value: str) -> str:
        """Normalize the display currency code (e.g. `kes` -> `KES`)."""

        code = value.strip().upper()
        if not code:
            raise ValueError("CURRENCY must not be empty")
        return code

    @field_validator("database_url")
    @classmethod
    def blank_database_url_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def validate_webhook_config(self) -> Settings:
        """Validate the remote reply engine configuration.

        If the webhook engine is selected, a webhook URL must be provided.
        """

        if self.reply_engine == "webhook" and self.webhook_url is None:
            raise ValueError("WEBHOOK_URL is required when REPLY_ENGINE=webhook")
        return self


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
