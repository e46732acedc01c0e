from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App environment
    env: str = Field(default="development", alias="ENV")
    debug: bool = Field(default=False, alias="DEBUG")

    # Database
    database_url: str = Field(default="sqlite+aiosqlite:///./dev.db", alias="DATABASE_URL")

    # Logging configuration used by planner.logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    console_log_level: str = Field(default="INFO", alias="CONSOLE_LOG_LEVEL")

    # IANA zone used for "now" when the projection endpoints bucket by calendar day
    timezone: str = Field(default="UTC", alias="TIMEZONE")

    # CORS: comma-separated origins, "*" allows everything
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Client data cache
    api_base_url: str = Field(default="http://localhost:8000/api", alias="API_BASE_URL")
    client_timeout_seconds: float = Field(default=10.0, alias="CLIENT_TIMEOUT_SECONDS")

    # Dashboard
    upcoming_window_days: int = Field(default=7, alias="UPCOMING_WINDOW_DAYS")
    recent_journal_limit: int = Field(default=3, alias="RECENT_JOURNAL_LIMIT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
