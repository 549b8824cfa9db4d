"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables and .env files, and builds
the per-table configuration objects injected into each signal table.
"""

from dataclasses import dataclass
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Signalboard"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: Literal["local", "development", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    # Backend
    API_BASE_URL: str = "http://localhost:8080"
    REQUEST_TIMEOUT_SEC: float = 10.0
    READY_ENDPOINT: str = "analysis/ready"
    WATCH_ENDPOINT: str = "analysis/watch"
    SECTORS_ENDPOINT: str = "sectors"
    PIVOT_ENDPOINT: str = "pivot"
    DESCRIPTION_ENDPOINT: str = "description"

    # Table
    READY_PAGE_SIZE: int = 20
    WATCH_PAGE_SIZE: int = 10
    HIGHLIGHT_EPSILON: float = 0.80
    DEFAULT_SORT_KEY: str = "dayChange"
    DEFAULT_SORT_DIRECTION: Literal["asc", "desc"] = "desc"
    VOLUME_SCHEME: Literal["indian", "international"] = "indian"

    # Timestamps (the ready producer emits milliseconds, the watch producer seconds)
    READY_TIMESTAMP_UNIT: Literal["s", "ms"] = "ms"
    WATCH_TIMESTAMP_UNIT: Literal["s", "ms"] = "s"
    DISPLAY_TIMEZONE: str = "Asia/Kolkata"

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:8000"]


@dataclass(frozen=True)
class TableConfig:
    """Configuration for one signal table instance."""
    name: str
    endpoint: str
    page_size: int = 20
    search_fields: tuple[str, ...] = ("symbol", "sector")
    highlight_epsilon: float = 0.80
    default_sort_key: str = "dayChange"
    default_sort_direction: str = "desc"
    volume_scheme: str = "indian"
    timestamp_unit: str = "ms"
    display_timezone: str = "Asia/Kolkata"
    page_window: int = 5

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1.")
        if self.page_window < 1:
            raise ValueError("page_window must be at least 1.")
        if self.highlight_epsilon < 0:
            raise ValueError("highlight_epsilon cannot be negative.")

    @classmethod
    def from_settings(cls, settings: Settings, table: str) -> "TableConfig":
        if table == "ready":
            return cls(
                name="ready",
                endpoint=settings.READY_ENDPOINT,
                page_size=settings.READY_PAGE_SIZE,
                search_fields=("symbol", "sector"),
                highlight_epsilon=settings.HIGHLIGHT_EPSILON,
                default_sort_key=settings.DEFAULT_SORT_KEY,
                default_sort_direction=settings.DEFAULT_SORT_DIRECTION,
                volume_scheme=settings.VOLUME_SCHEME,
                timestamp_unit=settings.READY_TIMESTAMP_UNIT,
                display_timezone=settings.DISPLAY_TIMEZONE,
            )
        if table == "watch":
            return cls(
                name="watch",
                endpoint=settings.WATCH_ENDPOINT,
                page_size=settings.WATCH_PAGE_SIZE,
                search_fields=("symbol",),
                highlight_epsilon=settings.HIGHLIGHT_EPSILON,
                default_sort_key=settings.DEFAULT_SORT_KEY,
                default_sort_direction=settings.DEFAULT_SORT_DIRECTION,
                volume_scheme=settings.VOLUME_SCHEME,
                timestamp_unit=settings.WATCH_TIMESTAMP_UNIT,
                display_timezone=settings.DISPLAY_TIMEZONE,
            )
        raise ValueError(f"Unknown table: {table}")


TABLES = ("ready", "watch")

# Global settings instance
settings = Settings()
