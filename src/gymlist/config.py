from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from gymlist.exceptions import ConfigError


class AppConfig(BaseModel):
    """Application-specific configuration values."""

    name: str = "gymlist"
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    # "console" for local development, "json" for aggregated logs
    log_format: Literal["console", "json"] = "console"


class SearchConfig(BaseModel):
    """Ranking configuration values."""

    threshold: float = Field(default=0.3, ge=0.0, le=1.0)


class PaginationConfig(BaseModel):
    """Paginator defaults used by list screens."""

    initial_page_size: int = Field(default=12, ge=1)
    page_size_options: List[int] = Field(default_factory=lambda: [12, 24, 48, 96])


class LoaderConfig(BaseModel):
    """Incremental loader (infinite scroll) defaults."""

    initial_items_per_page: int = Field(default=12, ge=1)
    threshold_distance: int = Field(default=100, ge=0)  # pixels below the viewport
    settle_delay_ms: int = Field(default=100, ge=0)
    enabled: bool = True


class Settings(BaseSettings):
    """Top-level settings loaded from environment variables and .env only."""

    model_config = SettingsConfigDict(
        env_prefix="GYMLIST_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    app: AppConfig = AppConfig()
    search: SearchConfig = SearchConfig()
    pagination: PaginationConfig = PaginationConfig()
    loader: LoaderConfig = LoaderConfig()


def load_settings() -> Settings:
    """Load settings from environment variables and .env only.

    Raises `ConfigError` when a value fails validation.
    """
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as exc:
        raise ConfigError(f"Invalid gymlist settings: {exc}") from exc
