"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MatchField = Literal["name", "address", "category"]


class DatabaseSettings(BaseModel):
    dsn: str = Field(
        default="sqlite+aiosqlite:///./places.db",
        description="SQLAlchemy async DSN for the catalog and preference tables.",
    )
    echo: bool = False


class SearchSettings(BaseModel):
    result_limit: int = Field(default=50, ge=1, le=500)
    match_fields: tuple[MatchField, ...] = ("name", "address", "category")

    @field_validator("match_fields")
    @classmethod
    def _require_fields(cls, value):
        if not value:
            raise ValueError("at least one match field is required")
        return tuple(dict.fromkeys(value))


class RecentListSettings(BaseModel):
    storage_key: str = Field(default="search_list", min_length=1, max_length=128)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PLACES_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    seed_catalog: bool = True

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    recent: RecentListSettings = Field(default_factory=RecentListSettings)


@lru_cache
def get_settings() -> AppSettings:
    """Return cached settings instance."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "RecentListSettings",
    "SearchSettings",
    "get_settings",
]
