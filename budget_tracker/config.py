"""
Application configuration.

Values come from environment variables prefixed with ``BUDGET_`` or from a
local ``.env`` file.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BUDGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///./budget_tracker.db",
        description="SQLAlchemy database URL",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=False, description="Render logs as JSON lines")
    currency_symbol: str = Field(default="$", description="Symbol used in balance descriptions")
    split_tolerance: Decimal = Field(
        default=Decimal("0.01"),
        ge=0,
        description="Allowed difference between custom split amounts and the expense total",
    )
    activity_limit: int = Field(default=10, ge=1, le=500, description="Default size of the activity feed")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
