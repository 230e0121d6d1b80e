"""Application configuration and environment helpers."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

DEFAULT_BASE_CURRENCY = "EUR"
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./investments.db"


class AppSettings(BaseSettings):
    """Configuration options for the investment tracker service."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = Field(default="Investment Tracker")
    api_prefix: str = Field(default="/api")
    base_currency: str = Field(default=DEFAULT_BASE_CURRENCY)

    database_url: str = Field(
        default=DEFAULT_DATABASE_URL,
        description="SQLAlchemy database URL (async driver).",
    )

    default_monthly_budget: Decimal = Field(
        default=Decimal("1000"),
        description="Monthly DCA budget used until one is saved through the API.",
    )
    price_table: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Static current prices keyed by symbol, e.g. PRICE_TABLE='{\"VWCG\": 15.5}'.",
    )

    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    telemetry_enabled: bool = Field(default=False)
    telemetry_service_name: str = Field(default="investment-tracker")
    telemetry_otlp_endpoint: str | None = Field(default=None)
    telemetry_otlp_insecure: bool = Field(default=True)
    telemetry_sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitized dict for logging purposes."""

        values = self.model_dump()
        values["database_url"] = make_url(self.database_url).render_as_string(hide_password=True)
        return values


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """Return cached application settings with optional overrides."""

    if overrides:
        return AppSettings(**overrides)
    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_BASE_CURRENCY",
    "DEFAULT_DATABASE_URL",
    "get_settings",
]
