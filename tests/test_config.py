from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import FastAPI

from investment_tracker.config import AppSettings, get_settings
from investment_tracker.core.logging import setup_logging
from investment_tracker.core.telemetry import setup_telemetry


def test_price_table_and_budget_come_from_environment(monkeypatch):
    monkeypatch.setenv("PRICE_TABLE", '{"VWCG": 15.5}')
    monkeypatch.setenv("DEFAULT_MONTHLY_BUDGET", "250")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.price_table == {"VWCG": Decimal("15.5")}
    assert settings.default_monthly_budget == Decimal("250")


def test_dict_for_logging_hides_database_password():
    settings = AppSettings(database_url="postgresql+asyncpg://tracker:secret@db/investments")

    logged = settings.dict_for_logging()

    assert "secret" not in logged["database_url"]
    assert logged["app_name"] == "Investment Tracker"


def test_setup_logging_installs_one_handler():
    root = logging.getLogger()
    before = len(root.handlers)

    setup_logging()
    setup_logging()

    added = [h for h in root.handlers if getattr(h, "_investment_tracker", False)]
    assert len(added) == 1
    assert len(root.handlers) <= before + 1


def test_telemetry_is_off_unless_enabled():
    assert setup_telemetry(FastAPI(), AppSettings(telemetry_enabled=False)) is False
