"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from investment_tracker.config import AppSettings
from investment_tracker.db.session import get_db


def get_app_settings(request: Request) -> AppSettings:
    """Return the settings the running application was built with."""

    return request.app.state.settings


__all__ = ["get_app_settings", "get_db"]
