"""Application settings stored in the database."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from investment_tracker.api.dependencies import get_app_settings, get_db
from investment_tracker.config import AppSettings
from investment_tracker.schemas import SettingsSchema, SettingsUpdateRequest
from investment_tracker.services import portfolio as portfolio_service

router = APIRouter()


@router.get("", response_model=SettingsSchema)
async def get_stored_settings(
    session: AsyncSession = Depends(get_db),
    settings: AppSettings = Depends(get_app_settings),
) -> SettingsSchema:
    budget = await portfolio_service.get_monthly_budget(session, settings.default_monthly_budget)
    return SettingsSchema(monthly_budget=float(budget), base_currency=settings.base_currency)


@router.put("", response_model=SettingsSchema)
async def put_stored_settings(
    payload: SettingsUpdateRequest,
    session: AsyncSession = Depends(get_db),
    settings: AppSettings = Depends(get_app_settings),
) -> SettingsSchema:
    try:
        budget = await portfolio_service.set_monthly_budget(payload.monthly_budget, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return SettingsSchema(monthly_budget=float(budget), base_currency=settings.base_currency)


__all__ = ["router"]
