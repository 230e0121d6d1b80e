"""Export and import of the complete data set as a JSON document."""

from __future__ import annotations

import datetime as dt
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from investment_tracker.api.dependencies import get_app_settings, get_db
from investment_tracker.config import AppSettings
from investment_tracker.schemas import ImportResult
from investment_tracker.services import transfer

router = APIRouter()


@router.get("/export")
async def export_data(
    session: AsyncSession = Depends(get_db),
    settings: AppSettings = Depends(get_app_settings),
) -> JSONResponse:
    document = await transfer.collect_export(session, settings.default_monthly_budget)
    filename = transfer.export_filename(dt.date.today())
    return JSONResponse(
        content=document,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResult, status_code=status.HTTP_201_CREATED)
async def import_data(
    payload: dict[str, Any] = Body(...),
    session: AsyncSession = Depends(get_db),
) -> ImportResult:
    try:
        document = transfer.parse_document(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc
    try:
        return await transfer.import_document(session, document)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


__all__ = ["router"]
