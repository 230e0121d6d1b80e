"""Dividend endpoints."""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from investment_tracker.api.dependencies import get_db
from investment_tracker.schemas import DividendCreateRequest, DividendSchema, DividendSummarySchema
from investment_tracker.services import portfolio as portfolio_service
from investment_tracker.services.performance import summarize_dividends

router = APIRouter()


@router.get("", response_model=list[DividendSchema])
async def get_dividends(session: AsyncSession = Depends(get_db)) -> list[DividendSchema]:
    dividends = await portfolio_service.list_dividends(session)
    return [DividendSchema.model_validate(d) for d in dividends]


@router.post("", response_model=DividendSchema, status_code=status.HTTP_201_CREATED)
async def post_dividend(
    payload: DividendCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> DividendSchema:
    try:
        record = await portfolio_service.create_dividend(payload, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return DividendSchema.model_validate(record)


@router.get("/summary", response_model=DividendSummarySchema)
async def get_dividend_summary(
    today: dt.date | None = None,
    session: AsyncSession = Depends(get_db),
) -> DividendSummarySchema:
    """Totals across all dividends; ``today`` selects the month reported as this month."""

    dividends = await portfolio_service.list_dividends(session)
    summary = summarize_dividends(portfolio_service.dividend_inputs(dividends), today or dt.date.today())
    return DividendSummarySchema.model_validate(summary)


@router.delete("/{dividend_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_dividend(dividend_id: int, session: AsyncSession = Depends(get_db)) -> Response:
    try:
        await portfolio_service.delete_dividend(dividend_id, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
