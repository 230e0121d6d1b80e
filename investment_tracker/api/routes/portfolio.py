"""Positions and portfolio summaries, computed from the transaction log on each request."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from investment_tracker.api.dependencies import get_app_settings, get_db
from investment_tracker.config import AppSettings
from investment_tracker.schemas import (
    AllocationResponse,
    AllocationSliceSchema,
    PerformanceSchema,
    PositionsResponse,
    TimelinePointSchema,
)
from investment_tracker.services import portfolio as portfolio_service
from investment_tracker.services.performance import (
    allocation_by_sector,
    allocation_by_symbol,
    invested_timeline,
    summarize_performance,
)
from investment_tracker.services.positions import PositionReport, build_position_report
from investment_tracker.services.prices import StaticPriceTable, build_price_table

router = APIRouter()


async def _price_table(session: AsyncSession, settings: AppSettings) -> StaticPriceTable:
    stocks = await portfolio_service.list_stocks(session)
    return build_price_table(settings.price_table, stocks)


async def _position_report(session: AsyncSession, settings: AppSettings) -> PositionReport:
    transactions = await portfolio_service.list_transactions(session)
    prices = await _price_table(session, settings)
    return build_position_report(portfolio_service.transaction_inputs(transactions), prices)


@router.get("/positions", response_model=PositionsResponse)
async def get_positions(
    session: AsyncSession = Depends(get_db),
    settings: AppSettings = Depends(get_app_settings),
) -> PositionsResponse:
    report = await _position_report(session, settings)
    return PositionsResponse.model_validate(report)


@router.get("/performance", response_model=PerformanceSchema)
async def get_performance(
    session: AsyncSession = Depends(get_db),
    settings: AppSettings = Depends(get_app_settings),
) -> PerformanceSchema:
    report = await _position_report(session, settings)
    dividends = await portfolio_service.list_dividends(session)
    summary = summarize_performance(report.positions, portfolio_service.dividend_inputs(dividends))
    return PerformanceSchema.model_validate(summary)


@router.get("/allocation", response_model=AllocationResponse)
async def get_allocation(
    session: AsyncSession = Depends(get_db),
    settings: AppSettings = Depends(get_app_settings),
) -> AllocationResponse:
    report = await _position_report(session, settings)
    sectors = await portfolio_service.stock_sectors(session)
    return AllocationResponse(
        by_symbol=[AllocationSliceSchema.model_validate(s) for s in allocation_by_symbol(report.positions)],
        by_sector=[AllocationSliceSchema.model_validate(s) for s in allocation_by_sector(report.positions, sectors)],
    )


@router.get("/timeline", response_model=list[TimelinePointSchema])
async def get_timeline(session: AsyncSession = Depends(get_db)) -> list[TimelinePointSchema]:
    transactions = await portfolio_service.list_transactions(session)
    points = invested_timeline(portfolio_service.transaction_inputs(transactions))
    return [TimelinePointSchema.model_validate(point) for point in points]


__all__ = ["router"]
