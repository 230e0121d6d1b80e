"""Pydantic schemas for positions and portfolio summaries."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class PositionSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "symbol": "VWCE",
                "total_shares": 5,
                "total_cost": 50,
                "avg_cost": 10,
                "current_price": 12,
                "current_value": 60,
                "gain_loss": 10,
                "gain_loss_percent": 20,
                "transaction_count": 2,
            }
        },
    )

    symbol: str
    total_shares: float
    total_cost: float
    avg_cost: float
    current_price: float
    current_value: float
    gain_loss: float
    gain_loss_percent: float
    transaction_count: int


class OversoldPositionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    symbol: str
    total_shares: float = Field(..., description="Net shares after all sells; always negative")


class PositionsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    positions: list[PositionSchema]
    oversold: list[OversoldPositionSchema] = Field(default_factory=list)


class PerformanceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_invested: float
    total_value: float
    total_gain_loss: float
    total_gain_loss_percent: float
    total_dividends: float
    total_return: float
    dividend_yield_percent: float
    best_performer: PositionSchema | None = None


class AllocationSliceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    value: float
    percent: float


class AllocationResponse(BaseModel):
    by_symbol: list[AllocationSliceSchema]
    by_sector: list[AllocationSliceSchema]


class TimelinePointSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: dt.date
    invested: float


class DividendSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: float
    this_month: float
    monthly_average: float
    count: int
    by_symbol: dict[str, float]


class BudgetAllocationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    monthly_budget: float
    allocated: float
    remaining: float
    percent_allocated: float


__all__ = [
    "AllocationResponse",
    "AllocationSliceSchema",
    "BudgetAllocationSchema",
    "DividendSummarySchema",
    "OversoldPositionSchema",
    "PerformanceSchema",
    "PositionSchema",
    "PositionsResponse",
    "TimelinePointSchema",
]
