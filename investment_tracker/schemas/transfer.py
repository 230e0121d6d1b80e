"""Pydantic schemas for the JSON export/import document."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from investment_tracker.models.portfolio import DcaFrequency, DividendType

from .portfolio import Symbol, TransactionType


class ExportedTransaction(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(default=None, description="Ignored on import")
    symbol: Symbol
    type: TransactionType
    shares: float = Field(..., gt=0)
    price: float = Field(..., gt=0)
    fees: float = Field(default=0.0, ge=0)
    total: float | None = Field(default=None, ge=0)
    date: dt.date
    notes: str | None = Field(default=None, max_length=255)


class ExportedDividend(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = Field(default=None, description="Ignored on import")
    symbol: Symbol
    amount: float = Field(..., gt=0)
    date: dt.date
    type: DividendType = DividendType.DIVIDEND


class ExportedDcaPlan(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int | None = Field(default=None, description="Ignored on import")
    symbol: Symbol
    amount: float = Field(..., gt=0)
    frequency: DcaFrequency = DcaFrequency.MONTHLY
    next_date: dt.date = Field(..., alias="nextDate")


class DataDocument(BaseModel):
    """Complete export of the tracker's data, keyed the way the web client expects."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "transactions": [
                    {
                        "id": 1,
                        "symbol": "VWCE",
                        "type": "BUY",
                        "shares": 10,
                        "price": 100.0,
                        "fees": 1.5,
                        "total": 1001.5,
                        "date": "2025-01-15",
                    }
                ],
                "dividends": [{"id": 1, "symbol": "VWCE", "amount": 12.5, "date": "2025-01-20", "type": "dividend"}],
                "dcaPlans": [{"id": 1, "symbol": "VWCE", "amount": 100, "frequency": "monthly", "nextDate": "2025-02-01"}],
                "monthlyBudget": 1000,
                "exportDate": "2025-01-31T12:00:00+00:00",
            }
        },
    )

    transactions: list[ExportedTransaction] = Field(default_factory=list)
    dividends: list[ExportedDividend] = Field(default_factory=list)
    dca_plans: list[ExportedDcaPlan] = Field(default_factory=list, alias="dcaPlans")
    monthly_budget: float | None = Field(default=None, ge=0, alias="monthlyBudget")
    export_date: dt.datetime | None = Field(default=None, alias="exportDate")


class ImportResult(BaseModel):
    transactions: int
    dividends: int
    dca_plans: int
    monthly_budget: float | None = None


__all__ = [
    "DataDocument",
    "ExportedDcaPlan",
    "ExportedDividend",
    "ExportedTransaction",
    "ImportResult",
]
