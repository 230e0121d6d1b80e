"""Pydantic schemas for transactions, dividends, DCA plans, stocks and settings."""

from __future__ import annotations

import datetime as dt
from typing import Annotated

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field

from investment_tracker.models.portfolio import DcaFrequency, DividendType, TransactionKind


def _normalize_symbol(value: str) -> str:
    normalized = value.strip().upper()
    if not normalized:
        raise ValueError("Symbol must not be empty")
    return normalized


Symbol = Annotated[str, AfterValidator(_normalize_symbol)]


def _upper_kind(value: object) -> object:
    return value.upper() if isinstance(value, str) else value


TransactionType = Annotated[TransactionKind, BeforeValidator(_upper_kind)]


class TransactionCreateRequest(BaseModel):
    symbol: Symbol = Field(..., examples=["VWCE"])
    type: TransactionType = Field(..., description="BUY or SELL")
    shares: float = Field(..., gt=0)
    price: float = Field(..., gt=0)
    fees: float = Field(default=0.0, ge=0)
    total: float | None = Field(
        default=None,
        ge=0,
        description="Cash amount of the trade; computed as shares * price + fees when omitted",
    )
    date: dt.date
    notes: str | None = Field(default=None, max_length=255)


class TransactionSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "symbol": "VWCE",
                "type": "BUY",
                "shares": 10,
                "price": 100.0,
                "fees": 1.5,
                "total": 1001.5,
                "date": "2024-03-01",
                "notes": "First purchase",
            }
        },
    )

    id: int
    symbol: str
    type: TransactionKind
    shares: float
    price: float
    fees: float
    total: float
    date: dt.date
    notes: str | None = None


class DividendCreateRequest(BaseModel):
    symbol: Symbol = Field(..., examples=["VWCE"])
    amount: float = Field(..., gt=0)
    date: dt.date
    type: DividendType = DividendType.DIVIDEND


class DividendSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    symbol: str
    amount: float
    date: dt.date
    type: DividendType


class DcaPlanCreateRequest(BaseModel):
    symbol: Symbol = Field(..., examples=["VWCE"])
    amount: float = Field(..., gt=0)
    frequency: DcaFrequency = DcaFrequency.MONTHLY
    next_date: dt.date


class DcaPlanSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    symbol: str
    amount: float
    frequency: DcaFrequency
    next_date: dt.date


class StockCreateRequest(BaseModel):
    symbol: Symbol = Field(..., examples=["VWCE"])
    company_name: str = Field(..., min_length=1, max_length=128, examples=["Vanguard FTSE All-World"])
    sector: str | None = Field(default=None, max_length=64)
    current_price: float | None = Field(default=None, ge=0)


class StockUpdateRequest(BaseModel):
    company_name: str | None = Field(default=None, min_length=1, max_length=128)
    sector: str | None = Field(default=None, max_length=64)
    current_price: float | None = Field(default=None, ge=0)


class StockSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    symbol: str
    company_name: str
    sector: str | None = None
    current_price: float | None = None


class SettingsSchema(BaseModel):
    monthly_budget: float
    base_currency: str


class SettingsUpdateRequest(BaseModel):
    monthly_budget: float = Field(..., ge=0, examples=[1000])


__all__ = [
    "DcaPlanCreateRequest",
    "DcaPlanSchema",
    "DividendCreateRequest",
    "DividendSchema",
    "SettingsSchema",
    "SettingsUpdateRequest",
    "StockCreateRequest",
    "StockSchema",
    "StockUpdateRequest",
    "Symbol",
    "TransactionType",
    "TransactionCreateRequest",
    "TransactionSchema",
]
