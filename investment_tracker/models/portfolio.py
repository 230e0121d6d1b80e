"""Transaction, dividend, DCA plan, stock catalogue and settings models."""

from __future__ import annotations

import datetime as dt
import enum
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, Date, DateTime, Enum, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from investment_tracker.db.base import Base


class TransactionKind(str, enum.Enum):
    BUY = "BUY"
    SELL = "SELL"


class DividendType(str, enum.Enum):
    DIVIDEND = "dividend"
    SPECIAL = "special"
    DISTRIBUTION = "distribution"


class DcaFrequency(str, enum.Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


TRANSACTION_TYPES = tuple(kind.value for kind in TransactionKind)


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Transaction(Base):
    """A recorded buy or sell. Rows are never updated once written."""

    __tablename__ = "transaction"
    __table_args__ = (Index("ix_transaction_symbol_date", "symbol", "date"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    symbol: Mapped[str] = mapped_column(String(20), index=True)
    type: Mapped[TransactionKind] = mapped_column(
        Enum(TransactionKind, name="transaction_type", values_callable=lambda e: [m.value for m in e])
    )
    shares: Mapped[Decimal] = mapped_column(Numeric(18, 6))
    price: Mapped[Decimal] = mapped_column(Numeric(18, 6))
    fees: Mapped[Decimal] = mapped_column(Numeric(18, 6), default=Decimal("0"))
    total: Mapped[Decimal] = mapped_column(Numeric(18, 6))
    date: Mapped[dt.date] = mapped_column(Date, index=True)
    notes: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class Dividend(Base):
    __tablename__ = "dividend"
    __table_args__ = (Index("ix_dividend_symbol_date", "symbol", "date"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    symbol: Mapped[str] = mapped_column(String(20), index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 6))
    date: Mapped[dt.date] = mapped_column(Date)
    type: Mapped[DividendType] = mapped_column(
        Enum(DividendType, name="dividend_type", values_callable=lambda e: [m.value for m in e]),
        default=DividendType.DIVIDEND,
    )
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class DcaPlan(Base):
    __tablename__ = "dca_plan"

    id: Mapped[int] = mapped_column(primary_key=True)
    symbol: Mapped[str] = mapped_column(String(20), index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 6))
    frequency: Mapped[DcaFrequency] = mapped_column(
        Enum(DcaFrequency, name="dca_frequency", values_callable=lambda e: [m.value for m in e]),
        default=DcaFrequency.MONTHLY,
    )
    next_date: Mapped[dt.date] = mapped_column(Date)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class Stock(Base):
    __tablename__ = "stock"

    id: Mapped[int] = mapped_column(primary_key=True)
    symbol: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    company_name: Mapped[str] = mapped_column(String(128))
    sector: Mapped[str | None] = mapped_column(String(64), nullable=True)
    current_price: Mapped[Decimal | None] = mapped_column(Numeric(18, 6), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class AppSetting(Base):
    """Free-form key/value settings, e.g. the monthly DCA budget."""

    __tablename__ = "app_setting"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


__all__ = [
    "AppSetting",
    "DcaFrequency",
    "DcaPlan",
    "Dividend",
    "DividendType",
    "Stock",
    "Transaction",
    "TransactionKind",
    "TRANSACTION_TYPES",
]
