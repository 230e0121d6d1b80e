"""Persistence services for transactions, dividends, DCA plans, stocks and settings."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from investment_tracker.models import AppSetting, DcaPlan, Dividend, Stock, Transaction
from investment_tracker.schemas import (
    DcaPlanCreateRequest,
    DividendCreateRequest,
    StockCreateRequest,
    StockUpdateRequest,
    TransactionCreateRequest,
)

from .performance import DcaPlanInput, DividendInput
from .positions import TransactionInput

logger = logging.getLogger(__name__)

MONTHLY_BUDGET_KEY = "monthly_budget"


class DuplicateStockError(ValueError):
    """A stock with the same symbol is already in the catalogue."""


class StockInUseError(ValueError):
    """The stock is still referenced by recorded transactions."""


def _decimal(value: float | Decimal) -> Decimal:
    return Decimal(str(value))


async def _persist(session: AsyncSession, record: object, commit: bool) -> None:
    if commit:
        await session.commit()
        await session.refresh(record)
    else:
        await session.flush()


# Transactions


async def list_transactions(session: AsyncSession) -> list[Transaction]:
    """All transactions in insertion order."""

    result = await session.execute(select(Transaction).order_by(Transaction.id))
    return list(result.scalars().all())


async def get_transaction(transaction_id: int, session: AsyncSession) -> Transaction:
    tx = await session.get(Transaction, transaction_id)
    if tx is None:
        raise ValueError(f"Transaction {transaction_id} not found")
    return tx


async def create_transaction(
    payload: TransactionCreateRequest,
    session: AsyncSession,
    *,
    commit: bool = True,
) -> Transaction:
    """Store a transaction; with ``commit=False`` the row is only flushed."""

    shares = _decimal(payload.shares)
    price = _decimal(payload.price)
    fees = _decimal(payload.fees)
    total = _decimal(payload.total) if payload.total is not None else shares * price + fees

    tx = Transaction(
        symbol=payload.symbol.strip().upper(),
        type=payload.type,
        shares=shares,
        price=price,
        fees=fees,
        total=total,
        date=payload.date,
        notes=payload.notes,
    )
    session.add(tx)
    await _persist(session, tx, commit)
    logger.info("Recorded %s of %s %s (transaction %s)", tx.type.value, tx.shares, tx.symbol, tx.id)
    return tx


async def delete_transaction(transaction_id: int, session: AsyncSession) -> None:
    tx = await get_transaction(transaction_id, session)
    await session.delete(tx)
    await session.commit()
    logger.info("Deleted transaction %s (%s)", transaction_id, tx.symbol)


def transaction_inputs(transactions: list[Transaction]) -> list[TransactionInput]:
    """Convert stored rows into aggregator inputs, keeping their order."""

    return [
        TransactionInput(
            id=str(tx.id),
            symbol=tx.symbol,
            type=tx.type.value,
            shares=_decimal(tx.shares),
            price=_decimal(tx.price),
            date=tx.date,
            fees=_decimal(tx.fees),
            total=_decimal(tx.total) if tx.total is not None else None,
        )
        for tx in transactions
    ]


# Dividends


async def list_dividends(session: AsyncSession) -> list[Dividend]:
    result = await session.execute(select(Dividend).order_by(Dividend.date.desc(), Dividend.id.desc()))
    return list(result.scalars().all())


async def create_dividend(
    payload: DividendCreateRequest,
    session: AsyncSession,
    *,
    commit: bool = True,
) -> Dividend:
    record = Dividend(
        symbol=payload.symbol.strip().upper(),
        amount=_decimal(payload.amount),
        date=payload.date,
        type=payload.type,
    )
    session.add(record)
    await _persist(session, record, commit)
    logger.info("Recorded %s dividend of %s for %s", record.type.value, record.amount, record.symbol)
    return record


async def delete_dividend(dividend_id: int, session: AsyncSession) -> None:
    record = await session.get(Dividend, dividend_id)
    if record is None:
        raise ValueError(f"Dividend {dividend_id} not found")
    await session.delete(record)
    await session.commit()
    logger.info("Deleted dividend %s (%s)", dividend_id, record.symbol)


def dividend_inputs(dividends: list[Dividend]) -> list[DividendInput]:
    return [
        DividendInput(symbol=d.symbol, amount=_decimal(d.amount), date=d.date, type=d.type.value)
        for d in dividends
    ]


# DCA plans


async def list_dca_plans(session: AsyncSession) -> list[DcaPlan]:
    result = await session.execute(select(DcaPlan).order_by(DcaPlan.id))
    return list(result.scalars().all())


async def create_dca_plan(
    payload: DcaPlanCreateRequest,
    session: AsyncSession,
    *,
    commit: bool = True,
) -> DcaPlan:
    plan = DcaPlan(
        symbol=payload.symbol.strip().upper(),
        amount=_decimal(payload.amount),
        frequency=payload.frequency,
        next_date=payload.next_date,
    )
    session.add(plan)
    await _persist(session, plan, commit)
    logger.info("Created %s DCA plan of %s for %s", plan.frequency.value, plan.amount, plan.symbol)
    return plan


async def delete_dca_plan(plan_id: int, session: AsyncSession) -> None:
    plan = await session.get(DcaPlan, plan_id)
    if plan is None:
        raise ValueError(f"DCA plan {plan_id} not found")
    await session.delete(plan)
    await session.commit()
    logger.info("Deleted DCA plan %s (%s)", plan_id, plan.symbol)


def dca_plan_inputs(plans: list[DcaPlan]) -> list[DcaPlanInput]:
    return [
        DcaPlanInput(symbol=p.symbol, amount=_decimal(p.amount), frequency=p.frequency.value)
        for p in plans
    ]


# Stock catalogue


async def list_stocks(session: AsyncSession) -> list[Stock]:
    result = await session.execute(select(Stock).order_by(Stock.symbol))
    return list(result.scalars().all())


async def get_stock(symbol: str, session: AsyncSession) -> Stock:
    normalized = symbol.strip().upper()
    result = await session.execute(select(Stock).where(Stock.symbol == normalized))
    stock = result.scalars().first()
    if stock is None:
        raise ValueError(f"Stock {normalized} not found")
    return stock


async def create_stock(payload: StockCreateRequest, session: AsyncSession) -> Stock:
    normalized = payload.symbol.strip().upper()
    existing = (await session.execute(select(Stock).where(Stock.symbol == normalized))).scalars().first()
    if existing is not None:
        raise DuplicateStockError(f"Stock {normalized} already exists")

    stock = Stock(
        symbol=normalized,
        company_name=payload.company_name.strip(),
        sector=payload.sector.strip() if payload.sector else None,
        current_price=_decimal(payload.current_price) if payload.current_price is not None else None,
    )
    session.add(stock)
    await session.commit()
    await session.refresh(stock)
    logger.info("Added %s to the stock catalogue", stock.symbol)
    return stock


async def update_stock(symbol: str, payload: StockUpdateRequest, session: AsyncSession) -> Stock:
    """Apply only the fields present in ``payload``."""

    stock = await get_stock(symbol, session)
    changes = payload.model_dump(exclude_unset=True)
    if "company_name" in changes and changes["company_name"] is not None:
        stock.company_name = changes["company_name"].strip()
    if "sector" in changes:
        stock.sector = changes["sector"].strip() if changes["sector"] else None
    if "current_price" in changes:
        price = changes["current_price"]
        stock.current_price = _decimal(price) if price is not None else None
    await session.commit()
    await session.refresh(stock)
    return stock


async def delete_stock(symbol: str, session: AsyncSession) -> None:
    stock = await get_stock(symbol, session)
    in_use = await session.scalar(
        select(func.count()).select_from(Transaction).where(Transaction.symbol == stock.symbol)
    )
    if in_use:
        raise StockInUseError(f"Stock {stock.symbol} is referenced by {in_use} transaction(s)")
    await session.delete(stock)
    await session.commit()
    logger.info("Removed %s from the stock catalogue", stock.symbol)


async def stock_sectors(session: AsyncSession) -> dict[str, str | None]:
    return {stock.symbol: stock.sector for stock in await list_stocks(session)}


# Settings


async def get_monthly_budget(session: AsyncSession, default: Decimal) -> Decimal:
    """Saved budget, or ``default`` (the configured budget) when none is saved."""

    record = await session.get(AppSetting, MONTHLY_BUDGET_KEY)
    if record is None or record.value is None:
        return _decimal(default)
    return _decimal(record.value)


async def set_monthly_budget(
    amount: float | Decimal,
    session: AsyncSession,
    *,
    commit: bool = True,
) -> Decimal:
    value = _decimal(amount)
    if value < 0:
        raise ValueError("Monthly budget must not be negative")
    record = await session.get(AppSetting, MONTHLY_BUDGET_KEY)
    if record is None:
        record = AppSetting(key=MONTHLY_BUDGET_KEY, description="Monthly DCA budget")
        session.add(record)
    # JSON column; keep the exact decimal text.
    record.value = str(value)
    if commit:
        await session.commit()
    else:
        await session.flush()
    logger.info("Monthly budget set to %s", value)
    return value


__all__ = [
    "DuplicateStockError",
    "MONTHLY_BUDGET_KEY",
    "StockInUseError",
    "create_dca_plan",
    "create_dividend",
    "create_stock",
    "create_transaction",
    "dca_plan_inputs",
    "delete_dca_plan",
    "delete_dividend",
    "delete_stock",
    "delete_transaction",
    "dividend_inputs",
    "get_monthly_budget",
    "get_stock",
    "get_transaction",
    "list_dca_plans",
    "list_dividends",
    "list_stocks",
    "list_transactions",
    "set_monthly_budget",
    "stock_sectors",
    "transaction_inputs",
    "update_stock",
]
