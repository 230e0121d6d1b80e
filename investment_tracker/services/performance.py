"""Portfolio summary views derived from positions, dividends and DCA plans."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from .positions import HUNDRED, ZERO, Position, PositionLedger, TransactionInput

UNCLASSIFIED_SECTOR = "Unclassified"


@dataclass(frozen=True)
class DividendInput:
    symbol: str
    amount: Decimal
    date: date
    type: str = "dividend"


@dataclass(frozen=True)
class DcaPlanInput:
    symbol: str
    amount: Decimal
    frequency: str = "monthly"


@dataclass(frozen=True)
class PerformanceSummary:
    total_invested: Decimal
    total_value: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal
    total_dividends: Decimal
    total_return: Decimal
    dividend_yield_percent: Decimal
    best_performer: Position | None
    positions: list[Position]


@dataclass(frozen=True)
class AllocationSlice:
    name: str
    value: Decimal
    percent: Decimal


@dataclass(frozen=True)
class TimelinePoint:
    date: date
    invested: Decimal


@dataclass(frozen=True)
class DividendSummary:
    total: Decimal
    this_month: Decimal
    monthly_average: Decimal
    count: int
    by_symbol: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class BudgetAllocation:
    monthly_budget: Decimal
    allocated: Decimal
    remaining: Decimal
    percent_allocated: Decimal


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    return part / whole * HUNDRED if whole else ZERO


def summarize_performance(
    positions: Sequence[Position],
    dividends: Iterable[DividendInput] = (),
) -> PerformanceSummary:
    total_invested = sum((p.total_cost for p in positions), ZERO)
    total_value = sum((p.current_value for p in positions), ZERO)
    total_dividends = sum((d.amount for d in dividends), ZERO)
    gain_loss = total_value - total_invested
    best = max(positions, key=lambda p: p.gain_loss_percent) if positions else None
    return PerformanceSummary(
        total_invested=total_invested,
        total_value=total_value,
        total_gain_loss=gain_loss,
        total_gain_loss_percent=_percent(gain_loss, total_invested),
        total_dividends=total_dividends,
        total_return=total_value + total_dividends - total_invested,
        dividend_yield_percent=_percent(total_dividends, total_invested),
        best_performer=best,
        positions=list(positions),
    )


def _slices(values: Mapping[str, Decimal]) -> list[AllocationSlice]:
    total = sum(values.values(), ZERO)
    return [
        AllocationSlice(name=name, value=value, percent=_percent(value, total))
        for name, value in values.items()
    ]


def allocation_by_symbol(positions: Sequence[Position]) -> list[AllocationSlice]:
    """Share of current value held in each symbol, in position order."""

    return _slices({p.symbol: p.current_value for p in positions})


def allocation_by_sector(
    positions: Sequence[Position],
    sectors: Mapping[str, str | None],
) -> list[AllocationSlice]:
    """Share of current value per catalogue sector; unknown symbols are unclassified."""

    grouped: dict[str, Decimal] = {}
    for position in positions:
        sector = sectors.get(position.symbol) or UNCLASSIFIED_SECTOR
        grouped[sector] = grouped.get(sector, ZERO) + position.current_value
    return _slices(grouped)


def invested_timeline(transactions: Iterable[TransactionInput]) -> list[TimelinePoint]:
    """Cost basis held at the end of each trading date, oldest first.

    Unlike :func:`aggregate`, this view sorts by ``(date, id)`` before folding
    because a timeline is only meaningful in chronological order.
    """

    ordered = sorted(transactions, key=lambda tx: (tx.date, _sort_id(tx.id)))
    ledger = PositionLedger()
    points: list[TimelinePoint] = []
    for tx in ordered:
        ledger.apply(tx)
        point = TimelinePoint(date=tx.date, invested=ledger.cost_basis)
        if points and points[-1].date == tx.date:
            points[-1] = point
        else:
            points.append(point)
    return points


def _sort_id(value: str) -> tuple[int, str]:
    # Numeric ids sort numerically, anything else lexically after them.
    return (int(value), "") if value.isdigit() else (1 << 62, value)


def summarize_dividends(dividends: Iterable[DividendInput], today: date) -> DividendSummary:
    items = list(dividends)
    total = sum((d.amount for d in items), ZERO)
    this_month = sum(
        (d.amount for d in items if d.date.year == today.year and d.date.month == today.month),
        ZERO,
    )
    months = {(d.date.year, d.date.month) for d in items}
    by_symbol: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for d in items:
        by_symbol[d.symbol] += d.amount
    return DividendSummary(
        total=total,
        this_month=this_month,
        monthly_average=total / len(months) if months else ZERO,
        count=len(items),
        by_symbol=dict(by_symbol),
    )


def dca_budget_allocation(plans: Iterable[DcaPlanInput], monthly_budget: Decimal) -> BudgetAllocation:
    """Sum of plan amounts against the monthly budget.

    Plan amounts are added as entered, whatever their frequency.
    """

    allocated = sum((plan.amount for plan in plans), ZERO)
    return BudgetAllocation(
        monthly_budget=monthly_budget,
        allocated=allocated,
        remaining=monthly_budget - allocated,
        percent_allocated=_percent(allocated, monthly_budget),
    )


__all__ = [
    "AllocationSlice",
    "BudgetAllocation",
    "DcaPlanInput",
    "DividendInput",
    "DividendSummary",
    "PerformanceSummary",
    "TimelinePoint",
    "UNCLASSIFIED_SECTOR",
    "allocation_by_sector",
    "allocation_by_symbol",
    "dca_budget_allocation",
    "invested_timeline",
    "summarize_dividends",
    "summarize_performance",
]
