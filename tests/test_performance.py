from __future__ import annotations

from datetime import date
from decimal import Decimal

from investment_tracker.services.performance import (
    UNCLASSIFIED_SECTOR,
    DcaPlanInput,
    DividendInput,
    allocation_by_sector,
    allocation_by_symbol,
    dca_budget_allocation,
    invested_timeline,
    summarize_dividends,
    summarize_performance,
)
from investment_tracker.services.positions import TransactionInput, aggregate


def _tx(id: str, symbol: str, type: str, shares: str, price: str, when: date) -> TransactionInput:
    return TransactionInput(
        id=id, symbol=symbol, type=type, shares=Decimal(shares), price=Decimal(price), date=when
    )


def _positions():
    transactions = [
        _tx("1", "ALO", "BUY", "10", "10", date(2025, 1, 2)),
        _tx("2", "VWCG", "BUY", "5", "20", date(2025, 1, 3)),
    ]
    return aggregate(transactions, {"ALO": Decimal("15"), "VWCG": Decimal("18")})


def test_summary_totals_and_best_performer():
    dividends = [
        DividendInput(symbol="ALO", amount=Decimal("12.5"), date=date(2025, 1, 15)),
        DividendInput(symbol="VWCG", amount=Decimal("7.5"), date=date(2025, 2, 15)),
    ]

    summary = summarize_performance(_positions(), dividends)

    assert summary.total_invested == Decimal("200")
    assert summary.total_value == Decimal("240")
    assert summary.total_gain_loss == Decimal("40")
    assert summary.total_gain_loss_percent == Decimal("20")
    assert summary.total_dividends == Decimal("20")
    assert summary.total_return == Decimal("60")
    assert summary.dividend_yield_percent == Decimal("10")
    assert summary.best_performer is not None
    assert summary.best_performer.symbol == "ALO"


def test_summary_of_empty_portfolio_is_zero():
    summary = summarize_performance([])

    assert summary.total_invested == Decimal("0")
    assert summary.total_gain_loss_percent == Decimal("0")
    assert summary.dividend_yield_percent == Decimal("0")
    assert summary.best_performer is None


def test_allocation_by_symbol_sums_to_hundred():
    slices = allocation_by_symbol(_positions())

    assert [s.name for s in slices] == ["ALO", "VWCG"]
    assert slices[0].value == Decimal("150")
    assert slices[0].percent == Decimal("62.5")
    assert slices[1].percent == Decimal("37.5")


def test_allocation_by_sector_groups_unknown_symbols():
    slices = allocation_by_sector(_positions(), {"ALO": "Industrials"})

    assert [(s.name, s.value) for s in slices] == [
        ("Industrials", Decimal("150")),
        (UNCLASSIFIED_SECTOR, Decimal("90")),
    ]


def test_allocation_of_nothing_is_empty():
    assert allocation_by_symbol([]) == []


def test_timeline_sorts_by_date_and_keeps_one_point_per_day():
    transactions = [
        _tx("3", "ALO", "SELL", "5", "12", date(2025, 3, 1)),
        _tx("1", "ALO", "BUY", "10", "10", date(2025, 1, 1)),
        _tx("2", "VWCG", "BUY", "2", "50", date(2025, 1, 1)),
    ]

    points = invested_timeline(transactions)

    assert [(p.date, p.invested) for p in points] == [
        (date(2025, 1, 1), Decimal("200")),
        (date(2025, 3, 1), Decimal("150")),
    ]


def test_dividend_summary():
    dividends = [
        DividendInput(symbol="ALO", amount=Decimal("10"), date=date(2025, 1, 15)),
        DividendInput(symbol="ALO", amount=Decimal("5"), date=date(2025, 3, 10)),
        DividendInput(symbol="VWCG", amount=Decimal("15"), date=date(2025, 3, 20)),
    ]

    summary = summarize_dividends(dividends, today=date(2025, 3, 31))

    assert summary.total == Decimal("30")
    assert summary.this_month == Decimal("20")
    assert summary.monthly_average == Decimal("15")
    assert summary.count == 3
    assert summary.by_symbol == {"ALO": Decimal("15"), "VWCG": Decimal("15")}


def test_dividend_summary_without_dividends():
    summary = summarize_dividends([], today=date(2025, 3, 31))

    assert summary.total == Decimal("0")
    assert summary.monthly_average == Decimal("0")
    assert summary.by_symbol == {}


def test_dca_budget_allocation_adds_plan_amounts():
    plans = [
        DcaPlanInput(symbol="VWCG", amount=Decimal("100")),
        DcaPlanInput(symbol="ALO", amount=Decimal("150"), frequency="weekly"),
    ]

    allocation = dca_budget_allocation(plans, Decimal("1000"))

    assert allocation.allocated == Decimal("250")
    assert allocation.remaining == Decimal("750")
    assert allocation.percent_allocated == Decimal("25")


def test_dca_budget_allocation_with_zero_budget():
    allocation = dca_budget_allocation([DcaPlanInput(symbol="ALO", amount=Decimal("50"))], Decimal("0"))

    assert allocation.remaining == Decimal("-50")
    assert allocation.percent_allocated == Decimal("0")
