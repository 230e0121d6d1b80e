from __future__ import annotations

import datetime as dt
from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from investment_tracker.db.init import init_database
from investment_tracker.db.session import Database
from investment_tracker.models import DcaFrequency, DcaPlan, Dividend, DividendType, Transaction, TransactionKind
from investment_tracker.schemas import DataDocument, ExportedTransaction
from investment_tracker.services import portfolio as portfolio_service
from investment_tracker.services.transfer import export_document, export_filename, import_document, parse_document


def test_export_filename_uses_iso_date():
    assert export_filename(dt.date(2025, 7, 4)) == "investment_data_2025-07-04.json"


def test_export_document_uses_client_field_names():
    transactions = [
        Transaction(
            id=1,
            symbol="ALO",
            type=TransactionKind.BUY,
            shares=Decimal("10"),
            price=Decimal("20"),
            fees=Decimal("1"),
            total=Decimal("201"),
            date=dt.date(2025, 1, 15),
        )
    ]
    dividends = [Dividend(id=2, symbol="ALO", amount=Decimal("3.5"), date=dt.date(2025, 2, 1), type=DividendType.DIVIDEND)]
    plans = [
        DcaPlan(id=3, symbol="VWCG", amount=Decimal("100"), frequency=DcaFrequency.MONTHLY, next_date=dt.date(2025, 3, 1))
    ]
    exported_at = dt.datetime(2025, 2, 28, 12, 0, tzinfo=dt.timezone.utc)

    document = export_document(transactions, dividends, plans, Decimal("500"), exported_at)

    assert set(document) == {"transactions", "dividends", "dcaPlans", "monthlyBudget", "exportDate"}
    assert document["transactions"][0]["type"] == "BUY"
    assert document["transactions"][0]["total"] == 201.0
    assert document["transactions"][0]["date"] == "2025-01-15"
    assert document["dividends"][0]["type"] == "dividend"
    assert document["dcaPlans"][0]["nextDate"] == "2025-03-01"
    assert document["dcaPlans"][0]["frequency"] == "monthly"
    assert document["monthlyBudget"] == 500.0
    assert document["exportDate"].startswith("2025-02-28T12:00:00")


def test_parse_document_treats_missing_sections_as_empty():
    document = parse_document({"transactions": [{"id": 7, "symbol": "alo", "type": "SELL", "shares": 1, "price": 2, "date": "2025-01-01"}]})

    assert document.dividends == []
    assert document.dca_plans == []
    assert document.monthly_budget is None
    assert document.transactions[0].symbol == "ALO"
    assert document.transactions[0].fees == 0.0


def test_parse_document_rejects_bad_records():
    with pytest.raises(ValidationError):
        parse_document({"dividends": [{"symbol": "ALO", "amount": -1, "date": "2025-01-01"}]})


def test_parse_document_accepts_lowercase_transaction_type():
    document = parse_document(
        {"transactions": [{"symbol": "ALO", "type": "buy", "shares": 1, "price": 2, "date": "2025-01-01"}]}
    )

    assert document.transactions[0].type is TransactionKind.BUY


def test_parse_document_applies_transaction_limits():
    base = {"symbol": "ALO", "type": "BUY", "shares": 1, "price": 2, "date": "2025-01-01"}

    with pytest.raises(ValidationError):
        parse_document({"transactions": [{**base, "notes": "x" * 300}]})
    with pytest.raises(ValidationError):
        parse_document({"transactions": [{**base, "total": -5}]})


def _database(tmp_path: Path) -> Database:
    return Database(url=f"sqlite+aiosqlite:///{tmp_path / 'transfer.db'}")


async def test_import_document_writes_everything_in_one_go(tmp_path: Path):
    database = _database(tmp_path)
    try:
        await init_database(database)
        document = parse_document(
            {
                "transactions": [{"symbol": "ALO", "type": "BUY", "shares": 2, "price": 10, "date": "2025-01-02"}],
                "dividends": [{"symbol": "ALO", "amount": 1.5, "date": "2025-02-01"}],
                "dcaPlans": [{"symbol": "ALO", "amount": 50, "frequency": "weekly", "nextDate": "2025-03-01"}],
                "monthlyBudget": 600,
            }
        )
        async with database.session() as session:
            result = await import_document(session, document)

        assert (result.transactions, result.dividends, result.dca_plans, result.monthly_budget) == (1, 1, 1, 600.0)
        async with database.session() as session:
            [tx] = await portfolio_service.list_transactions(session)
            assert tx.total == Decimal("20")
            assert len(await portfolio_service.list_dca_plans(session)) == 1
            assert await portfolio_service.get_monthly_budget(session, Decimal("1000")) == Decimal("600")
    finally:
        await database.dispose()


async def test_failed_import_leaves_database_untouched(tmp_path: Path):
    database = _database(tmp_path)
    try:
        await init_database(database)
        valid = ExportedTransaction(symbol="ALO", type="BUY", shares=1, price=10, date=dt.date(2025, 1, 2))
        # Built without validation so the failure happens while storing, after the first row.
        invalid = ExportedTransaction.model_construct(
            id=None,
            symbol="ALO",
            type=TransactionKind.BUY,
            shares=1.0,
            price=10.0,
            fees=0.0,
            total=None,
            date=dt.date(2025, 1, 3),
            notes="x" * 300,
        )
        document = DataDocument(transactions=[valid, invalid], monthlyBudget=50)

        async with database.session() as session:
            with pytest.raises(ValueError):
                await import_document(session, document)

        async with database.session() as session:
            assert await portfolio_service.list_transactions(session) == []
            assert await portfolio_service.get_monthly_budget(session, Decimal("1000")) == Decimal("1000")
    finally:
        await database.dispose()
