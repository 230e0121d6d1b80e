"""JSON export and import of the tracker's data.

The document layout matches the web client's save file: camelCase section
names (``dcaPlans``, ``monthlyBudget``, ``exportDate``) and one object per
stored record. Record ids are written on export but ignored on import so the
database assigns fresh ones.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from investment_tracker.models import DcaPlan, Dividend, Transaction
from investment_tracker.schemas import (
    DataDocument,
    DcaPlanCreateRequest,
    DividendCreateRequest,
    ImportResult,
    TransactionCreateRequest,
)

from . import portfolio as portfolio_service

logger = logging.getLogger(__name__)


def export_filename(today: dt.date) -> str:
    return f"investment_data_{today.isoformat()}.json"


def export_document(
    transactions: Sequence[Transaction],
    dividends: Sequence[Dividend],
    dca_plans: Sequence[DcaPlan],
    monthly_budget: Decimal,
    exported_at: dt.datetime | None = None,
) -> dict[str, Any]:
    """Build the JSON-ready export document from stored records."""

    document = DataDocument.model_validate(
        {
            "transactions": transactions,
            "dividends": dividends,
            "dcaPlans": dca_plans,
            "monthlyBudget": float(monthly_budget),
            "exportDate": exported_at or dt.datetime.now(dt.timezone.utc),
        },
        from_attributes=True,
    )
    return document.model_dump(mode="json", by_alias=True)


def parse_document(payload: Mapping[str, Any]) -> DataDocument:
    """Validate an import payload; raises ``pydantic.ValidationError`` when malformed."""

    return DataDocument.model_validate(payload)


async def collect_export(
    session: AsyncSession,
    default_budget: Decimal,
    exported_at: dt.datetime | None = None,
) -> dict[str, Any]:
    return export_document(
        await portfolio_service.list_transactions(session),
        await portfolio_service.list_dividends(session),
        await portfolio_service.list_dca_plans(session),
        await portfolio_service.get_monthly_budget(session, default_budget),
        exported_at,
    )


async def _insert_document(session: AsyncSession, document: DataDocument) -> float | None:
    for item in document.transactions:
        await portfolio_service.create_transaction(
            TransactionCreateRequest.model_validate(item.model_dump(exclude={"id"})),
            session,
            commit=False,
        )
    for item in document.dividends:
        await portfolio_service.create_dividend(
            DividendCreateRequest.model_validate(item.model_dump(exclude={"id"})),
            session,
            commit=False,
        )
    for item in document.dca_plans:
        await portfolio_service.create_dca_plan(
            DcaPlanCreateRequest.model_validate(item.model_dump(exclude={"id"})),
            session,
            commit=False,
        )
    if document.monthly_budget is None:
        return None
    return float(await portfolio_service.set_monthly_budget(document.monthly_budget, session, commit=False))


async def import_document(session: AsyncSession, document: DataDocument) -> ImportResult:
    """Insert every record of ``document`` and apply its monthly budget, if any.

    Records are appended to what is already stored; nothing is replaced. The
    whole document is written in one commit, so a record that fails leaves the
    database as it was.
    """

    try:
        budget = await _insert_document(session, document)
        await session.commit()
    except (ValueError, SQLAlchemyError):
        await session.rollback()
        raise

    result = ImportResult(
        transactions=len(document.transactions),
        dividends=len(document.dividends),
        dca_plans=len(document.dca_plans),
        monthly_budget=budget,
    )
    logger.info(
        "Imported %s transactions, %s dividends and %s DCA plans",
        result.transactions,
        result.dividends,
        result.dca_plans,
    )
    return result


__all__ = ["collect_export", "export_document", "export_filename", "import_document", "parse_document"]
