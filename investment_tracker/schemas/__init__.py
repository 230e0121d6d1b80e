"""Pydantic schema exports."""

from .analytics import (
    AllocationResponse,
    AllocationSliceSchema,
    BudgetAllocationSchema,
    DividendSummarySchema,
    OversoldPositionSchema,
    PerformanceSchema,
    PositionSchema,
    PositionsResponse,
    TimelinePointSchema,
)
from .portfolio import (
    DcaPlanCreateRequest,
    DcaPlanSchema,
    DividendCreateRequest,
    DividendSchema,
    SettingsSchema,
    SettingsUpdateRequest,
    StockCreateRequest,
    StockSchema,
    StockUpdateRequest,
    TransactionCreateRequest,
    TransactionSchema,
)
from .transfer import DataDocument, ExportedDcaPlan, ExportedDividend, ExportedTransaction, ImportResult

__all__ = [
    "AllocationResponse",
    "AllocationSliceSchema",
    "BudgetAllocationSchema",
    "DataDocument",
    "DcaPlanCreateRequest",
    "DcaPlanSchema",
    "DividendCreateRequest",
    "DividendSchema",
    "DividendSummarySchema",
    "ExportedDcaPlan",
    "ExportedDividend",
    "ExportedTransaction",
    "ImportResult",
    "OversoldPositionSchema",
    "PerformanceSchema",
    "PositionSchema",
    "PositionsResponse",
    "SettingsSchema",
    "SettingsUpdateRequest",
    "StockCreateRequest",
    "StockSchema",
    "StockUpdateRequest",
    "TimelinePointSchema",
    "TransactionCreateRequest",
    "TransactionSchema",
]
