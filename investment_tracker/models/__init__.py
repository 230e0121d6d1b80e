"""Database model exports."""

from .portfolio import (
    TRANSACTION_TYPES,
    AppSetting,
    DcaFrequency,
    DcaPlan,
    Dividend,
    DividendType,
    Stock,
    Transaction,
    TransactionKind,
)

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
