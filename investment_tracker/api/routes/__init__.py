"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from .data import router as data_router
from .dca import router as dca_router
from .dividends import router as dividends_router
from .portfolio import router as portfolio_router
from .settings import router as settings_router
from .stocks import router as stocks_router
from .transactions import router as transactions_router

api_router = APIRouter()
api_router.include_router(transactions_router, prefix="/transactions", tags=["transactions"])
api_router.include_router(dividends_router, prefix="/dividends", tags=["dividends"])
api_router.include_router(dca_router, prefix="/dca-plans", tags=["dca"])
api_router.include_router(settings_router, prefix="/settings", tags=["settings"])
api_router.include_router(stocks_router, prefix="/stocks", tags=["stocks"])
api_router.include_router(portfolio_router, prefix="/portfolio", tags=["portfolio"])
api_router.include_router(data_router, prefix="/data", tags=["data"])

__all__ = ["api_router"]
