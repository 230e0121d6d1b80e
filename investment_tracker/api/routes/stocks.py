"""Stock catalogue endpoints, addressed by symbol."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from investment_tracker.api.dependencies import get_db
from investment_tracker.schemas import StockCreateRequest, StockSchema, StockUpdateRequest
from investment_tracker.services import portfolio as portfolio_service

router = APIRouter()


@router.get("", response_model=list[StockSchema])
async def get_stocks(session: AsyncSession = Depends(get_db)) -> list[StockSchema]:
    stocks = await portfolio_service.list_stocks(session)
    return [StockSchema.model_validate(stock) for stock in stocks]


@router.post("", response_model=StockSchema, status_code=status.HTTP_201_CREATED)
async def post_stock(payload: StockCreateRequest, session: AsyncSession = Depends(get_db)) -> StockSchema:
    try:
        stock = await portfolio_service.create_stock(payload, session)
    except portfolio_service.DuplicateStockError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return StockSchema.model_validate(stock)


@router.get("/{symbol}", response_model=StockSchema)
async def get_stock(symbol: str, session: AsyncSession = Depends(get_db)) -> StockSchema:
    try:
        stock = await portfolio_service.get_stock(symbol, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return StockSchema.model_validate(stock)


@router.put("/{symbol}", response_model=StockSchema)
async def put_stock(
    symbol: str,
    payload: StockUpdateRequest,
    session: AsyncSession = Depends(get_db),
) -> StockSchema:
    try:
        stock = await portfolio_service.update_stock(symbol, payload, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return StockSchema.model_validate(stock)


@router.delete("/{symbol}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stock(symbol: str, session: AsyncSession = Depends(get_db)) -> Response:
    try:
        await portfolio_service.delete_stock(symbol, session)
    except portfolio_service.StockInUseError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
