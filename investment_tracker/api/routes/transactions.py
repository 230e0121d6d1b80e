"""Transaction log endpoints. Transactions are append-only: no update route."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from investment_tracker.api.dependencies import get_db
from investment_tracker.schemas import TransactionCreateRequest, TransactionSchema
from investment_tracker.services import portfolio as portfolio_service

router = APIRouter()


@router.get("", response_model=list[TransactionSchema])
async def get_transactions(session: AsyncSession = Depends(get_db)) -> list[TransactionSchema]:
    transactions = await portfolio_service.list_transactions(session)
    return [TransactionSchema.model_validate(tx) for tx in transactions]


@router.post("", response_model=TransactionSchema, status_code=status.HTTP_201_CREATED)
async def post_transaction(
    payload: TransactionCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> TransactionSchema:
    try:
        tx = await portfolio_service.create_transaction(payload, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return TransactionSchema.model_validate(tx)


@router.get("/{transaction_id}", response_model=TransactionSchema)
async def get_transaction(transaction_id: int, session: AsyncSession = Depends(get_db)) -> TransactionSchema:
    try:
        tx = await portfolio_service.get_transaction(transaction_id, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return TransactionSchema.model_validate(tx)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(transaction_id: int, session: AsyncSession = Depends(get_db)) -> Response:
    try:
        await portfolio_service.delete_transaction(transaction_id, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
