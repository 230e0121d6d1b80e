"""DCA plan endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from investment_tracker.api.dependencies import get_app_settings, get_db
from investment_tracker.config import AppSettings
from investment_tracker.schemas import BudgetAllocationSchema, DcaPlanCreateRequest, DcaPlanSchema
from investment_tracker.services import portfolio as portfolio_service
from investment_tracker.services.performance import dca_budget_allocation

router = APIRouter()


@router.get("", response_model=list[DcaPlanSchema])
async def get_dca_plans(session: AsyncSession = Depends(get_db)) -> list[DcaPlanSchema]:
    plans = await portfolio_service.list_dca_plans(session)
    return [DcaPlanSchema.model_validate(plan) for plan in plans]


@router.post("", response_model=DcaPlanSchema, status_code=status.HTTP_201_CREATED)
async def post_dca_plan(
    payload: DcaPlanCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> DcaPlanSchema:
    try:
        plan = await portfolio_service.create_dca_plan(payload, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return DcaPlanSchema.model_validate(plan)


@router.get("/budget", response_model=BudgetAllocationSchema)
async def get_budget_allocation(
    session: AsyncSession = Depends(get_db),
    settings: AppSettings = Depends(get_app_settings),
) -> BudgetAllocationSchema:
    plans = await portfolio_service.list_dca_plans(session)
    budget = await portfolio_service.get_monthly_budget(session, settings.default_monthly_budget)
    allocation = dca_budget_allocation(portfolio_service.dca_plan_inputs(plans), budget)
    return BudgetAllocationSchema.model_validate(allocation)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_dca_plan(plan_id: int, session: AsyncSession = Depends(get_db)) -> Response:
    try:
        await portfolio_service.delete_dca_plan(plan_id, session)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
