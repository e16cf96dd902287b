# finance_api/api/v1/routes/budgets.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_api.api.deps import get_current_user
from finance_api.api.responses import success
from finance_api.core.database import get_async_session
from finance_api.core.errors import NotFoundError
from finance_api.crud.budget import (
    create_budget_for_user,
    delete_budget,
    get_budget_by_id,
    get_budgets_for_user,
    update_budget,
    with_spending,
)
from finance_api.models.user import User
from finance_api.schemas.budget import BudgetCreate, BudgetUpdate

router = APIRouter(prefix="/budgets", tags=["budgets"])

async def _get_owned_budget(budget_id: uuid.UUID, user: User, db: AsyncSession):
    budget = await get_budget_by_id(budget_id, user.id, db)
    if not budget:
        raise NotFoundError("Budget")
    return budget

@router.get("")
async def read_budgets(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    budgets = await get_budgets_for_user(user.id, db)
    return success({"budgets": [await with_spending(b, db) for b in budgets]})

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_budget(
    budget_in: BudgetCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    budget = await create_budget_for_user(user.id, budget_in, db)
    return success({"budget": await with_spending(budget, db)}, "Budget created")

@router.get("/{budget_id}")
async def read_budget(
    budget_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    budget = await _get_owned_budget(budget_id, user, db)
    return success({"budget": await with_spending(budget, db)})

@router.put("/{budget_id}")
@router.patch("/{budget_id}")
async def update_budget_endpoint(
    budget_id: uuid.UUID,
    budget_in: BudgetUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    budget = await _get_owned_budget(budget_id, user, db)
    budget = await update_budget(budget, budget_in, db)
    return success({"budget": await with_spending(budget, db)}, "Budget updated")

@router.delete("/{budget_id}")
async def delete_budget_endpoint(
    budget_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    budget = await _get_owned_budget(budget_id, user, db)
    await delete_budget(budget, db)
    return success(message="Budget deleted")
