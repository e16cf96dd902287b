# finance_api/crud/budget.py
import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from finance_api.core.errors import AppError
from finance_api.crud.transaction import get_latest_expenses_in_category, get_spent_in_category
from finance_api.models.budget import Budget
from finance_api.schemas.budget import BudgetCreate, BudgetRead, BudgetUpdate, BudgetWithSpending
from finance_api.schemas.transaction import TransactionRead
from finance_api.utils.budgeting import budget_remaining

def _duplicate_budget() -> AppError:
    return AppError(
        "A budget with this category or theme already exists",
        status.HTTP_409_CONFLICT,
        "DUPLICATE_ERROR",
    )

async def get_budgets_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Budget]:
    result = await db.execute(
        select(Budget).where(Budget.user_id == user_id).order_by(Budget.created_at)
    )
    return list(result.scalars().all())

async def get_budget_by_id(budget_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Budget]:
    result = await db.execute(
        select(Budget).where(Budget.id == budget_id, Budget.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def get_budget_by_category(category: str, user_id: uuid.UUID, db: AsyncSession) -> Optional[Budget]:
    result = await db.execute(
        select(Budget).where(Budget.category == category, Budget.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_budget_for_user(user_id: uuid.UUID, budget_in: BudgetCreate, db: AsyncSession) -> Budget:
    if await get_budget_by_category(budget_in.category, user_id, db):
        raise AppError("Budget for this category already exists", status.HTTP_409_CONFLICT, "DUPLICATE_ERROR")

    new_budget = Budget(**budget_in.model_dump(), user_id=user_id)
    db.add(new_budget)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise _duplicate_budget()
    await db.refresh(new_budget)
    return new_budget

async def update_budget(budget: Budget, budget_in: BudgetUpdate, db: AsyncSession) -> Budget:
    for field, value in budget_in.changes().items():
        setattr(budget, field, value)
    db.add(budget)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise _duplicate_budget()
    await db.refresh(budget)
    return budget

async def delete_budget(budget: Budget, db: AsyncSession) -> None:
    await db.delete(budget)
    await db.commit()

async def with_spending(
    budget: Budget,
    db: AsyncSession,
    now: Optional[datetime] = None,
    include_latest: bool = True,
) -> BudgetWithSpending:
    """Attach this month's spending and the latest expenses to a budget."""
    spent = await get_spent_in_category(budget.user_id, budget.category, db, now)
    latest = []
    if include_latest:
        latest = await get_latest_expenses_in_category(budget.user_id, budget.category, db)
    return BudgetWithSpending(
        **BudgetRead.model_validate(budget).model_dump(),
        spent=spent,
        remaining=budget_remaining(budget.maximum, spent),
        latest_transactions=[TransactionRead.model_validate(tx) for tx in latest],
    )
