# finance_api/api/v1/routes/overview.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from finance_api.api.deps import get_current_user
from finance_api.api.responses import success
from finance_api.core.database import get_async_session
from finance_api.crud.budget import get_budgets_for_user, with_spending
from finance_api.crud.pot import get_pots_for_user
from finance_api.crud.recurring_bill import get_bills_with_status
from finance_api.crud.transaction import get_income_and_expenses, get_recent_transactions
from finance_api.models.user import User
from finance_api.schemas.overview import (
    BalanceRead,
    BalanceSummary,
    BudgetsOverview,
    Overview,
    PotsOverview,
    TransactionsOverview,
)
from finance_api.schemas.pot import PotRead
from finance_api.schemas.transaction import TransactionRead
from finance_api.utils import periods
from finance_api.utils.bills import summarize_bills

router = APIRouter(prefix="/overview", tags=["overview"])

@router.get("")
async def read_overview(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Dashboard summary: balance, pots, budgets, recent transactions and bills."""
    now = periods.utcnow()
    income, expenses = await get_income_and_expenses(user.id, db)

    pots = await get_pots_for_user(user.id, db)
    budgets = await get_budgets_for_user(user.id, db)
    recent = await get_recent_transactions(db, user.id, limit=5)
    bills = await get_bills_with_status(user.id, db, now)

    overview = Overview(
        balance=BalanceSummary(current=user.balance, income=income, expenses=expenses),
        pots=PotsOverview(
            total_saved=round(sum(p.total for p in pots), 2),
            items=[PotRead.model_validate(p) for p in pots[:4]],
        ),
        budgets=BudgetsOverview(
            items=[await with_spending(b, db, now, include_latest=False) for b in budgets],
        ),
        transactions=TransactionsOverview(
            recent=[TransactionRead.model_validate(tx) for tx in recent],
        ),
        recurring_bills=summarize_bills(bills),
    )
    return success(overview)

@router.get("/balance")
async def read_balance(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    income, expenses = await get_income_and_expenses(user.id, db)
    return success(BalanceRead(current_balance=user.balance, income=income, expenses=expenses))
