# finance_api/crud/transaction.py
import logging
import math
import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import and_, asc, desc, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from finance_api.core.constants import ALL_TRANSACTIONS, CATEGORIES, DEFAULT_AVATAR, SORT_OPTIONS
from finance_api.crud.user import adjust_balance
from finance_api.models.transaction import Transaction
from finance_api.schemas.transaction import TransactionCreate, TransactionUpdate
from finance_api.schemas.validators import sanitize_string
from finance_api.utils import periods
from finance_api.utils.balance import balance_delta, balance_effect

logger = logging.getLogger(__name__)

def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

async def get_transactions_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    search: Optional[str] = None,
    sort: str = "Latest",
    category: Optional[str] = None,
) -> Tuple[List[Transaction], int]:
    """Return one page of the user's transactions and the total number of matches."""
    conditions = [Transaction.user_id == user_id]
    if search:
        pattern = f"%{_escape_like(sanitize_string(search))}%"
        conditions.append(Transaction.name.ilike(pattern, escape="\\"))
    if category and category != ALL_TRANSACTIONS and category in CATEGORIES:
        conditions.append(Transaction.category == category)

    column_name, descending = SORT_OPTIONS.get(sort, SORT_OPTIONS["Latest"])
    column = getattr(Transaction, column_name)
    order = desc(column) if descending else asc(column)

    total_result = await db.execute(
        select(func.count()).select_from(Transaction).where(and_(*conditions))
    )
    total = total_result.scalar_one()

    result = await db.execute(
        select(Transaction)
        .where(and_(*conditions))
        .order_by(order, desc(Transaction.created_at))
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total

def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0

async def get_recent_transactions(db: AsyncSession, user_id: uuid.UUID, limit: int = 5) -> List[Transaction]:
    """Get the most recent transactions for a user with optional limit"""
    result = await db.execute(
        select(Transaction)
        .where(Transaction.user_id == user_id)
        .order_by(desc(Transaction.date))
        .limit(limit)
    )
    return list(result.scalars().all())

async def get_transaction_by_id(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return result.scalar_one_or_none()

def _effect(tx: Transaction, now: Optional[datetime] = None) -> float:
    return balance_effect(tx.amount, tx.date, tx.is_template, now)

async def create_transaction_for_user(user_id: uuid.UUID, tx_in: TransactionCreate, db: AsyncSession) -> Transaction:
    data = tx_in.model_dump()
    data["avatar"] = data.get("avatar") or DEFAULT_AVATAR
    new_tx = Transaction(**data, user_id=user_id)
    db.add(new_tx)

    delta = _effect(new_tx, periods.utcnow())
    await adjust_balance(user_id, delta, db)
    await db.commit()
    await db.refresh(new_tx)
    if delta:
        logger.info(f"Balance of user {user_id} moved by {delta} (new transaction {new_tx.id})")
    return new_tx

async def update_transaction(tx: Transaction, tx_in: TransactionUpdate, db: AsyncSession) -> Transaction:
    now = periods.utcnow()
    old_effect = _effect(tx, now)
    for field, value in tx_in.changes().items():
        setattr(tx, field, value)
    db.add(tx)

    # Reverse the old contribution, apply the new one
    delta = balance_delta(old_effect, _effect(tx, now))
    await adjust_balance(tx.user_id, delta, db)
    await db.commit()
    await db.refresh(tx)
    if delta:
        logger.info(f"Balance of user {tx.user_id} moved by {delta} (updated transaction {tx.id})")
    return tx

async def delete_transaction(tx: Transaction, db: AsyncSession) -> None:
    delta = -_effect(tx, periods.utcnow())
    await adjust_balance(tx.user_id, delta, db)
    await db.delete(tx)
    await db.commit()
    if delta:
        logger.info(f"Balance of user {tx.user_id} moved by {delta} (deleted transaction {tx.id})")

async def get_income_and_expenses(user_id: uuid.UUID, db: AsyncSession) -> Tuple[float, float]:
    """All-time income (sum of positives) and expenses (absolute sum of negatives)."""
    result = await db.execute(
        select(
            func.coalesce(func.sum(Transaction.amount).filter(Transaction.amount > 0), 0.0),
            func.coalesce(func.sum(Transaction.amount).filter(Transaction.amount < 0), 0.0),
        ).where(Transaction.user_id == user_id, Transaction.is_template.is_(False))
    )
    income, expenses = result.one()
    return float(income), abs(float(expenses))

async def get_spent_in_category(
    user_id: uuid.UUID,
    category: str,
    db: AsyncSession,
    now: Optional[datetime] = None,
) -> float:
    """Absolute sum of this month's real expenses in ``category``."""
    start, end = periods.current_month_range(now)
    result = await db.execute(
        select(func.coalesce(func.sum(Transaction.amount), 0.0)).where(
            Transaction.user_id == user_id,
            Transaction.category == category,
            Transaction.amount < 0,
            Transaction.is_template.is_(False),
            Transaction.date >= start,
            Transaction.date < end,
        )
    )
    return round(abs(float(result.scalar_one())), 2)

async def get_latest_expenses_in_category(
    user_id: uuid.UUID,
    category: str,
    db: AsyncSession,
    limit: int = 3,
) -> List[Transaction]:
    result = await db.execute(
        select(Transaction)
        .where(
            Transaction.user_id == user_id,
            Transaction.category == category,
            Transaction.amount < 0,
            Transaction.is_template.is_(False),
        )
        .order_by(desc(Transaction.date))
        .limit(limit)
    )
    return list(result.scalars().all())

async def get_paid_bill_names(
    user_id: uuid.UUID,
    names: List[str],
    db: AsyncSession,
    now: Optional[datetime] = None,
) -> set:
    """Names among ``names`` with a recurring payment dated in the current month."""
    if not names:
        return set()
    start, end = periods.current_month_range(now)
    result = await db.execute(
        select(Transaction.name).distinct().where(
            Transaction.user_id == user_id,
            Transaction.name.in_(names),
            Transaction.recurring.is_(True),
            Transaction.is_template.is_(False),
            Transaction.date >= start,
            Transaction.date < end,
        )
    )
    return set(result.scalars().all())
