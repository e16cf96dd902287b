# finance_api/crud/recurring_bill.py
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from finance_api.crud.transaction import create_transaction_for_user, get_paid_bill_names
from finance_api.models.recurring_bill import RecurringBill
from finance_api.models.transaction import Transaction
from finance_api.schemas.recurring_bill import (
    RecurringBillCreate,
    RecurringBillRead,
    RecurringBillUpdate,
)
from finance_api.schemas.transaction import TransactionCreate
from finance_api.utils import periods
from finance_api.utils.bills import bill_status

async def get_bills_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[RecurringBill]:
    result = await db.execute(
        select(RecurringBill).where(RecurringBill.user_id == user_id).order_by(RecurringBill.due_day)
    )
    return list(result.scalars().all())

async def get_bill_by_id(bill_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[RecurringBill]:
    result = await db.execute(
        select(RecurringBill).where(RecurringBill.id == bill_id, RecurringBill.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_bill_for_user(user_id: uuid.UUID, bill_in: RecurringBillCreate, db: AsyncSession) -> RecurringBill:
    # Only the bill record; money moves when it is paid
    new_bill = RecurringBill(**bill_in.model_dump(), user_id=user_id)
    db.add(new_bill)
    await db.commit()
    await db.refresh(new_bill)
    return new_bill

async def update_bill(bill: RecurringBill, bill_in: RecurringBillUpdate, db: AsyncSession) -> RecurringBill:
    for field, value in bill_in.changes().items():
        setattr(bill, field, value)
    db.add(bill)
    await db.commit()
    await db.refresh(bill)
    return bill

async def delete_bill(bill: RecurringBill, db: AsyncSession) -> None:
    await db.delete(bill)
    await db.commit()

async def pay_bill(bill: RecurringBill, db: AsyncSession, payment_date: Optional[datetime] = None) -> Transaction:
    """Record a payment of ``bill`` as a real, recurring transaction."""
    # Bill fields are already validated; re-validating would escape the name twice
    tx_in = TransactionCreate.model_construct(
        name=bill.name,
        amount=bill.amount,
        category=bill.category,
        date=payment_date or periods.utcnow(),
        avatar=bill.avatar,
        recurring=True,
    )
    return await create_transaction_for_user(bill.user_id, tx_in, db)

async def get_bills_with_status(
    user_id: uuid.UUID,
    db: AsyncSession,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    now = now or periods.utcnow()
    bills = await get_bills_for_user(user_id, db)
    paid_names = await get_paid_bill_names(user_id, [b.name for b in bills], db, now)
    return [
        {
            **RecurringBillRead.model_validate(bill).model_dump(),
            "status": bill_status(bill.due_day, bill.name in paid_names, now.date()),
        }
        for bill in bills
    ]
