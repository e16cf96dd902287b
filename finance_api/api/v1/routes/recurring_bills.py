# finance_api/api/v1/routes/recurring_bills.py
import uuid
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_api.api.deps import get_current_user
from finance_api.api.responses import success
from finance_api.core.database import get_async_session
from finance_api.core.errors import NotFoundError
from finance_api.crud.recurring_bill import (
    create_bill_for_user,
    delete_bill,
    get_bill_by_id,
    get_bills_with_status,
    pay_bill,
    update_bill,
)
from finance_api.models.user import User
from finance_api.schemas.recurring_bill import (
    RecurringBillCreate,
    RecurringBillList,
    RecurringBillPay,
    RecurringBillRead,
    RecurringBillUpdate,
)
from finance_api.schemas.transaction import SortOption, TransactionRead
from finance_api.utils.bills import search_and_sort_bills, summarize_bills

router = APIRouter(prefix="/recurring-bills", tags=["recurring-bills"])

async def _get_owned_bill(bill_id: uuid.UUID, user: User, db: AsyncSession):
    bill = await get_bill_by_id(bill_id, user.id, db)
    if not bill:
        raise NotFoundError("Recurring bill")
    return bill

@router.get("")
async def read_recurring_bills(
    search: Optional[str] = Query(None, max_length=100),
    sort: SortOption = Query(SortOption.latest),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Bills with their status for the current month. The summary always covers
    every bill, regardless of ``search``.
    """
    bills = await get_bills_with_status(user.id, db)
    result = RecurringBillList(
        bills=search_and_sort_bills(bills, search, sort.value),
        summary=summarize_bills(bills),
    )
    return success(result)

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recurring_bill(
    bill_in: RecurringBillCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    bill = await create_bill_for_user(user.id, bill_in, db)
    return success({"bill": RecurringBillRead.model_validate(bill)}, "Recurring bill created")

@router.get("/{bill_id}")
async def read_recurring_bill(
    bill_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    bill = await _get_owned_bill(bill_id, user, db)
    return success({"bill": RecurringBillRead.model_validate(bill)})

@router.put("/{bill_id}")
@router.patch("/{bill_id}")
async def update_recurring_bill(
    bill_id: uuid.UUID,
    bill_in: RecurringBillUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    bill = await _get_owned_bill(bill_id, user, db)
    bill = await update_bill(bill, bill_in, db)
    return success({"bill": RecurringBillRead.model_validate(bill)}, "Recurring bill updated")

@router.delete("/{bill_id}")
async def delete_recurring_bill(
    bill_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    bill = await _get_owned_bill(bill_id, user, db)
    await delete_bill(bill, db)
    return success(message="Recurring bill deleted")

@router.post("/{bill_id}/pay", status_code=status.HTTP_201_CREATED)
async def pay_recurring_bill(
    bill_id: uuid.UUID,
    body: Optional[RecurringBillPay] = Body(None),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    bill = await _get_owned_bill(bill_id, user, db)
    payment_date = body.payment_date if body else None
    tx = await pay_bill(bill, db, payment_date)
    return success({"transaction": TransactionRead.model_validate(tx)}, "Bill paid")
