# finance_api/api/v1/routes/transactions.py
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_api.api.deps import get_current_user
from finance_api.api.responses import success
from finance_api.core.database import get_async_session
from finance_api.core.errors import NotFoundError
from finance_api.crud.transaction import (
    create_transaction_for_user,
    delete_transaction,
    get_transaction_by_id,
    get_transactions_for_user,
    page_count,
    update_transaction,
)
from finance_api.models.user import User
from finance_api.schemas.transaction import (
    SortOption,
    TransactionCreate,
    TransactionPage,
    TransactionRead,
    TransactionUpdate,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])

async def _get_owned_transaction(transaction_id: uuid.UUID, user: User, db: AsyncSession):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise NotFoundError("Transaction")
    return tx

@router.get("")
async def read_transactions(
    page: int = Query(1, ge=1, le=10000),
    limit: int = Query(10, ge=1, le=500),
    search: Optional[str] = Query(None, max_length=100),
    sort: SortOption = Query(SortOption.latest),
    category: Optional[str] = Query(None, max_length=50),
    filter_: Optional[str] = Query(None, alias="filter", max_length=50),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """List transactions with search, category filter, sorting and pagination."""
    transactions, total = await get_transactions_for_user(
        user.id,
        db,
        page=page,
        limit=limit,
        search=search,
        sort=sort.value,
        category=category or filter_,
    )
    result = TransactionPage(
        transactions=[TransactionRead.model_validate(tx) for tx in transactions],
        total=total,
        page=page,
        pages=page_count(total, limit),
        limit=limit,
    )
    return success(result)

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    tx_in: TransactionCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await create_transaction_for_user(user.id, tx_in, db)
    return success({"transaction": TransactionRead.model_validate(tx)}, "Transaction created")

@router.get("/{transaction_id}")
async def read_transaction(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await _get_owned_transaction(transaction_id, user, db)
    return success({"transaction": TransactionRead.model_validate(tx)})

@router.put("/{transaction_id}")
@router.patch("/{transaction_id}")
async def update_transaction_endpoint(
    transaction_id: uuid.UUID,
    tx_in: TransactionUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await _get_owned_transaction(transaction_id, user, db)
    tx = await update_transaction(tx, tx_in, db)
    return success({"transaction": TransactionRead.model_validate(tx)}, "Transaction updated")

@router.delete("/{transaction_id}")
async def delete_transaction_endpoint(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await _get_owned_transaction(transaction_id, user, db)
    await delete_transaction(tx, db)
    return success(message="Transaction deleted")
