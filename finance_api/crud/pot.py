# finance_api/crud/pot.py
"""
Pots are funded from, and returned to, the user's balance. Every transfer
moves the same amount in opposite directions inside one commit; the sufficiency
checks are part of the UPDATE itself so concurrent requests cannot overdraw.
"""
import logging
import uuid
from typing import List, Optional

from fastapi import status
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from finance_api.core.errors import AppError
from finance_api.crud.user import adjust_balance, to_cents
from finance_api.models.pot import Pot
from finance_api.models.user import User
from finance_api.schemas.pot import PotCreate, PotUpdate

logger = logging.getLogger(__name__)

def _duplicate_theme() -> AppError:
    return AppError("A pot with this theme already exists", status.HTTP_409_CONFLICT, "DUPLICATE_ERROR")

async def get_pots_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Pot]:
    result = await db.execute(
        select(Pot).where(Pot.user_id == user_id).order_by(Pot.created_at)
    )
    return list(result.scalars().all())

async def get_pot_by_id(pot_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Pot]:
    result = await db.execute(
        select(Pot).where(Pot.id == pot_id, Pot.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_pot_for_user(user_id: uuid.UUID, pot_in: PotCreate, db: AsyncSession) -> Pot:
    new_pot = Pot(**pot_in.model_dump(), total=0.0, user_id=user_id)
    db.add(new_pot)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise _duplicate_theme()
    await db.refresh(new_pot)
    return new_pot

async def update_pot(pot: Pot, pot_in: PotUpdate, db: AsyncSession) -> Pot:
    for field, value in pot_in.changes().items():
        setattr(pot, field, value)
    db.add(pot)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise _duplicate_theme()
    await db.refresh(pot)
    return pot

async def delete_pot(pot: Pot, user: User, db: AsyncSession) -> float:
    """Remove the pot and return everything saved in it to the balance."""
    returned = pot.total
    await adjust_balance(user.id, returned, db)
    await db.delete(pot)
    await db.commit()
    await db.refresh(user)
    logger.info(f"Pot {pot.id} deleted, {returned} returned to user {user.id}")
    return returned

async def deposit_to_pot(pot: Pot, user: User, amount: float, db: AsyncSession) -> Pot:
    """Move ``amount`` from the balance into the pot."""
    result = await db.execute(
        update(User)
        .where(User.id == user.id, User.balance >= amount)
        .values(balance=to_cents(User.balance - amount))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise AppError("Insufficient balance", status.HTTP_400_BAD_REQUEST, "INSUFFICIENT_BALANCE")

    await db.execute(
        update(Pot)
        .where(Pot.id == pot.id)
        .values(total=to_cents(Pot.total + amount))
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    await db.refresh(pot)
    await db.refresh(user)
    logger.info(f"Deposited {amount} into pot {pot.id} for user {user.id}")
    return pot

async def withdraw_from_pot(pot: Pot, user: User, amount: float, db: AsyncSession) -> Pot:
    """Move ``amount`` from the pot back to the balance."""
    result = await db.execute(
        update(Pot)
        .where(Pot.id == pot.id, Pot.total >= amount)
        .values(total=to_cents(Pot.total - amount))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise AppError("Insufficient pot balance", status.HTTP_400_BAD_REQUEST, "INSUFFICIENT_POT_BALANCE")

    await adjust_balance(user.id, amount, db)
    await db.commit()
    await db.refresh(pot)
    await db.refresh(user)
    logger.info(f"Withdrew {amount} from pot {pot.id} for user {user.id}")
    return pot
