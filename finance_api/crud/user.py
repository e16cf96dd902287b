# finance_api/crud/user.py
import logging
import uuid
from typing import Dict, Optional

from fastapi import status
from sqlalchemy import Numeric, cast, func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from finance_api.core.errors import AppError
from finance_api.core.security import get_password_hash
from finance_api.models.transaction import Transaction
from finance_api.models.user import User
from finance_api.schemas.user import RegisterRequest

logger = logging.getLogger(__name__)

async def get_user_by_id(user_id: uuid.UUID, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()

async def get_user_by_email(email: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()

async def get_user_by_google_id(google_id: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.google_id == google_id))
    return result.scalar_one_or_none()

async def create_local_user(user_in: RegisterRequest, db: AsyncSession) -> User:
    user = User(
        email=user_in.email.lower(),
        hashed_password=get_password_hash(user_in.password),
        full_name=user_in.full_name,
        auth_provider="local",
        is_verified=True,  # no email verification step
        balance=0.0,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        await db.rollback()
        raise AppError("Email already registered", status.HTTP_409_CONFLICT, "EMAIL_TAKEN")
    await db.refresh(user)
    return user

async def create_google_user(claims: Dict, db: AsyncSession) -> User:
    email = claims["email"].lower()
    user = User(
        email=email,
        hashed_password=None,
        full_name=claims.get("name") or email.split("@")[0],
        google_id=claims["sub"],
        avatar_url=claims.get("picture"),
        auth_provider="google",
        is_verified=True,  # Google already verified the email
        balance=0.0,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user

async def link_google_account(user: User, claims: Dict, db: AsyncSession) -> User:
    """Attach a Google identity to an account that registered with a password."""
    user.google_id = claims["sub"]
    if not user.avatar_url and claims.get("picture"):
        user.avatar_url = claims["picture"]
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user

async def count_transactions_for_user(user_id: uuid.UUID, db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(Transaction).where(Transaction.user_id == user_id)
    )
    return result.scalar_one()

async def reset_orphaned_balance(user: User, db: AsyncSession) -> User:
    """
    A user without a single transaction cannot have a balance; zero it.
    Runs on login and session checks.
    """
    if user.balance == 0:
        return user
    if await count_transactions_for_user(user.id, db) > 0:
        return user

    logger.warning(f"⚠️ Resetting balance {user.balance} to 0 for {user.email}: no transactions on record")
    user.balance = 0.0
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user

def to_cents(expr):
    """Round a money expression to cents inside the database."""
    return func.round(cast(expr, Numeric(14, 2)), 2)

async def adjust_balance(user_id: uuid.UUID, delta: float, db: AsyncSession) -> None:
    """
    Atomically add ``delta`` to the user's balance. The caller commits and
    refreshes any loaded ``User`` it still needs.
    """
    if delta == 0:
        return
    await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(balance=to_cents(User.balance + delta))
        .execution_options(synchronize_session=False)
    )
