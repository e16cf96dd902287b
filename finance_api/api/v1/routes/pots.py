# finance_api/api/v1/routes/pots.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_api.api.deps import get_current_user
from finance_api.api.responses import success
from finance_api.core.database import get_async_session
from finance_api.core.errors import NotFoundError
from finance_api.crud.pot import (
    create_pot_for_user,
    delete_pot,
    deposit_to_pot,
    get_pot_by_id,
    get_pots_for_user,
    update_pot,
    withdraw_from_pot,
)
from finance_api.models.user import User
from finance_api.schemas.pot import PotAmount, PotCreate, PotRead, PotUpdate

router = APIRouter(prefix="/pots", tags=["pots"])

async def _get_owned_pot(pot_id: uuid.UUID, user: User, db: AsyncSession):
    pot = await get_pot_by_id(pot_id, user.id, db)
    if not pot:
        raise NotFoundError("Pot")
    return pot

@router.get("")
async def read_pots(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    pots = await get_pots_for_user(user.id, db)
    return success({"pots": [PotRead.model_validate(p) for p in pots]})

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_pot(
    pot_in: PotCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    pot = await create_pot_for_user(user.id, pot_in, db)
    return success({"pot": PotRead.model_validate(pot)}, "Pot created")

@router.get("/{pot_id}")
async def read_pot(
    pot_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    pot = await _get_owned_pot(pot_id, user, db)
    return success({"pot": PotRead.model_validate(pot)})

@router.put("/{pot_id}")
@router.patch("/{pot_id}")
async def update_pot_endpoint(
    pot_id: uuid.UUID,
    pot_in: PotUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    pot = await _get_owned_pot(pot_id, user, db)
    pot = await update_pot(pot, pot_in, db)
    return success({"pot": PotRead.model_validate(pot)}, "Pot updated")

@router.delete("/{pot_id}")
async def delete_pot_endpoint(
    pot_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    pot = await _get_owned_pot(pot_id, user, db)
    returned = await delete_pot(pot, user, db)
    return success(
        {"returned_amount": returned, "new_balance": user.balance},
        "Pot deleted and funds returned to balance",
    )

@router.post("/{pot_id}/deposit")
async def deposit(
    pot_id: uuid.UUID,
    body: PotAmount,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    pot = await _get_owned_pot(pot_id, user, db)
    pot = await deposit_to_pot(pot, user, body.amount, db)
    return success({"pot": PotRead.model_validate(pot), "new_balance": user.balance}, "Money added to pot")

@router.post("/{pot_id}/withdraw")
async def withdraw(
    pot_id: uuid.UUID,
    body: PotAmount,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    pot = await _get_owned_pot(pot_id, user, db)
    pot = await withdraw_from_pot(pot, user, body.amount, db)
    return success({"pot": PotRead.model_validate(pot), "new_balance": user.balance}, "Money withdrawn from pot")
