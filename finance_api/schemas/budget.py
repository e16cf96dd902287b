# finance_api/schemas/budget.py
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict
import uuid

from .transaction import TransactionRead
from .validators import Category, PositiveAmount, ThemeColor, UpdateModel

class BudgetCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    category: Category
    maximum: PositiveAmount
    theme: ThemeColor

class BudgetUpdate(UpdateModel):
    category: Optional[Category] = None
    maximum: Optional[PositiveAmount] = None
    theme: Optional[ThemeColor] = None

class BudgetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    category: str
    maximum: float
    theme: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class BudgetWithSpending(BudgetRead):
    """Budget as shown on the budgets page: computed on every read, never stored."""
    spent: float
    remaining: float
    latest_transactions: List[TransactionRead] = []
