# finance_api/schemas/transaction.py
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
import uuid

from finance_api.core.constants import DEFAULT_AVATAR
from .validators import Avatar, Category, Name, SignedAmount, UpdateModel, UtcDateTime

class SortOption(str, Enum):
    latest = "Latest"
    oldest = "Oldest"
    a_to_z = "A to Z"
    z_to_a = "Z to A"
    highest = "Highest"
    lowest = "Lowest"

class TransactionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Name = Field(..., description="Recipient or sender, e.g. Savory Bites Bistro")
    amount: SignedAmount = Field(..., description="Positive for income, negative for expenses")
    category: Category
    date: UtcDateTime = Field(..., description="ISO 8601 date/time of transaction")
    avatar: Avatar = DEFAULT_AVATAR
    recurring: bool = False
    is_template: bool = False

class TransactionUpdate(UpdateModel):
    name: Optional[Name] = None
    amount: Optional[SignedAmount] = None
    category: Optional[Category] = None
    date: Optional[UtcDateTime] = None
    avatar: Optional[Avatar] = None
    recurring: Optional[bool] = None
    is_template: Optional[bool] = None

class TransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    avatar: str
    category: str
    date: datetime
    amount: float
    recurring: bool
    is_template: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class TransactionPage(BaseModel):
    transactions: List[TransactionRead]
    total: int
    page: int
    pages: int
    limit: int
