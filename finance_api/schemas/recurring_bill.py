# finance_api/schemas/recurring_bill.py
from typing import Annotated, List, Literal, Optional
from datetime import datetime
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
import uuid

from finance_api.core.constants import DEFAULT_AVATAR
from .validators import Avatar, Category, Name, SignedAmount, UpdateModel, UtcDateTime

# Bills are expenses: whatever sign the client sends, store it negative
BillAmount = Annotated[SignedAmount, AfterValidator(lambda v: -abs(v))]
DueDay = Annotated[int, Field(ge=1, le=31)]

class RecurringBillCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Name
    amount: BillAmount
    category: Category
    due_day: DueDay
    avatar: Avatar = DEFAULT_AVATAR

class RecurringBillUpdate(UpdateModel):
    name: Optional[Name] = None
    amount: Optional[BillAmount] = None
    category: Optional[Category] = None
    due_day: Optional[DueDay] = None
    avatar: Optional[Avatar] = None

class RecurringBillPay(BaseModel):
    model_config = ConfigDict(extra="forbid")

    payment_date: Optional[UtcDateTime] = None

class RecurringBillRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    amount: float
    category: str
    due_day: int
    avatar: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class RecurringBillWithStatus(RecurringBillRead):
    status: Literal["paid", "due-soon", "upcoming"]

class BillBucket(BaseModel):
    count: int
    amount: float

class BillsSummary(BaseModel):
    total: int
    total_amount: float
    paid: BillBucket
    upcoming: BillBucket
    due_soon: BillBucket

class RecurringBillList(BaseModel):
    bills: List[RecurringBillWithStatus]
    summary: BillsSummary
