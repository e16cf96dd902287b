# finance_api/schemas/pot.py
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, computed_field
import uuid

from finance_api.utils.budgeting import pot_progress
from .validators import PositiveAmount, PotName, ThemeColor, UpdateModel

class PotCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: PotName
    target: PositiveAmount
    theme: ThemeColor

class PotUpdate(UpdateModel):
    name: Optional[PotName] = None
    target: Optional[PositiveAmount] = None
    theme: Optional[ThemeColor] = None

class PotAmount(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: PositiveAmount

class PotRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    target: float
    total: float
    theme: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def percentage(self) -> float:
        return pot_progress(self.total, self.target)[0]

    @computed_field
    @property
    def remaining(self) -> float:
        return pot_progress(self.total, self.target)[1]
