# finance_api/schemas/user.py
import uuid
from typing import Annotated, Optional
from datetime import datetime
from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field

from .validators import Name, Password

Email = Annotated[EmailStr, AfterValidator(lambda v: v.lower())]

class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: Email
    password: Password
    full_name: Name

class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: Email
    password: str = Field(..., min_length=1)

class GoogleAuthRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # ID token returned by Google Sign-In
    credential: str = Field(..., min_length=1, max_length=10000)

# Public fields returned by the auth endpoints (never the password hash)
class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: EmailStr
    full_name: str
    balance: float
    avatar_url: Optional[str] = None
    is_verified: bool
    auth_provider: str
    created_at: Optional[datetime] = None
