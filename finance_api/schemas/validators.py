# finance_api/schemas/validators.py
"""
Reusable field types for request schemas.
"""
import html
import math
import re
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints, model_validator

from finance_api.core.constants import CATEGORIES, MAX_AMOUNT, MAX_TRANSFER_AMOUNT, THEME_COLORS
from finance_api.utils.periods import to_naive_utc

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def sanitize_string(value: str) -> str:
    """Trim, drop control characters and HTML-escape user supplied text."""
    return html.escape(_CONTROL_CHARS.sub("", value.strip()), quote=True)


def _check_category(value: str) -> str:
    if value not in CATEGORIES:
        raise ValueError("Invalid category")
    return value


def _check_theme(value: str) -> str:
    if value not in THEME_COLORS:
        raise ValueError("Invalid theme color")
    return value


def _check_amount(value: float) -> float:
    if not math.isfinite(value):
        raise ValueError("Amount must be a finite number")
    if abs(value) > MAX_AMOUNT:
        raise ValueError("Amount exceeds maximum allowed value")
    if value == 0:
        raise ValueError("Amount cannot be zero")
    return value


def _check_password(value: str) -> str:
    if re.search(r"[\x00-\x1F\x7F]", value):
        raise ValueError("Password contains invalid characters")
    return value


def _sanitized(min_length: int, max_length: int):
    return Annotated[
        str,
        StringConstraints(min_length=min_length, max_length=max_length, strip_whitespace=True),
        AfterValidator(sanitize_string),
    ]


Name = _sanitized(1, 100)
PotName = _sanitized(1, 30)
Avatar = _sanitized(0, 500)
Category = Annotated[str, AfterValidator(_check_category)]
ThemeColor = Annotated[str, AfterValidator(_check_theme)]
SignedAmount = Annotated[float, AfterValidator(_check_amount)]
PositiveAmount = Annotated[float, Field(gt=0, le=MAX_TRANSFER_AMOUNT, allow_inf_nan=False)]
UtcDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]
Password = Annotated[str, StringConstraints(min_length=6, max_length=128), AfterValidator(_check_password)]


class UpdateModel(BaseModel):
    """Base for partial updates: unknown fields rejected, at least one field required."""
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def at_least_one_field(self):
        if not self.changes():
            raise ValueError("At least one field is required")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)
