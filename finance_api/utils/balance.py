# finance_api/utils/balance.py
from datetime import datetime
from typing import Optional

from finance_api.utils.periods import in_current_month


def balance_effect(amount: float, date: datetime, is_template: bool, now: Optional[datetime] = None) -> float:
    """
    How much a transaction contributes to ``user.balance``: its signed amount when
    it is a real (non-template) transaction dated in the current month, otherwise 0.
    """
    if is_template or not in_current_month(date, now):
        return 0.0
    return amount


def balance_delta(old_effect: float, new_effect: float) -> float:
    return round(new_effect - old_effect, 2)
