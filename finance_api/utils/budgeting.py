# finance_api/utils/budgeting.py
from typing import Tuple


def budget_remaining(maximum: float, spent: float) -> float:
    # Overspending shows up as a negative remainder
    return round(maximum - spent, 2)


def pot_progress(total: float, target: float) -> Tuple[float, float]:
    """Return ``(percentage, remaining)`` for a pot."""
    percentage = (total / target * 100) if target > 0 else 0.0
    return round(percentage, 2), round(target - total, 2)
