"""
Recurring bill status and summary.

A bill is ``paid`` when a payment (recurring transaction with the bill's name)
is dated in the current month, ``due-soon`` when its due day falls after today
and at most ``DUE_SOON_DAYS`` days ahead within this month, and ``upcoming``
otherwise.
"""
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from finance_api.core.constants import DUE_SOON_DAYS
from finance_api.schemas.validators import sanitize_string

PAID = "paid"
DUE_SOON = "due-soon"
UPCOMING = "upcoming"


def is_due_soon(due_day: int, today: date) -> bool:
    # Compared by day of month only: a bill due today, or early next month, is not due soon
    return today.day < due_day <= today.day + DUE_SOON_DAYS


def bill_status(due_day: int, is_paid: bool, today: date) -> str:
    if is_paid:
        return PAID
    if is_due_soon(due_day, today):
        return DUE_SOON
    return UPCOMING


def _bucket(bills: Sequence[Dict[str, Any]]) -> Dict[str, float]:
    return {
        "count": len(bills),
        "amount": round(sum(abs(b["amount"]) for b in bills), 2),
    }


def summarize_bills(bills: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Summarize bills that already carry a ``status``. ``total``/``upcoming``
    cover every unpaid bill, ``due_soon`` the unpaid ones due within the window.
    """
    bills = list(bills)
    paid = [b for b in bills if b["status"] == PAID]
    unpaid = [b for b in bills if b["status"] != PAID]
    due_soon = [b for b in bills if b["status"] == DUE_SOON]

    upcoming = _bucket(unpaid)
    return {
        "total": upcoming["count"],
        "total_amount": upcoming["amount"],
        "paid": _bucket(paid),
        "upcoming": upcoming,
        "due_soon": _bucket(due_soon),
    }


BILL_SORTS = {
    "Latest": (lambda b: b["due_day"], False),
    "Oldest": (lambda b: b["due_day"], True),
    "A to Z": (lambda b: b["name"].lower(), False),
    "Z to A": (lambda b: b["name"].lower(), True),
    "Highest": (lambda b: abs(b["amount"]), True),
    "Lowest": (lambda b: abs(b["amount"]), False),
}


def search_and_sort_bills(
    bills: Iterable[Dict[str, Any]],
    search: Optional[str] = None,
    sort: str = "Latest",
) -> List[Dict[str, Any]]:
    bills = list(bills)
    if search:
        # Stored names are HTML-escaped
        needle = sanitize_string(search).lower()
        bills = [b for b in bills if needle in b["name"].lower()]
    key, reverse = BILL_SORTS.get(sort, BILL_SORTS["Latest"])
    return sorted(bills, key=key, reverse=reverse)
