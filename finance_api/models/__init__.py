from .user import User
from .transaction import Transaction
from .budget import Budget
from .pot import Pot
from .recurring_bill import RecurringBill

__all__ = ["User", "Transaction", "Budget", "Pot", "RecurringBill"]
