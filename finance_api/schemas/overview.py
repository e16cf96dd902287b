# finance_api/schemas/overview.py
from typing import List
from pydantic import BaseModel

from .budget import BudgetWithSpending
from .pot import PotRead
from .recurring_bill import BillsSummary
from .transaction import TransactionRead

class BalanceSummary(BaseModel):
    current: float
    income: float
    expenses: float

class PotsOverview(BaseModel):
    total_saved: float
    items: List[PotRead]

class BudgetsOverview(BaseModel):
    items: List[BudgetWithSpending]

class TransactionsOverview(BaseModel):
    recent: List[TransactionRead]

class Overview(BaseModel):
    balance: BalanceSummary
    pots: PotsOverview
    budgets: BudgetsOverview
    transactions: TransactionsOverview
    recurring_bills: BillsSummary

class BalanceRead(BaseModel):
    current_balance: float
    income: float
    expenses: float
