from fastapi import APIRouter

from finance_api.api.v1.routes import auth, budgets, overview, pots, recurring_bills, transactions

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(transactions.router)
api_router.include_router(budgets.router)
api_router.include_router(pots.router)
api_router.include_router(recurring_bills.router)
api_router.include_router(overview.router)
