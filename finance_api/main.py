# finance_api/main.py
import logging
from datetime import datetime

import uvicorn
from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from finance_api.api.responses import success
from finance_api.api.v1.api import api_router
from finance_api.core.config import settings
from finance_api.core.database import create_db_and_tables, get_async_session
from finance_api.core.errors import AppError, register_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    openapi_tags=[
        {"name": "auth", "description": "Registration, login and Google Sign-In"},
        {"name": "transactions", "description": "Income and expenses"},
        {"name": "budgets", "description": "Monthly spending limits per category"},
        {"name": "pots", "description": "Savings pots funded from the balance"},
        {"name": "recurring-bills", "description": "Monthly bills and their status"},
        {"name": "overview", "description": "Dashboard summary"},
    ],
)

# CORS Configuration
origins = [
    settings.FRONTEND_URL,
    "http://localhost:5173",  # Vite dev server
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(dict.fromkeys(origins)),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# ------------------------------------------------------------
# ROOT ENDPOINT
# ------------------------------------------------------------
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return success({"name": settings.APP_NAME, "version": settings.VERSION}, f"{settings.APP_NAME} is running!")

# ------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ------------------------------------------------------------
@app.get("/health", tags=["Health"])
async def health_check(db: AsyncSession = Depends(get_async_session)):
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"❌ Health check failed: {str(e)}")
        raise AppError("Database unavailable", status.HTTP_503_SERVICE_UNAVAILABLE, "SERVICE_UNAVAILABLE")
    return success({
        "status": "healthy",
        "database": "connected",
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    })

# ------------------------------------------------------------
# BUSINESS LOGIC ROUTES
# ------------------------------------------------------------
app.include_router(api_router, prefix="/api")

# ------------------------------------------------------------
# STARTUP EVENT
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    """Startup event to create database tables"""
    try:
        await create_db_and_tables()
        logger.info("✅ Database tables created successfully")
        logger.info(f"✅ Frontend URL: {settings.FRONTEND_URL}")
        if not settings.GOOGLE_CLIENT_ID:
            logger.warning("⚠️ GOOGLE_CLIENT_ID not configured - Google Sign-In will reject every credential")
    except Exception as e:
        logger.error(f"❌ Error during startup: {str(e)}")
        raise

if __name__ == "__main__":
    uvicorn.run("finance_api.main:app", host="0.0.0.0", port=8000, reload=settings.is_development)
