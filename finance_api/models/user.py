# finance_api/models/user.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Float, Uuid
from sqlalchemy.orm import relationship
from finance_api.core.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(length=254), unique=True, index=True, nullable=False)
    # Null for accounts created through Google Sign-In
    hashed_password = Column(String, nullable=True)
    full_name = Column(String(length=100), nullable=False)
    # Cash balance, moved by current-month transactions and pot transfers
    balance = Column(Float, nullable=False, default=0.0)
    avatar_url = Column(String, nullable=True)
    is_verified = Column(Boolean, default=False, nullable=False)

    google_id = Column(String, unique=True, nullable=True)
    auth_provider = Column(String(length=20), nullable=False, default="local")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    transactions = relationship("Transaction", back_populates="user", cascade="all, delete-orphan")
    budgets = relationship("Budget", back_populates="user", cascade="all, delete-orphan")
    pots = relationship("Pot", back_populates="user", cascade="all, delete-orphan")
    recurring_bills = relationship("RecurringBill", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User email={self.email} balance={self.balance}>"
