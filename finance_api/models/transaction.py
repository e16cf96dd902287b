# finance_api/models/transaction.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Float, DateTime, Boolean, Index, Uuid
from sqlalchemy.orm import relationship
from finance_api.core.constants import DEFAULT_AVATAR
from finance_api.core.database import Base

class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_user_date", "user_id", "date"),
        Index("ix_transactions_user_category", "user_id", "category"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=100), nullable=False)
    avatar = Column(String(length=500), nullable=False, default=DEFAULT_AVATAR)
    category = Column(String(length=50), nullable=False)
    date = Column(DateTime, nullable=False)
    # Positive = income, negative = expense
    amount = Column(Float, nullable=False)
    recurring = Column(Boolean, nullable=False, default=False)
    # Bill definitions; never touch the balance
    is_template = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="transactions")

    def __repr__(self):
        return f"<Transaction name={self.name} amount={self.amount} date={self.date} user_id={self.user_id}>"
