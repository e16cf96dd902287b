# finance_api/models/recurring_bill.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Float, DateTime, Integer, Index, Uuid
from sqlalchemy.orm import relationship
from finance_api.core.constants import DEFAULT_AVATAR
from finance_api.core.database import Base

class RecurringBill(Base):
    __tablename__ = "recurring_bills"
    __table_args__ = (
        Index("ix_recurring_bills_user_name", "user_id", "name"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Vendor name; payments are matched on it
    name = Column(String(length=100), nullable=False)
    # Always negative
    amount = Column(Float, nullable=False)
    category = Column(String(length=50), nullable=False)
    due_day = Column(Integer, nullable=False)
    avatar = Column(String(length=500), nullable=False, default=DEFAULT_AVATAR)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="recurring_bills")

    def __repr__(self):
        return f"<RecurringBill name={self.name} amount={self.amount} due_day={self.due_day}>"
