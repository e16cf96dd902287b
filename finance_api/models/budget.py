# finance_api/models/budget.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Float, DateTime, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from finance_api.core.database import Base

class Budget(Base):
    __tablename__ = "budgets"
    __table_args__ = (
        UniqueConstraint("user_id", "category", name="uq_budgets_user_category"),
        UniqueConstraint("user_id", "theme", name="uq_budgets_user_theme"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String(length=50), nullable=False)
    maximum = Column(Float, nullable=False)
    theme = Column(String(length=7), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="budgets")

    def __repr__(self):
        return f"<Budget category={self.category} maximum={self.maximum} user_id={self.user_id}>"
