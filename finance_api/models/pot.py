# finance_api/models/pot.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Float, DateTime, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from finance_api.core.database import Base

class Pot(Base):
    __tablename__ = "pots"
    __table_args__ = (
        UniqueConstraint("user_id", "theme", name="uq_pots_user_theme"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=30), nullable=False)
    target = Column(Float, nullable=False)
    # Amount saved so far, moved only by deposit/withdraw
    total = Column(Float, nullable=False, default=0.0)
    theme = Column(String(length=7), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="pots")

    def __repr__(self):
        return f"<Pot name={self.name} total={self.total}/{self.target} user_id={self.user_id}>"
