# app/models/purchase.py
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from app.db.session import Base

PURCHASE_PENDING = "pending"
PURCHASE_COMPLETED = "completed"
PURCHASE_FAILED = "failed"

class PurchaseEvent(Base):
    __tablename__ = "purchase_events"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    product_name = Column(String, nullable=False)
    amount = Column(Numeric(10, 2, asdecimal=True), nullable=False)

    # 'pending' -> 'completed' | 'failed'. Переход выполняет платежная система, не мы.
    status = Column(String, default=PURCHASE_PENDING, nullable=False, server_default=PURCHASE_PENDING, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    member = relationship("Member")
