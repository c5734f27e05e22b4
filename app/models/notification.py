# app/models/notification.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, func
from app.db.session import Base
from sqlalchemy.orm import relationship

class NotificationLog(Base):
    """Журнал попыток доставки. Записи только добавляются, статус не пересматривается."""
    __tablename__ = "notification_logs"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)

    # 'email' | 'messaging'
    channel = Column(String, nullable=False)
    # 'welcome' | 'purchase_confirmation' | 'referral_alert'
    event_kind = Column(String, nullable=False, index=True)
    # 'sent' | 'failed' | 'pending'
    status = Column(String, default="pending", nullable=False, server_default="pending")
    content = Column(Text, nullable=True)

    sent_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    member = relationship("Member")
