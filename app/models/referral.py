# app/models/referral.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from app.db.session import Base

class Referral(Base):
    """Неизменяемый факт: один участник пригласил другого."""
    __tablename__ = "referrals"
    id = Column(Integer, primary_key=True, index=True)

    # ID того, кто пригласил
    referrer_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    # ID того, кого пригласили. У участника не больше одного пригласившего.
    referred_id = Column(Integer, ForeignKey("members.id"), nullable=False, unique=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    referrer = relationship("Member", foreign_keys=[referrer_id], back_populates="referrals")
    referred = relationship("Member", foreign_keys=[referred_id], back_populates="referrer_link")
