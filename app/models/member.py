# app/models/member.py

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .referral import Referral
from app.db.session import Base

class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    # Идентификатор получателя в мессенджере (chat_id / @username)
    messenger_id = Column(String, nullable=False)
    address = Column(String, nullable=False)

    # Кто пригласил участника. Задается один раз при регистрации и больше не меняется.
    referrer_id = Column(Integer, ForeignKey("members.id"), nullable=True, index=True)
    affiliate_token = Column(String, unique=True, index=True, nullable=False)

    is_active = Column(Boolean, default=True, nullable=False, server_default='true')

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Связи для реферальной системы
    # Запись о том, кто пригласил этого участника
    referrer_link = relationship("Referral", foreign_keys="Referral.referred_id", back_populates="referred", uselist=False)
    # Кого пригласил этот участник
    referrals = relationship("Referral", foreign_keys="Referral.referrer_id", back_populates="referrer")
