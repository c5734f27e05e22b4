# app/schemas/referral.py
from datetime import datetime
from pydantic import BaseModel
from app.schemas.common import Money

class ReferralEdge(BaseModel):
    id: int
    referrer_id: int
    referred_id: int
    created_at: datetime

    class Config:
        from_attributes = True

class MemberStats(BaseModel):
    total_referrals: int     # Сколько человек пришло по ссылке
    active_referrals: int    # Из них активны сейчас
    total_earnings: Money    # Комиссия с завершенных покупок, 2 знака
