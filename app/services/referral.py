# app/services/referral.py
from sqlalchemy.orm import Session
from app.crud import referral as crud_referral
from app.models.referral import Referral


def count_all(db: Session, referrer_id: int) -> int:
    return crud_referral.count_referrals(db, referrer_id=referrer_id)

def count_active(db: Session, referrer_id: int) -> int:
    return crud_referral.count_active_referrals(db, referrer_id=referrer_id)

def list_for_referrer(db: Session, referrer_id: int) -> list[Referral]:
    """Все связи участника в стабильном порядке (по id)."""
    return crud_referral.get_referrals_by_referrer(db, referrer_id=referrer_id)
