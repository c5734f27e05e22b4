# app/crud/referral.py
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.models.member import Member
from app.models.referral import Referral

def create_referral(db: Session, referrer_id: int, referred_id: int) -> Referral:
    """Добавляет реферальную связь в текущую транзакцию (без коммита)."""
    db_referral = Referral(referrer_id=referrer_id, referred_id=referred_id)
    db.add(db_referral)
    db.flush()
    return db_referral

def count_referrals(db: Session, referrer_id: int) -> int:
    return db.query(func.count(Referral.id)).filter(Referral.referrer_id == referrer_id).scalar() or 0

def count_active_referrals(db: Session, referrer_id: int) -> int:
    """Считает приглашенных, которые активны прямо сейчас (по текущему состоянию участника)."""
    return db.query(func.count(Referral.id)).join(
        Member, Referral.referred_id == Member.id
    ).filter(
        Referral.referrer_id == referrer_id,
        Member.is_active == True
    ).scalar() or 0

def get_referrals_by_referrer(db: Session, referrer_id: int) -> list[Referral]:
    return db.query(Referral).filter(Referral.referrer_id == referrer_id).order_by(Referral.id).all()
