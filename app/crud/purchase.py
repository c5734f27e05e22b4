# app/crud/purchase.py
from decimal import Decimal
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.models.purchase import PurchaseEvent, PURCHASE_PENDING, PURCHASE_COMPLETED
from app.models.referral import Referral

def create_purchase_event(
    db: Session,
    member_id: int,
    product_name: str,
    amount: Decimal,
    status: str = PURCHASE_PENDING,
) -> PurchaseEvent:
    db_event = PurchaseEvent(
        member_id=member_id,
        product_name=product_name,
        amount=amount,
        status=status,
    )
    db.add(db_event)
    db.commit()
    db.refresh(db_event)
    return db_event

def get_purchase_events(db: Session, member_id: int) -> list[PurchaseEvent]:
    return db.query(PurchaseEvent).filter(
        PurchaseEvent.member_id == member_id
    ).order_by(PurchaseEvent.created_at.desc(), PurchaseEvent.id.desc()).all()

def sum_completed_referral_purchases(db: Session, referrer_id: int) -> Decimal:
    """
    Сумма завершенных покупок всех участников, приглашенных referrer_id.
    purchase_events JOIN referrals ON member_id = referred_id.
    """
    total = db.query(func.sum(PurchaseEvent.amount)).join(
        Referral, PurchaseEvent.member_id == Referral.referred_id
    ).filter(
        Referral.referrer_id == referrer_id,
        PurchaseEvent.status == PURCHASE_COMPLETED
    ).scalar()
    return total if total is not None else Decimal("0")
