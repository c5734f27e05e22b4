# app/crud/member.py
from sqlalchemy.orm import Session
from app.models.member import Member


def get_member_by_id(db: Session, member_id: int) -> Member | None:
    """Получает участника по первичному ключу."""
    return db.query(Member).filter(Member.id == member_id).first()

def get_member_by_email(db: Session, email: str) -> Member | None:
    return db.query(Member).filter(Member.email == email).first()

def get_member_by_affiliate_token(db: Session, token: str) -> Member | None:
    return db.query(Member).filter(Member.affiliate_token == token).first()

def create_member(
    db: Session,
    full_name: str,
    email: str,
    messenger_id: str,
    address: str,
    affiliate_token: str,
    referrer_id: int | None = None,
) -> Member:
    """
    Добавляет участника в текущую транзакцию и получает его ID (flush).
    Коммит выполняет вызывающая сторона.
    """
    db_member = Member(
        full_name=full_name,
        email=email,
        messenger_id=messenger_id,
        address=address,
        affiliate_token=affiliate_token,
        referrer_id=referrer_id,
        is_active=True,
    )
    db.add(db_member)
    db.flush()
    return db_member

def update_member_active(db: Session, member: Member, is_active: bool) -> Member:
    """Включает/выключает участника. Пригласившего не трогает."""
    member.is_active = is_active
    db.commit()
    db.refresh(member)
    return member
