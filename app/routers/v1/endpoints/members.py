# app/routers/v1/endpoints/members.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.limiter import limiter
from app.dependencies import get_db
from app.schemas.member import Member, MemberActiveUpdate, MemberRegister
from app.schemas.notification import EventKind, NotificationRecord
from app.schemas.purchase import PurchaseEvent
from app.schemas.referral import MemberStats, ReferralEdge
from app.services import commission as commission_service
from app.services import member as member_service
from app.services import notification as notification_service
from app.services import purchase as purchase_service
from app.services import referral as referral_service

router = APIRouter()


@router.post("/members", response_model=Member, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.REGISTRATION_RATE_LIMIT)
async def register_member(
    request: Request,
    member_in: MemberRegister,
    db: Session = Depends(get_db)
):
    """
    Регистрация участника. Токен пригласившего передается в `referrer_token`;
    если такого токена нет, участник регистрируется без пригласившего.
    """
    return await member_service.register(db, member_in)


# Путь с токеном объявлен раньше /members/{member_id}, чтобы не конфликтовать
@router.get("/members/by-token/{token}", response_model=Member)
def get_member_by_token(token: str, db: Session = Depends(get_db)):
    member = member_service.find_by_token(db, token)
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    return member


@router.get("/members/{member_id}", response_model=Member)
def get_member(member_id: int, db: Session = Depends(get_db)):
    return member_service.get_member(db, member_id)


@router.patch("/members/{member_id}/active", response_model=Member)
def update_member_active(member_id: int, payload: MemberActiveUpdate, db: Session = Depends(get_db)):
    """Включение/отключение участника (влияет на счетчик активных рефералов)."""
    return member_service.set_active(db, member_id, payload.is_active)


@router.get("/members/{member_id}/stats", response_model=MemberStats)
def get_member_stats(member_id: int, db: Session = Depends(get_db)):
    """Статистика партнера: рефералы, активные рефералы, заработок. Для неизвестного id - нули."""
    return commission_service.compute_stats(db, member_id)


@router.get("/members/{member_id}/referrals", response_model=List[ReferralEdge])
def get_member_referrals(member_id: int, db: Session = Depends(get_db)):
    return referral_service.list_for_referrer(db, member_id)


@router.get("/members/{member_id}/notifications", response_model=List[NotificationRecord])
def get_member_notifications(
    member_id: int,
    event_kind: EventKind | None = Query(None, description="Фильтр по типу события"),
    db: Session = Depends(get_db)
):
    """Журнал уведомлений участника, новые сверху."""
    return notification_service.list_logs(db, member_id, event_kind)


@router.get("/members/{member_id}/purchases", response_model=List[PurchaseEvent])
def get_member_purchases(member_id: int, db: Session = Depends(get_db)):
    return purchase_service.list_purchases(db, member_id)
