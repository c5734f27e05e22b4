# app/services/purchase.py

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from app.core import locales
from app.core.exceptions import NotFoundError
from app.crud import member as crud_member
from app.crud import purchase as crud_purchase
from app.models.purchase import PurchaseEvent
from app.schemas.notification import EventKind
from app.services import notification as notification_service

logger = logging.getLogger(__name__)


def _format_amount(amount: Decimal) -> str:
    return f"${amount:,.2f}"


async def record_purchase(db: Session, member_id: int, product_name: str, amount: Decimal) -> PurchaseEvent:
    """
    Фиксирует покупку в статусе 'pending' и рассылает уведомления:
    подтверждение покупателю и, если он реферал, уведомление пригласившему.
    Сумма уже проверена на входе (> 0).
    """
    member = crud_member.get_member_by_id(db, member_id=member_id)
    if not member:
        raise NotFoundError("Member", member_id)

    event = crud_purchase.create_purchase_event(
        db, member_id=member.id, product_name=product_name, amount=amount
    )
    logger.info(f"Purchase event {event.id} recorded for member {member.id}: '{product_name}' ({event.amount}).")

    amount_text = _format_amount(event.amount)
    await notification_service.dispatch_both(
        db, member.id, EventKind.PURCHASE_CONFIRMATION,
        locales.PURCHASE_CONFIRMATION.format(product=product_name, amount=amount_text),
    )

    if member.referrer_id:
        await notification_service.dispatch_both(
            db, member.referrer_id, EventKind.REFERRAL_ALERT,
            locales.REFERRAL_PURCHASE.format(name=member.full_name, product=product_name, amount=amount_text),
        )

    return event


def list_purchases(db: Session, member_id: int) -> list[PurchaseEvent]:
    if not crud_member.get_member_by_id(db, member_id=member_id):
        raise NotFoundError("Member", member_id)
    return crud_purchase.get_purchase_events(db, member_id=member_id)
