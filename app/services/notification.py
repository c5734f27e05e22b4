# app/services/notification.py
"""
Диспетчер уведомлений.

Каждая отправка - отдельная попытка: результат пишется в notification_logs,
а ошибка канала логируется и дальше не пробрасывается. Регистрация или
покупка, вызвавшая уведомление, уже сохранена и не зависит от доставки.
"""
import logging
from datetime import datetime, timezone
from typing import Mapping

from sqlalchemy.orm import Session

from app.clients.delivery import DeliveryClient, DeliveryResult
from app.clients.mailer import email_client
from app.clients.messaging import messaging_client
from app.core.exceptions import DeliveryFailure, NotFoundError, ValidationError
from app.crud import member as crud_member
from app.crud import notification as crud_notification
from app.models.member import Member
from app.models.notification import NotificationLog
from app.schemas.notification import Channel, DeliveryStatus, EventKind

logger = logging.getLogger(__name__)


def get_delivery_client(channel: Channel) -> DeliveryClient:
    if channel == Channel.EMAIL:
        return email_client
    return messaging_client


def _destination(member: Member, channel: Channel) -> str:
    if channel == Channel.EMAIL:
        return member.email
    return member.messenger_id


async def _deliver(client: DeliveryClient, destination: str, content: str) -> DeliveryResult:
    try:
        return await client.send(destination, content)
    except DeliveryFailure as failure:
        return DeliveryResult.failed(failure)
    except Exception as e:
        logger.error(f"Delivery client '{client.channel}' raised unexpectedly: {e}", exc_info=True)
        return DeliveryResult.failed(DeliveryFailure(client.channel, str(e)))


async def dispatch(
    db: Session,
    member_id: int,
    channel: Channel,
    event_kind: EventKind,
    content: str,
) -> NotificationLog:
    """
    Отправляет одно уведомление и записывает результат.
    ValidationError - неизвестный канал или тип события, NotFoundError - если участника нет.
    Ошибка доставки дает запись со статусом 'failed'.
    """
    try:
        channel = Channel(channel)
        event_kind = EventKind(event_kind)
    except ValueError as e:
        raise ValidationError("Invalid notification channel or event kind", errors=[str(e)]) from e

    member = crud_member.get_member_by_id(db, member_id=member_id)
    if not member:
        raise NotFoundError("Member", member_id)

    result = await _deliver(get_delivery_client(channel), _destination(member, channel), content)

    if result.delivered:
        status, sent_at = DeliveryStatus.SENT, datetime.now(timezone.utc)
        logger.info(f"Notification '{event_kind.value}' sent to member {member_id} via {channel.value}.")
    else:
        status, sent_at = DeliveryStatus.FAILED, None
        logger.error(
            f"Notification '{event_kind.value}' to member {member_id} via {channel.value} failed: "
            f"{result.failure.reason if result.failure else 'unknown reason'}"
        )

    return crud_notification.create_notification_log(
        db,
        member_id=member_id,
        channel=channel.value,
        event_kind=event_kind.value,
        status=status.value,
        content=content,
        sent_at=sent_at,
    )


async def dispatch_both(
    db: Session,
    member_id: int,
    event_kind: EventKind,
    contents: str | Mapping[Channel, str],
) -> list[NotificationLog]:
    """Рассылает событие по обоим каналам. Каналы независимы друг от друга."""
    if isinstance(contents, str):
        contents = {Channel.EMAIL: contents, Channel.MESSAGING: contents}

    records = []
    for channel in (Channel.EMAIL, Channel.MESSAGING):
        records.append(await dispatch(db, member_id, channel, event_kind, contents[channel]))
    return records


def list_logs(db: Session, member_id: int, event_kind: EventKind | None = None) -> list[NotificationLog]:
    return crud_notification.get_notification_logs(
        db, member_id=member_id, event_kind=EventKind(event_kind).value if event_kind else None
    )
