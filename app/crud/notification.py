# app/crud/notification.py
from datetime import datetime
from sqlalchemy.orm import Session
from app.models.notification import NotificationLog
from typing import List

def create_notification_log(
    db: Session,
    member_id: int,
    channel: str,
    event_kind: str,
    status: str,
    content: str | None = None,
    sent_at: datetime | None = None,
) -> NotificationLog:
    """Записывает результат попытки доставки."""
    db_log = NotificationLog(
        member_id=member_id,
        channel=channel,
        event_kind=event_kind,
        status=status,
        content=content,
        sent_at=sent_at,
    )
    db.add(db_log)
    db.commit()
    db.refresh(db_log)
    return db_log

def get_notification_logs(db: Session, member_id: int, event_kind: str | None = None) -> List[NotificationLog]:
    """Журнал уведомлений участника, новые сверху."""
    query = db.query(NotificationLog).filter(NotificationLog.member_id == member_id)
    if event_kind:
        query = query.filter(NotificationLog.event_kind == event_kind)
    return query.order_by(NotificationLog.created_at.desc(), NotificationLog.id.desc()).all()
