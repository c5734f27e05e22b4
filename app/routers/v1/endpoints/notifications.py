# app/routers/v1/endpoints/notifications.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.dependencies import get_db
from app.schemas.notification import NotificationRecord, NotificationSend
from app.services import notification as notification_service

router = APIRouter()


@router.post("/notifications", response_model=NotificationRecord, status_code=status.HTTP_201_CREATED)
async def send_notification(payload: NotificationSend, db: Session = Depends(get_db)):
    """
    Ручная отправка уведомления. Ошибка доставки не приводит к ошибке запроса:
    в ответе будет запись со статусом 'failed'.
    """
    return await notification_service.dispatch(
        db, payload.member_id, payload.channel, payload.event_kind, payload.content
    )
