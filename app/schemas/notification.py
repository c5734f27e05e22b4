# app/schemas/notification.py
from enum import Enum
from pydantic import BaseModel, Field
from datetime import datetime


class Channel(str, Enum):
    EMAIL = "email"
    MESSAGING = "messaging"


class EventKind(str, Enum):
    WELCOME = "welcome"
    PURCHASE_CONFIRMATION = "purchase_confirmation"
    REFERRAL_ALERT = "referral_alert"


class DeliveryStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"
    PENDING = "pending"


class NotificationSend(BaseModel):
    member_id: int
    channel: Channel
    event_kind: EventKind
    content: str = Field(min_length=1)


class NotificationRecord(BaseModel):
    id: int
    member_id: int
    channel: Channel
    event_kind: EventKind
    status: DeliveryStatus
    content: str | None
    sent_at: datetime | None
    created_at: datetime

    class Config:
        from_attributes = True
