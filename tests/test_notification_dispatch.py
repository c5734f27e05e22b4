# tests/test_notification_dispatch.py

import smtplib
from unittest.mock import AsyncMock

import pytest
from aiogram.exceptions import TelegramForbiddenError
from aiogram.methods import SendMessage

from app.clients.delivery import DeliveryResult
from app.clients.mailer import email_client
from app.clients.messaging import messaging_client
from app.core.exceptions import DeliveryFailure, NotFoundError, ValidationError
from app.models.notification import NotificationLog
from app.schemas.notification import Channel, EventKind
from app.services import notification as notification_service


async def test_dispatch_unknown_member(db_session):
    with pytest.raises(NotFoundError):
        await notification_service.dispatch(db_session, 1, Channel.EMAIL, EventKind.WELCOME, "hi")

    assert db_session.query(NotificationLog).count() == 0


async def test_dispatch_success_uses_member_destination(db_session, make_member, mock_bot_send):
    member = make_member(messenger_id="777000")

    record = await notification_service.dispatch(
        db_session, member.id, Channel.MESSAGING, EventKind.WELCOME, "Привет!"
    )

    assert record.status == "sent"
    assert record.sent_at is not None
    assert record.channel == "messaging"
    assert record.content == "Привет!"
    mock_bot_send.assert_awaited_once_with(chat_id="777000", text="Привет!")


async def test_dispatch_email_failure_is_recorded_not_raised(db_session, make_member, mocker):
    member = make_member()
    mocker.patch.object(email_client, "_deliver", side_effect=smtplib.SMTPException("mailbox unavailable"))

    record = await notification_service.dispatch(
        db_session, member.id, Channel.EMAIL, EventKind.PURCHASE_CONFIRMATION, "Спасибо за покупку"
    )

    assert record.status == "failed"
    assert record.sent_at is None
    assert db_session.query(NotificationLog).count() == 1


async def test_dispatch_blocked_bot_is_recorded_as_failed(db_session, make_member, mock_bot_send):
    member = make_member()
    mock_bot_send.side_effect = TelegramForbiddenError(
        method=SendMessage(chat_id=member.messenger_id, text="x"),
        message="Forbidden: bot was blocked by the user",
    )

    record = await notification_service.dispatch(
        db_session, member.id, Channel.MESSAGING, EventKind.REFERRAL_ALERT, "x"
    )

    assert record.status == "failed"
    assert record.sent_at is None


async def test_dispatch_catches_delivery_failure_raised_by_client(db_session, make_member, mocker):
    member = make_member()
    mocker.patch.object(
        messaging_client, "send",
        new=AsyncMock(side_effect=DeliveryFailure("messaging", "gateway timeout")),
    )

    record = await notification_service.dispatch(
        db_session, member.id, Channel.MESSAGING, EventKind.WELCOME, "hi"
    )

    assert record.status == "failed"


async def test_dispatch_both_channels_are_independent(db_session, make_member, mocker):
    member = make_member()
    mocker.patch.object(
        email_client, "send",
        new=AsyncMock(return_value=DeliveryResult.failed(DeliveryFailure("email", "bounced"))),
    )

    records = await notification_service.dispatch_both(db_session, member.id, EventKind.WELCOME, {
        Channel.EMAIL: "email text",
        Channel.MESSAGING: "messaging text",
    })

    by_channel = {r.channel: r for r in records}
    assert by_channel["email"].status == "failed"
    assert by_channel["email"].content == "email text"
    assert by_channel["messaging"].status == "sent"
    assert by_channel["messaging"].content == "messaging text"


async def test_dispatch_both_with_single_text(db_session, make_member):
    member = make_member()

    records = await notification_service.dispatch_both(db_session, member.id, EventKind.WELCOME, "same text")

    assert [r.channel for r in records] == ["email", "messaging"]
    assert all(r.content == "same text" for r in records)


async def test_list_logs_newest_first(db_session, make_member):
    member = make_member()
    await notification_service.dispatch(db_session, member.id, Channel.EMAIL, EventKind.WELCOME, "first")
    await notification_service.dispatch(db_session, member.id, Channel.EMAIL, EventKind.PURCHASE_CONFIRMATION, "second")

    logs = notification_service.list_logs(db_session, member.id)
    assert [log.content for log in logs] == ["second", "first"]

    welcome_only = notification_service.list_logs(db_session, member.id, EventKind.WELCOME)
    assert [log.content for log in welcome_only] == ["first"]


async def test_dispatch_unexpected_bot_error_is_recorded_as_failed(db_session, make_member, mock_bot_send):
    """Любая ошибка транспорта (не только aiogram) превращается в запись 'failed'."""
    member = make_member()
    mock_bot_send.side_effect = RuntimeError("session closed")

    record = await notification_service.dispatch(
        db_session, member.id, Channel.MESSAGING, EventKind.WELCOME, "hi"
    )

    assert record.status == "failed"
    assert record.sent_at is None
    assert db_session.query(NotificationLog).count() == 1


async def test_dispatch_catches_unexpected_client_error(db_session, make_member, mocker):
    member = make_member()
    mocker.patch.object(email_client, "send", new=AsyncMock(side_effect=KeyError("template")))

    records = await notification_service.dispatch_both(db_session, member.id, EventKind.WELCOME, "hi")

    by_channel = {r.channel: r.status for r in records}
    assert by_channel == {"email": "failed", "messaging": "sent"}


@pytest.mark.parametrize("channel, event_kind", [
    ("sms", EventKind.WELCOME),
    (Channel.EMAIL, "birthday"),
])
async def test_dispatch_rejects_unknown_channel_or_event(db_session, make_member, channel, event_kind):
    member = make_member()

    with pytest.raises(ValidationError):
        await notification_service.dispatch(db_session, member.id, channel, event_kind, "hi")

    assert db_session.query(NotificationLog).count() == 0


def test_list_logs_for_unknown_member_is_empty(db_session):
    assert notification_service.list_logs(db_session, 404) == []
