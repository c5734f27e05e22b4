# tests/test_member_registration.py

import smtplib

import pytest

from app.clients.mailer import email_client
from app.core.exceptions import ConflictError, ValidationError
from app.crud import notification as crud_notification
from app.models.member import Member
from app.models.referral import Referral
from app.services import member as member_service



def _kinds(db_session, member_id: int, event_kind: str) -> list:
    return crud_notification.get_notification_logs(db_session, member_id=member_id, event_kind=event_kind)


async def test_register_without_referrer(db_session, profile_data):
    """Без токена: пригласившего нет, ровно два приветствия (по одному на канал)."""
    member = await member_service.register(db_session, profile_data)

    assert member.id is not None
    assert member.referrer_id is None
    assert member.is_active is True
    assert member.affiliate_token

    welcome = _kinds(db_session, member.id, "welcome")
    assert len(welcome) == 2
    assert {log.channel for log in welcome} == {"email", "messaging"}
    assert all(log.status == "sent" and log.sent_at is not None for log in welcome)
    assert member.affiliate_token in welcome[0].content

    all_logs = crud_notification.get_notification_logs(db_session, member_id=member.id)
    assert len(all_logs) == 2
    assert db_session.query(Referral).count() == 0


async def test_register_with_valid_referrer_token(db_session, make_member, profile_data):
    """Валидный токен: одна реферальная связь и два referral_alert пригласившему."""
    referrer = make_member(full_name="Referrer")

    member = await member_service.register(db_session, profile_data, referrer_token=referrer.affiliate_token)

    assert member.referrer_id == referrer.id
    edges = db_session.query(Referral).filter(Referral.referred_id == member.id).all()
    assert len(edges) == 1
    assert edges[0].referrer_id == referrer.id

    alerts = _kinds(db_session, referrer.id, "referral_alert")
    assert len(alerts) == 2
    assert {log.channel for log in alerts} == {"email", "messaging"}
    assert all("Jane Doe" in log.content for log in alerts)

    # Новому участнику - только приветствия
    assert len(crud_notification.get_notification_logs(db_session, member_id=member.id)) == 2


async def test_register_takes_referrer_token_from_profile(db_session, make_member, profile_data):
    referrer = make_member()
    profile_data["referrer_token"] = referrer.affiliate_token

    member = await member_service.register(db_session, profile_data)

    assert member.referrer_id == referrer.id


async def test_register_with_unknown_referrer_token(db_session, make_member, profile_data):
    """Неизвестный токен не блокирует регистрацию."""
    make_member()

    member = await member_service.register(db_session, profile_data, referrer_token="stale-link")

    assert member.referrer_id is None
    assert db_session.query(Referral).count() == 0
    assert db_session.query(Member).count() == 2


async def test_register_duplicate_email_conflict(db_session, make_member, profile_data):
    make_member(email=profile_data["email"])

    with pytest.raises(ConflictError):
        await member_service.register(db_session, profile_data)

    assert db_session.query(Member).count() == 1


@pytest.mark.parametrize("field, value", [
    ("full_name", ""),
    ("email", "not-an-email"),
    ("messenger_id", ""),
    ("address", None),
])
async def test_register_rejects_malformed_profile(db_session, profile_data, field, value):
    profile_data[field] = value

    with pytest.raises(ValidationError) as exc_info:
        await member_service.register(db_session, profile_data)

    assert exc_info.value.errors
    assert db_session.query(Member).count() == 0


async def test_register_missing_field(db_session, profile_data):
    del profile_data["address"]

    with pytest.raises(ValidationError):
        await member_service.register(db_session, profile_data)


async def test_affiliate_tokens_are_unique(db_session, profile_data):
    tokens = set()
    for i in range(5):
        profile_data["email"] = f"user{i}@example.com"
        member = await member_service.register(db_session, profile_data)
        tokens.add(member.affiliate_token)
    assert len(tokens) == 5


async def test_generate_affiliate_token_skips_existing(db_session, make_member, mocker):
    make_member(affiliate_token="taken")
    mocker.patch("app.services.member.secrets.token_urlsafe", side_effect=["taken", "fresh"])

    assert member_service.generate_affiliate_token(db_session) == "fresh"


async def test_register_retries_on_token_constraint_violation(db_session, make_member, profile_data, mocker):
    """Коллизия на уникальном индексе (гонка) - токен перегенерируется."""
    existing = make_member(affiliate_token="raced-token")
    mocker.patch(
        "app.services.member.generate_affiliate_token",
        side_effect=[existing.affiliate_token, "second-token"],
    )

    member = await member_service.register(db_session, profile_data)

    assert member.affiliate_token == "second-token"
    assert db_session.query(Member).count() == 2


async def test_register_concurrent_duplicate_email_is_conflict(db_session, make_member, profile_data, mocker):
    """Email занят параллельной регистрацией после проверки - ConflictError, без повторов."""
    existing = make_member(email=profile_data["email"])
    lookup = mocker.patch.object(
        member_service.crud_member, "get_member_by_email", side_effect=[None, existing]
    )

    with pytest.raises(ConflictError):
        await member_service.register(db_session, profile_data)

    assert lookup.call_count == 2
    assert db_session.query(Member).count() == 1
    assert db_session.query(Referral).count() == 0


async def test_register_succeeds_when_email_delivery_fails(db_session, profile_data, mocker):
    """Падение почты не откатывает регистрацию."""
    mocker.patch.object(email_client, "_deliver", side_effect=smtplib.SMTPException("smtp down"))

    member = await member_service.register(db_session, profile_data)

    logs = {log.channel: log for log in _kinds(db_session, member.id, "welcome")}
    assert logs["email"].status == "failed"
    assert logs["email"].sent_at is None
    assert logs["messaging"].status == "sent"


async def test_find_by_token_and_id(db_session, make_member):
    member = make_member()

    assert member_service.find_by_token(db_session, member.affiliate_token).id == member.id
    assert member_service.find_by_id(db_session, member.id).email == member.email
    assert member_service.find_by_token(db_session, "missing") is None
    assert member_service.find_by_id(db_session, 999) is None
