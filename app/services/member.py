# app/services/member.py

import logging
import secrets
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import locales
from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.crud import member as crud_member
from app.crud import referral as crud_referral
from app.models.member import Member
from app.schemas.member import MemberRegister
from app.schemas.notification import Channel, EventKind
from app.services import notification as notification_service

logger = logging.getLogger(__name__)

# Сколько раз пробуем вставить участника при коллизии партнерского токена
MAX_TOKEN_ATTEMPTS = 5


def generate_affiliate_token(db: Session) -> str:
    """Генерирует партнерский токен, которого еще нет в БД."""
    token = secrets.token_urlsafe(settings.AFFILIATE_TOKEN_BYTES)
    while crud_member.get_member_by_affiliate_token(db, token=token):
        token = secrets.token_urlsafe(settings.AFFILIATE_TOKEN_BYTES)
    return token


def _validate_profile(profile: MemberRegister | Mapping[str, Any]) -> MemberRegister:
    if isinstance(profile, MemberRegister):
        return profile
    try:
        return MemberRegister.model_validate(profile)
    except PydanticValidationError as e:
        raise ValidationError("Invalid member profile", errors=e.errors()) from e


def _create_member_with_referral(db: Session, data: MemberRegister, referrer: Member | None) -> Member:
    """
    Создает участника и реферальную связь в одной транзакции.
    При коллизии токена (уникальный индекс) генерирует новый и повторяет.
    """
    referrer_id = referrer.id if referrer else None

    for attempt in range(1, MAX_TOKEN_ATTEMPTS + 1):
        token = generate_affiliate_token(db)
        try:
            member = crud_member.create_member(
                db,
                full_name=data.full_name,
                email=data.email,
                messenger_id=data.messenger_id,
                address=data.address,
                affiliate_token=token,
                referrer_id=referrer_id,
            )
            if referrer_id:
                crud_referral.create_referral(db, referrer_id=referrer_id, referred_id=member.id)
            db.commit()
        except IntegrityError:
            db.rollback()
            # Параллельная регистрация с тем же email успела раньше
            if crud_member.get_member_by_email(db, email=data.email):
                raise ConflictError(f"Email {data.email} is already registered")
            logger.warning(f"Affiliate token collision on attempt {attempt}. Regenerating.")
            continue

        db.refresh(member)
        if referrer_id:
            logger.info(f"Referral link created: referrer_id={referrer_id} -> referred_id={member.id}")
        return member

    raise ConflictError("Could not generate a unique affiliate token")


async def register(
    db: Session,
    profile: MemberRegister | Mapping[str, Any],
    referrer_token: str | None = None,
) -> Member:
    """
    Регистрирует участника.

    1. Проверяет профиль и уникальность email.
    2. Ищет пригласившего по токену (если токен не найден - регистрируем без него).
    3. Сохраняет участника и реферальную связь.
    4. Шлет приветствие участнику и, если есть пригласивший, уведомление ему.
    """
    data = _validate_profile(profile)
    referrer_token = referrer_token or data.referrer_token

    if crud_member.get_member_by_email(db, email=data.email):
        raise ConflictError(f"Email {data.email} is already registered")

    referrer = None
    if referrer_token:
        referrer = crud_member.get_member_by_affiliate_token(db, token=referrer_token)
        if not referrer:
            logger.info(f"Referrer token '{referrer_token}' not found. Registering without referrer.")

    member = _create_member_with_referral(db, data, referrer)
    logger.info(f"Member {member.id} registered (referrer_id={member.referrer_id}).")

    link = settings.affiliate_link(member.affiliate_token)
    await notification_service.dispatch_both(db, member.id, EventKind.WELCOME, {
        Channel.EMAIL: locales.WELCOME_EMAIL.format(name=member.full_name, link=link),
        Channel.MESSAGING: locales.WELCOME_MESSAGING.format(name=member.full_name, link=link),
    })

    if referrer:
        await notification_service.dispatch_both(db, referrer.id, EventKind.REFERRAL_ALERT, {
            Channel.EMAIL: locales.REFERRAL_JOINED_EMAIL.format(name=member.full_name),
            Channel.MESSAGING: locales.REFERRAL_JOINED_MESSAGING.format(name=member.full_name),
        })

    return member


def find_by_id(db: Session, member_id: int) -> Member | None:
    return crud_member.get_member_by_id(db, member_id=member_id)


def find_by_token(db: Session, token: str) -> Member | None:
    return crud_member.get_member_by_affiliate_token(db, token=token)


def get_member(db: Session, member_id: int) -> Member:
    member = crud_member.get_member_by_id(db, member_id=member_id)
    if not member:
        raise NotFoundError("Member", member_id)
    return member


def set_active(db: Session, member_id: int, is_active: bool) -> Member:
    member = get_member(db, member_id)
    member = crud_member.update_member_active(db, member, is_active)
    logger.info(f"Member {member_id} is_active set to {is_active}.")
    return member
