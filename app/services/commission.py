# app/services/commission.py

import logging
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.orm import Session

from app.crud import purchase as crud_purchase
from app.schemas.referral import MemberStats
from app.services import referral as referral_service

logger = logging.getLogger(__name__)

# Фиксированная ставка комиссии с завершенных покупок рефералов
COMMISSION_RATE = Decimal("0.10")
CENT = Decimal("0.01")


def compute_stats(db: Session, referrer_id: int) -> MemberStats:
    """
    Собирает статистику партнера: всего рефералов, активных и заработок.
    Заработок = 10% от суммы завершенных покупок рефералов, округление один раз в конце.
    """
    total_referrals = referral_service.count_all(db, referrer_id)
    active_referrals = referral_service.count_active(db, referrer_id)

    completed_total = crud_purchase.sum_completed_referral_purchases(db, referrer_id=referrer_id)
    total_earnings = (Decimal(completed_total) * COMMISSION_RATE).quantize(CENT, rounding=ROUND_HALF_UP)

    logger.debug(
        f"Stats for member {referrer_id}: referrals={total_referrals}, "
        f"active={active_referrals}, earnings={total_earnings}"
    )
    return MemberStats(
        total_referrals=total_referrals,
        active_referrals=active_referrals,
        total_earnings=total_earnings,
    )
