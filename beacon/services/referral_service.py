"""
beacon.services.referral_service — Referral Stats & Completion
===============================================================

Every user owns a referral code (generated in
:func:`~beacon.services.user_service.create_user`).  Completing a referral
records who redeemed whose code, credits the referrer and drops a
notification in their inbox, all in one transaction.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from beacon.constants import REFERRAL_NOTIFICATION_MESSAGE, REFERRAL_NOTIFICATION_TITLE
from beacon.database.engine import get_session
from beacon.database.models import Notification, Referral, User
from beacon.engine.referral import normalize_referral_code

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


def get_referral_stats(engine: Engine, user_id: str) -> dict:
    """Summarize *user_id*'s referral activity.

    Raises
    ------
    ValueError
        If the user does not exist.
    """
    with get_session(engine) as session:
        user = session.get(User, user_id)
        if user is None:
            raise ValueError(f"User not found: {user_id}")

        total = session.scalar(
            select(func.count()).select_from(Referral)
            .where(Referral.referrer_id == user_id)
        ) or 0
        completed = session.scalar(
            select(func.count()).select_from(Referral)
            .where(Referral.referrer_id == user_id, Referral.completed.is_(True))
        ) or 0
        points_earned = session.scalar(
            select(func.coalesce(func.sum(Referral.points_awarded), 0))
            .where(Referral.referrer_id == user_id)
        ) or 0

        return {
            "referralCode": user.referral_code,
            "totalReferrals": total,
            "completedReferrals": completed,
            "pendingReferrals": total - completed,
            "pointsEarned": points_earned,
        }


def complete_referral(engine: Engine, referral_code: str, user_id: str, points: int) -> bool:
    """Redeem *referral_code* on behalf of *user_id*.

    Returns ``False`` (nothing written) when the code matches no user, the
    redeeming user does not exist, the code is the user's own, or the user
    has already been referred.
    """
    code = normalize_referral_code(referral_code)
    with get_session(engine) as session:
        referrer = session.scalar(select(User).where(User.referral_code == code))
        if referrer is None:
            logger.info("Referral code %r matches no user", code)
            return False

        referred = session.get(User, user_id)
        if referred is None or referred.id == referrer.id:
            return False

        already = session.scalar(
            select(Referral.id).where(Referral.referred_user_id == referred.id)
        )
        if already is not None:
            logger.info("User %s was already referred", referred.id)
            return False

        session.add(Referral(
            referrer_id=referrer.id,
            referred_user_id=referred.id,
            referral_code=code,
            completed=True,
            points_awarded=points,
            completed_at=datetime.now(UTC),
        ))
        referrer.points += points
        session.add(Notification(
            user_id=referrer.id,
            title=REFERRAL_NOTIFICATION_TITLE,
            message=REFERRAL_NOTIFICATION_MESSAGE.format(
                username=referred.username, points=points,
            ),
            read=False,
        ))
        logger.info(
            "Referral completed: %s referred %s (+%d)", referrer.id, referred.id, points,
        )
        return True
