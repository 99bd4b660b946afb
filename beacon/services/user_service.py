"""
beacon.services.user_service — Users, Points, Check-ins & Leaderboard
======================================================================

Also home to :func:`resolve_current_user`, the single place that decides
which user a request acts as.  There is no authentication: the most
recently created user is "the caller", and a demo user is created when
the table is empty.  Swap this function out for session/token identity
without touching the routes.

.. warning::

    Because identity is global, creating another user (e.g. from a
    concurrent test run) silently changes who every later request acts as.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from beacon.database.engine import get_session
from beacon.database.models import User
from beacon.engine.referral import generate_referral_code

if TYPE_CHECKING:
    from sqlalchemy import Engine
    from sqlalchemy.orm import Session

    from beacon.config import BeaconConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_all_users(engine: Engine) -> list[User]:
    """Every user, oldest first (creation order)."""
    with get_session(engine) as session:
        return list(session.scalars(
            select(User).order_by(User.created_at, User.id)
        ).all())


def get_user(engine: Engine, user_id: str) -> User | None:
    with get_session(engine) as session:
        return session.get(User, user_id)


def get_leaderboard(engine: Engine, page: int, page_size: int) -> list[User]:
    """Zero-based *page* of users ranked by points (highest first).

    Ties keep the older account ahead.
    """
    with get_session(engine) as session:
        return list(session.scalars(
            select(User)
            .order_by(User.points.desc(), User.created_at, User.id)
            .offset(page * page_size)
            .limit(page_size)
        ).all())


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def _unused_referral_code(session: Session) -> str:
    while True:
        code = generate_referral_code()
        taken = session.scalar(select(User.id).where(User.referral_code == code))
        if taken is None:
            return code


def create_user(engine: Engine, username: str, password: str) -> User:
    """Insert a user with zero points and a fresh referral code."""
    with get_session(engine) as session:
        user = User(
            username=username,
            password=password,
            points=0,
            referral_code=_unused_referral_code(session),
        )
        session.add(user)
        session.flush()
        logger.info("Created user %s (%s)", user.id, username)
        return user


def _locked_user(session: Session, user_id: str) -> User:
    user = session.get(User, user_id, with_for_update=True)
    if user is None:
        raise ValueError(f"User not found: {user_id}")
    return user


def update_user_points(engine: Engine, user_id: str, delta: int) -> User:
    """Add *delta* points (may be negative) and return the updated user."""
    with get_session(engine) as session:
        user = _locked_user(session, user_id)
        user.points += delta
        logger.debug("User %s points %+d → %d", user_id, delta, user.points)
        return user


def update_user_checkin(
    engine: Engine,
    user_id: str,
    points: int,
    now: datetime | None = None,
) -> User:
    """Stamp the check-in time and award *points*.

    Same-day eligibility is the caller's concern
    (:func:`beacon.engine.checkin.already_checked_in_today`).
    """
    with get_session(engine) as session:
        user = _locked_user(session, user_id)
        user.last_checkin = now or datetime.now(UTC)
        user.points += points
        logger.info("User %s checked in (+%d → %d)", user_id, points, user.points)
        return user


# ---------------------------------------------------------------------------
# Request identity
# ---------------------------------------------------------------------------

def resolve_current_user(engine: Engine, cfg: BeaconConfig) -> User:
    """Return the user a request acts as.

    Empty table → create the demo user.  Otherwise the most recently
    created user wins (not the first).

    Concurrent first requests race to insert the demo user; the losers hit
    the unique username constraint and re-read instead.
    """
    users = get_all_users(engine)
    if users:
        return users[-1]

    logger.info("No users yet — bootstrapping demo user %r", cfg.demo_username)
    try:
        return create_user(engine, cfg.demo_username, cfg.demo_password)
    except IntegrityError:
        users = get_all_users(engine)
        if not users:
            raise
        logger.debug("Demo user created by a concurrent request — reusing it")
        return users[-1]
