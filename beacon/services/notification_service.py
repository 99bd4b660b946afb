"""
beacon.services.notification_service — Per-user notification inbox
====================================================================

Lookups by notification id are not scoped to a user: mark-read and delete
act on whatever notification the id names.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select, update

from beacon.database.engine import get_session
from beacon.database.models import Notification

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_notifications_by_user_id(engine: Engine, user_id: str) -> list[Notification]:
    """*user_id*'s notifications, newest first."""
    with get_session(engine) as session:
        return list(session.scalars(
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id)
        ).all())


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def create_notification(engine: Engine, data: dict, user_id: str) -> Notification:
    """Insert an unread notification.  *data* carries ``title`` and ``message``."""
    with get_session(engine) as session:
        notification = Notification(
            user_id=user_id,
            title=data["title"],
            message=data["message"],
            read=False,
        )
        session.add(notification)
        session.flush()
        logger.debug("Notification %s → user %s: %s", notification.id, user_id, data["title"])
        return notification


def mark_notification_as_read(engine: Engine, notification_id: str) -> Notification | None:
    """Flag one notification read.  Returns ``None`` for an unknown id."""
    with get_session(engine) as session:
        notification = session.get(Notification, notification_id)
        if notification is None:
            return None
        notification.read = True
        return notification


def mark_all_notifications_as_read(engine: Engine, user_id: str) -> int:
    """Flag every unread notification of *user_id*.  Returns rows touched."""
    with get_session(engine) as session:
        result = session.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.read.is_(False))
            .values(read=True)
        )
        logger.debug("Marked %d notification(s) read for user %s", result.rowcount, user_id)
        return result.rowcount


def delete_notification(engine: Engine, notification_id: str) -> bool:
    """Delete one notification.  Returns ``False`` if the id is unknown."""
    with get_session(engine) as session:
        notification = session.get(Notification, notification_id)
        if notification is None:
            return False
        session.delete(notification)
        return True
