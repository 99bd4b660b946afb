"""
beacon.services.message_service — Message persistence
======================================================
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from beacon.database.engine import get_session
from beacon.database.models import Message

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


def get_messages_by_user_id(engine: Engine, user_id: str) -> list[Message]:
    """All of *user_id*'s messages in the order they were sent."""
    with get_session(engine) as session:
        return list(session.scalars(
            select(Message)
            .where(Message.user_id == user_id)
            .order_by(Message.created_at, Message.id)
        ).all())


def create_message(engine: Engine, data: dict, user_id: str) -> Message:
    """Persist a message for *user_id*.  *data* must carry ``content``."""
    with get_session(engine) as session:
        message = Message(user_id=user_id, content=data["content"])
        session.add(message)
        session.flush()
        logger.debug("Message %s created for user %s", message.id, user_id)
        return message
