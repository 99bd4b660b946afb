"""
beacon.services.settings_service — Per-user settings CRUD
==========================================================

Settings are one-to-one with users and created lazily.  Callers pass and
receive API field names (``theme``, ``notifications``,
``emailNotifications``); the mapping to columns lives here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from beacon.database.engine import get_session
from beacon.database.models import UserSettings

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)

# API field → column attribute
FIELD_COLUMNS: dict[str, str] = {
    "theme": "theme",
    "notifications": "notifications",
    "emailNotifications": "email_notifications",
}


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_settings_by_user_id(engine: Engine, user_id: str) -> UserSettings | None:
    with get_session(engine) as session:
        return session.scalar(
            select(UserSettings).where(UserSettings.user_id == user_id)
        )


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def create_settings(engine: Engine, data: dict[str, Any], user_id: str) -> UserSettings:
    """Insert settings for *user_id*.  *data* must hold every field."""
    with get_session(engine) as session:
        settings = UserSettings(
            user_id=user_id,
            **{FIELD_COLUMNS[k]: data[k] for k in FIELD_COLUMNS},
        )
        session.add(settings)
        session.flush()
        logger.info("Created settings for user %s (theme=%s)", user_id, settings.theme)
        return settings


def update_settings(engine: Engine, user_id: str, data: dict[str, Any]) -> UserSettings:
    """Apply a partial update.  Only keys present in *data* change.

    Raises
    ------
    ValueError
        If *user_id* has no settings row, or *data* holds an unknown field.
    """
    unknown = set(data) - set(FIELD_COLUMNS)
    if unknown:
        raise ValueError(f"Unknown settings field(s): {sorted(unknown)}")

    with get_session(engine) as session:
        settings = session.scalar(
            select(UserSettings).where(UserSettings.user_id == user_id)
        )
        if settings is None:
            raise ValueError(f"Settings not found for user: {user_id}")
        for key, value in data.items():
            setattr(settings, FIELD_COLUMNS[key], value)
        session.flush()
        logger.debug("Updated settings for user %s: %s", user_id, sorted(data))
        return settings
