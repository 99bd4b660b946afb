"""
beacon.api.routes.settings — Per-user display & notification settings
=======================================================================

Settings are created lazily.  ``PATCH`` keeps two explicit paths: with no
row yet it creates one from the supplied fields merged over the defaults;
otherwise it updates only the supplied fields.  A supplied ``false`` is
never replaced by a default.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field, StrictBool, ValidationError, model_validator
from sqlalchemy import Engine

from beacon.api.deps import get_config, get_engine
from beacon.api.responses import error_response, iso
from beacon.config import BeaconConfig
from beacon.constants import (
    DEFAULT_EMAIL_NOTIFICATIONS,
    DEFAULT_NOTIFICATIONS,
    DEFAULT_THEME,
)
from beacon.database.engine import run_db
from beacon.database.models import UserSettings
from beacon.services import settings_service, user_service

router = APIRouter(prefix="/settings", tags=["settings"])
logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: dict = {
    "theme": DEFAULT_THEME,
    "notifications": DEFAULT_NOTIFICATIONS,
    "emailNotifications": DEFAULT_EMAIL_NOTIFICATIONS,
}


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class SettingsPatch(BaseModel):
    """Any subset of the settings fields.  Omitted ≠ null: null is rejected."""

    theme: Annotated[str, Field(min_length=1, max_length=20)] | None = None
    notifications: StrictBool | None = None
    email_notifications: StrictBool | None = Field(default=None, alias="emailNotifications")

    @model_validator(mode="after")
    def _reject_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} may not be null")
        return self

    def supplied(self) -> dict:
        """Only the fields the client sent, keyed by API name."""
        return self.model_dump(exclude_unset=True, by_alias=True)


def _settings_dict(s: UserSettings) -> dict:
    return {
        "id": s.id,
        "userId": s.user_id,
        "theme": s.theme,
        "notifications": s.notifications,
        "emailNotifications": s.email_notifications,
        "updatedAt": iso(s.updated_at),
    }


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@router.get("")
async def get_settings(
    engine: Engine = Depends(get_engine),
    cfg: BeaconConfig = Depends(get_config),
):
    """Current settings, creating the defaults on first read."""
    try:
        user = await run_db(user_service.resolve_current_user, engine, cfg)
        settings = await run_db(settings_service.get_settings_by_user_id, engine, user.id)
        if settings is None:
            settings = await run_db(
                settings_service.create_settings, engine, dict(DEFAULT_SETTINGS), user.id,
            )
        return _settings_dict(settings)
    except Exception:
        logger.exception("Failed to fetch settings")
        return error_response(500, "Failed to fetch settings")


@router.patch("")
async def patch_settings(
    request: Request,
    engine: Engine = Depends(get_engine),
    cfg: BeaconConfig = Depends(get_config),
):
    try:
        user = await run_db(user_service.resolve_current_user, engine, cfg)
        supplied = SettingsPatch.model_validate(await request.json()).supplied()

        settings = await run_db(settings_service.get_settings_by_user_id, engine, user.id)
        if settings is None:
            settings = await run_db(
                settings_service.create_settings,
                engine,
                {**DEFAULT_SETTINGS, **supplied},
                user.id,
            )
        else:
            settings = await run_db(
                settings_service.update_settings, engine, user.id, supplied,
            )
        return _settings_dict(settings)
    except (ValidationError, json.JSONDecodeError, UnicodeDecodeError):
        return error_response(400, "Invalid settings data")
    except Exception:
        logger.exception("Failed to update settings")
        return error_response(400, "Invalid settings data")
