"""
beacon.api.routes.notifications — Notification inbox
======================================================

Read/delete by id are not scoped to the current user; they act on
whichever notification the id names.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy import Engine

from beacon.api.deps import get_config, get_engine
from beacon.api.responses import error_response, iso, success_response
from beacon.config import BeaconConfig
from beacon.database.engine import run_db
from beacon.database.models import Notification
from beacon.services import notification_service, user_service

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class NotificationCreate(BaseModel):
    title: Annotated[str, Field(min_length=1, max_length=200)]
    message: Annotated[str, Field(min_length=1)]


def _notification_dict(n: Notification) -> dict:
    return {
        "id": n.id,
        "userId": n.user_id,
        "title": n.title,
        "message": n.message,
        "read": n.read,
        "createdAt": iso(n.created_at),
    }


# ---------------------------------------------------------------------------
# Inbox
# ---------------------------------------------------------------------------
@router.get("")
async def list_notifications(
    engine: Engine = Depends(get_engine),
    cfg: BeaconConfig = Depends(get_config),
):
    try:
        user = await run_db(user_service.resolve_current_user, engine, cfg)
        rows = await run_db(
            notification_service.get_notifications_by_user_id, engine, user.id,
        )
        return [_notification_dict(n) for n in rows]
    except Exception:
        logger.exception("Failed to fetch notifications")
        return error_response(500, "Failed to fetch notifications")


@router.post("")
async def create_notification(
    request: Request,
    engine: Engine = Depends(get_engine),
    cfg: BeaconConfig = Depends(get_config),
):
    try:
        user = await run_db(user_service.resolve_current_user, engine, cfg)
        body = NotificationCreate.model_validate(await request.json())
        notification = await run_db(
            notification_service.create_notification, engine, body.model_dump(), user.id,
        )
        return _notification_dict(notification)
    except (ValidationError, json.JSONDecodeError, UnicodeDecodeError):
        return error_response(400, "Invalid notification data")
    except Exception:
        logger.exception("Failed to create notification")
        return error_response(400, "Invalid notification data")


# ---------------------------------------------------------------------------
# Read state
# ---------------------------------------------------------------------------
@router.post("/mark-all-read")
async def mark_all_read(
    engine: Engine = Depends(get_engine),
    cfg: BeaconConfig = Depends(get_config),
):
    try:
        user = await run_db(user_service.resolve_current_user, engine, cfg)
        await run_db(notification_service.mark_all_notifications_as_read, engine, user.id)
        return success_response()
    except Exception:
        logger.exception("Failed to mark all notifications as read")
        return error_response(500, "Failed to mark all notifications as read")


@router.patch("/{notification_id}/read")
async def mark_read(
    notification_id: str,
    engine: Engine = Depends(get_engine),
):
    try:
        notification = await run_db(
            notification_service.mark_notification_as_read, engine, notification_id,
        )
        if notification is None:
            return error_response(404, "Notification not found")
        return _notification_dict(notification)
    except Exception:
        logger.exception("Failed to mark notification %s as read", notification_id)
        return error_response(500, "Failed to mark notification as read")


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: str,
    engine: Engine = Depends(get_engine),
):
    try:
        deleted = await run_db(
            notification_service.delete_notification, engine, notification_id,
        )
        if not deleted:
            return error_response(404, "Notification not found")
        return success_response()
    except Exception:
        logger.exception("Failed to delete notification %s", notification_id)
        return error_response(500, "Failed to delete notification")
