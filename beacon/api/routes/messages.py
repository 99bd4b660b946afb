"""
beacon.api.routes.messages — Message feed & posting
=====================================================
"""

from __future__ import annotations

import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy import Engine

from beacon.api.deps import get_config, get_engine
from beacon.api.responses import error_response, iso
from beacon.config import BeaconConfig
from beacon.database.engine import run_db
from beacon.database.models import Message
from beacon.services import message_service, user_service

router = APIRouter(tags=["messages"])
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class MessageCreate(BaseModel):
    content: Annotated[str, Field(min_length=1)]


def _message_dict(m: Message) -> dict:
    return {
        "id": m.id,
        "userId": m.user_id,
        "content": m.content,
        "createdAt": iso(m.created_at),
    }


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@router.get("/messages")
async def list_messages(
    engine: Engine = Depends(get_engine),
    cfg: BeaconConfig = Depends(get_config),
):
    try:
        user = await run_db(user_service.resolve_current_user, engine, cfg)
        messages = await run_db(message_service.get_messages_by_user_id, engine, user.id)
        return [_message_dict(m) for m in messages]
    except Exception:
        logger.exception("Failed to fetch messages")
        return error_response(500, "Failed to fetch messages")


@router.post("/messages")
async def create_message(
    request: Request,
    engine: Engine = Depends(get_engine),
    cfg: BeaconConfig = Depends(get_config),
):
    """Post a message and earn points for it."""
    try:
        user = await run_db(user_service.resolve_current_user, engine, cfg)
        body = MessageCreate.model_validate(await request.json())
        message = await run_db(
            message_service.create_message, engine, body.model_dump(), user.id,
        )
        await run_db(user_service.update_user_points, engine, user.id, cfg.message_points)
        return _message_dict(message)
    except (ValidationError, json.JSONDecodeError, UnicodeDecodeError):
        return error_response(400, "Invalid message data")
    except Exception:
        logger.exception("Failed to create message")
        return error_response(400, "Invalid message data")
