"""
beacon.api.routes.users — Current user, daily check-in & leaderboard
=====================================================================
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy import Engine

from beacon.api.deps import get_config, get_engine
from beacon.api.responses import error_response, iso
from beacon.config import BeaconConfig
from beacon.constants import (
    CHECKIN_NOTIFICATION_MESSAGE,
    CHECKIN_NOTIFICATION_TITLE,
    LEADERBOARD_MAX_PAGE,
    LEADERBOARD_PAGE_SIZE,
)
from beacon.database.engine import run_db
from beacon.database.models import User
from beacon.engine.checkin import already_checked_in_today
from beacon.services import notification_service, user_service

router = APIRouter(tags=["users"])
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _user_dict(u: User) -> dict:
    return {
        "id": u.id,
        "username": u.username,
        "points": u.points,
        "lastCheckin": iso(u.last_checkin),
        "referralCode": u.referral_code,
        "createdAt": iso(u.created_at),
    }


def _parse_page(raw: str | None) -> int:
    """Lenient page parsing: anything that isn't a non-negative int is 0.

    Pages past :data:`LEADERBOARD_MAX_PAGE` are clamped so the OFFSET bind
    stays inside a 64-bit integer; they are empty either way.
    """
    try:
        page = int(raw) if raw is not None else 0
    except ValueError:
        return 0
    return min(max(page, 0), LEADERBOARD_MAX_PAGE)


# ---------------------------------------------------------------------------
# GET /user
# ---------------------------------------------------------------------------
@router.get("/user")
async def get_current_user(
    engine: Engine = Depends(get_engine),
    cfg: BeaconConfig = Depends(get_config),
):
    try:
        user = await run_db(user_service.resolve_current_user, engine, cfg)
        return _user_dict(user)
    except Exception:
        logger.exception("Failed to fetch user")
        return error_response(500, "Failed to fetch user")


# ---------------------------------------------------------------------------
# POST /checkin
# ---------------------------------------------------------------------------
@router.post("/checkin")
async def check_in(
    engine: Engine = Depends(get_engine),
    cfg: BeaconConfig = Depends(get_config),
):
    """Once per local calendar day: award points, then notify."""
    try:
        user = await run_db(user_service.resolve_current_user, engine, cfg)
        if already_checked_in_today(user.last_checkin):
            return error_response(400, "Already checked in today")

        updated = await run_db(
            user_service.update_user_checkin, engine, user.id, cfg.checkin_points,
        )
        await run_db(
            notification_service.create_notification,
            engine,
            {
                "title": CHECKIN_NOTIFICATION_TITLE,
                "message": CHECKIN_NOTIFICATION_MESSAGE.format(points=cfg.checkin_points),
            },
            user.id,
        )
        return _user_dict(updated)
    except Exception:
        logger.exception("Failed to check in")
        return error_response(500, "Failed to check in")


# ---------------------------------------------------------------------------
# GET /leaderboard
# ---------------------------------------------------------------------------
@router.get("/leaderboard")
async def get_leaderboard(
    page: str | None = Query(None),
    engine: Engine = Depends(get_engine),
):
    """Zero-based page of users ranked by points, ten per page."""
    try:
        page_no = _parse_page(page)
        users = await run_db(
            user_service.get_leaderboard, engine, page_no, LEADERBOARD_PAGE_SIZE,
        )
        offset = page_no * LEADERBOARD_PAGE_SIZE
        return [
            {**_user_dict(u), "rank": offset + i + 1}
            for i, u in enumerate(users)
        ]
    except Exception:
        logger.exception("Failed to fetch leaderboard")
        return error_response(500, "Failed to fetch leaderboard")
