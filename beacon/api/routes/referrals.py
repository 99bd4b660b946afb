"""
beacon.api.routes.referrals — Referral stats & code redemption
================================================================
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy import Engine

from beacon.api.deps import get_config, get_engine
from beacon.api.responses import error_response, success_response
from beacon.config import BeaconConfig
from beacon.database.engine import run_db
from beacon.services import referral_service, user_service

router = APIRouter(prefix="/referral", tags=["referrals"])
logger = logging.getLogger(__name__)


@router.get("")
async def get_referral_stats(
    engine: Engine = Depends(get_engine),
    cfg: BeaconConfig = Depends(get_config),
):
    try:
        user = await run_db(user_service.resolve_current_user, engine, cfg)
        return await run_db(referral_service.get_referral_stats, engine, user.id)
    except Exception:
        logger.exception("Failed to fetch referral stats")
        return error_response(500, "Failed to fetch referral stats")


@router.post("/complete")
async def complete_referral(
    request: Request,
    engine: Engine = Depends(get_engine),
    cfg: BeaconConfig = Depends(get_config),
):
    """Redeem ``referralCode`` for the user named by ``userId``.

    Both fields are required; the user is addressed by id, not resolved.
    """
    try:
        try:
            body = await request.json()
        except ValueError:
            # Malformed JSON or a body that is not UTF-8
            body = None
        if not isinstance(body, dict):
            body = {}

        referral_code = body.get("referralCode")
        user_id = body.get("userId")
        if not referral_code or not user_id:
            return error_response(400, "Missing referral code or user ID")

        completed = await run_db(
            referral_service.complete_referral,
            engine,
            str(referral_code),
            str(user_id),
            cfg.referral_points,
        )
        if not completed:
            return error_response(404, "Invalid referral code")
        return success_response()
    except Exception:
        logger.exception("Failed to complete referral")
        return error_response(500, "Failed to complete referral")
