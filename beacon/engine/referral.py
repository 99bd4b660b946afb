"""
beacon.engine.referral — Referral code generation
==================================================
"""

from __future__ import annotations

import secrets

from beacon.constants import REFERRAL_CODE_LENGTH

# No 0/O or 1/I so codes survive being read aloud or retyped.
REFERRAL_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def generate_referral_code(length: int = REFERRAL_CODE_LENGTH) -> str:
    """Return a random uppercase referral code of *length* characters."""
    return "".join(secrets.choice(REFERRAL_ALPHABET) for _ in range(length))


def normalize_referral_code(code: str) -> str:
    """Canonical form used for lookups (trimmed, uppercase)."""
    return code.strip().upper()
