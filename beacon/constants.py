"""
beacon.constants — Shared Constants
====================================

Values the API contract fixes.  Tunable point awards live in
:mod:`beacon.config` instead.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Leaderboard
# ---------------------------------------------------------------------------
LEADERBOARD_PAGE_SIZE = 10
LEADERBOARD_MAX_PAGE = 2**31

# ---------------------------------------------------------------------------
# Settings defaults (applied on lazy creation)
# ---------------------------------------------------------------------------
DEFAULT_THEME = "light"
DEFAULT_NOTIFICATIONS = True
DEFAULT_EMAIL_NOTIFICATIONS = False

# ---------------------------------------------------------------------------
# Notification texts
# ---------------------------------------------------------------------------
CHECKIN_NOTIFICATION_TITLE = "Daily Check-in Complete!"
CHECKIN_NOTIFICATION_MESSAGE = (
    "You've earned {points} points! Come back tomorrow for more."
)

REFERRAL_NOTIFICATION_TITLE = "New Referral!"
REFERRAL_NOTIFICATION_MESSAGE = (
    "{username} joined with your referral code. You've earned {points} points!"
)

# ---------------------------------------------------------------------------
# Referral codes
# ---------------------------------------------------------------------------
REFERRAL_CODE_LENGTH = 8
