"""
Beacon — Engagement Backend for a Gamified Community App
=========================================================
Users send messages, check in once a day for points, climb a leaderboard,
receive notifications, tune their settings and redeem referral codes.

Package layout::

    beacon/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Page size, default settings, notification texts
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + async helper
    │   └── models.py      # All ORM models
    ├── engine/
    │   ├── checkin.py     # Same-calendar-day check-in rule
    │   └── referral.py    # Referral code generation
    ├── services/
    │   ├── user_service.py          # Users, points, check-ins, leaderboard
    │   ├── message_service.py       # Messages
    │   ├── notification_service.py  # Notifications
    │   ├── settings_service.py      # Per-user settings
    │   └── referral_service.py      # Referral stats + completion
    └── api/
        ├── main.py        # FastAPI app
        ├── deps.py        # Engine / config dependencies
        ├── responses.py   # Error / success bodies
        └── routes/        # REST endpoints
"""

__version__ = "0.1.0"
