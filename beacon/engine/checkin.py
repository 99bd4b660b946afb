"""
beacon.engine.checkin — Daily check-in eligibility
===================================================

A check-in is allowed once per **local calendar date**, not once per
rolling 24 hours: 23:59 followed by 00:01 is two days, 00:01 followed by
23:58 is the same day.
"""

from __future__ import annotations

from datetime import UTC, datetime


def to_local(ts: datetime) -> datetime:
    """Convert *ts* to the server's local timezone.

    Naive datetimes are treated as UTC (SQLite returns stored timestamps
    without tzinfo).
    """
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone()


def is_same_local_day(a: datetime, b: datetime) -> bool:
    """True when *a* and *b* fall on the same local (year, month, day)."""
    la, lb = to_local(a), to_local(b)
    return (la.year, la.month, la.day) == (lb.year, lb.month, lb.day)


def already_checked_in_today(
    last_checkin: datetime | None, now: datetime | None = None
) -> bool:
    """Return True if a check-in at *last_checkin* blocks one at *now*.

    Users who have never checked in are always eligible.
    """
    if last_checkin is None:
        return False
    if now is None:
        now = datetime.now(UTC)
    return is_same_local_day(last_checkin, now)
