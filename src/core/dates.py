"""Game-day helpers.

A new game day starts at midnight in the reference timezone, regardless of
where the player is, so every score lands on the same calendar key.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

DEFAULT_REFERENCE_TZ = "Europe/Amsterdam"


def _now_in(tz_name: str, now: Optional[datetime]) -> datetime:
    zone = ZoneInfo(tz_name)
    if now is None:
        return datetime.now(zone)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(zone)


def game_day(now: Optional[datetime] = None, tz_name: str = DEFAULT_REFERENCE_TZ) -> date:
    """Return the game day for `now` (naive datetimes are read as UTC)."""

    return _now_in(tz_name, now).date()


def time_until_reset(now: Optional[datetime] = None, tz_name: str = DEFAULT_REFERENCE_TZ) -> timedelta:
    """Return the time left until the next midnight in the reference timezone."""

    local = _now_in(tz_name, now)
    next_day = local.date() + timedelta(days=1)
    midnight = datetime(next_day.year, next_day.month, next_day.day, tzinfo=local.tzinfo)
    # Compare in UTC so DST transitions are counted correctly.
    return midnight.astimezone(timezone.utc) - local.astimezone(timezone.utc)


def format_time_until_reset(remaining: timedelta) -> str:
    """Render a countdown as "3 hours 5 minutes" or "1 minute"."""

    total_minutes = max(int(remaining.total_seconds()) // 60, 0)
    hours, minutes = divmod(total_minutes, 60)
    minute_label = f"{minutes} minute{'s' if minutes != 1 else ''}"
    if hours > 0:
        return f"{hours} hour{'s' if hours != 1 else ''} {minute_label}"
    return minute_label
