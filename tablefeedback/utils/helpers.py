from datetime import datetime, timezone, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def safe_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def as_utc(value: Any) -> datetime:
    """
    Coerce a timestamp (aware/naive datetime or ISO-8601 string) to an aware UTC datetime.
    Naive values are taken as UTC (SQLite hands back naive datetimes).
    """
    if isinstance(value, str):
        s = value.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        value = datetime.fromisoformat(s)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def get_display_tz(name: Optional[str]) -> tzinfo:
    """IANA zone name -> tzinfo; unknown or empty names fall back to UTC."""
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_date(value: Any, tz: tzinfo = timezone.utc) -> str:
    """Calendar date as M/D/YYYY in the display timezone."""
    local = as_utc(value).astimezone(tz)
    return f"{local.month}/{local.day}/{local.year}"


def relative_time(timestamp: Any, now: Optional[datetime] = None, tz: tzinfo = timezone.utc) -> str:
    """
    Coarse age of a timestamp:
      < 1 min      -> "Just now"
      < 60 min     -> "N min ago"
      < 24 h       -> "N hour(s) ago"
      otherwise    -> absolute date (M/D/YYYY)
    Elapsed time is floored to whole minutes; future timestamps read as "Just now".
    """
    ts = as_utc(timestamp)
    ref = as_utc(now) if now is not None else utcnow()
    minutes = int((ref - ts).total_seconds() // 60)

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes} min ago"
    if minutes < 1440:
        hours = minutes // 60
        return f"{hours} hour ago" if hours == 1 else f"{hours} hours ago"
    return format_date(ts, tz)
