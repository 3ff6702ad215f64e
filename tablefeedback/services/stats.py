from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List

from tablefeedback.utils.helpers import as_utc
from .alerts import ALERT_RATING_THRESHOLD, is_alert

RATING_EMOJIS = {
    1: "😡",
    2: "😞",
    3: "😐",
    4: "😊",
    5: "😍",
}
DEFAULT_EMOJI = "😐"

FILTER_ALL = "all"
FILTER_POSITIVE = "positive"
FILTER_NEGATIVE = "negative"
FILTER_WITH_IMAGE = "with-image"
FILTER_CHOICES = (FILTER_ALL, FILTER_POSITIVE, FILTER_NEGATIVE, FILTER_WITH_IMAGE)


def rating_emoji(rating: Any) -> str:
    return RATING_EMOJIS.get(rating, DEFAULT_EMOJI)


def is_same_day(timestamp: Any, now: datetime, tz: tzinfo = timezone.utc) -> bool:
    """Same calendar date (year, month, day) once both instants are in the display timezone."""
    a = as_utc(timestamp).astimezone(tz)
    b = as_utc(now).astimezone(tz)
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def todays_feedback(records: Iterable, now: datetime, tz: tzinfo = timezone.utc) -> List:
    return [r for r in records if is_same_day(r.timestamp, now, tz)]


def average_rating(records: Iterable) -> str:
    """
    Mean rating with one fraction digit (half-up), e.g. "4.0".
    Empty input gives "0.0". Records without a rating are left out of the mean.
    """
    ratings = [r.rating for r in records if getattr(r, "rating", None) is not None]
    if not ratings:
        return "0.0"
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return str(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def filter_feedback(records: Iterable, kind: str = FILTER_ALL) -> List:
    if kind == FILTER_ALL:
        return list(records)
    if kind == FILTER_POSITIVE:
        return [r for r in records if r.rating is not None and r.rating >= 4]
    if kind == FILTER_NEGATIVE:
        return [r for r in records if r.rating is not None and r.rating <= 2]
    if kind == FILTER_WITH_IMAGE:
        return [r for r in records if getattr(r, "image_path", None)]
    raise ValueError(f"Unknown feedback filter: {kind!r}")


def dashboard_summary(
    records: Iterable,
    now: datetime,
    tz: tzinfo = timezone.utc,
    recent_limit: int = 10,
    threshold: int = ALERT_RATING_THRESHOLD,
) -> Dict[str, Any]:
    """
    Overview numbers for a tenant's feedback (records expected newest first):
      - today_count / today_average: same-day submissions
      - alerts_count: every alert, resolved or not
      - recent: first `recent_limit` records
    """
    items = list(records)
    today = todays_feedback(items, now, tz)
    return {
        "today_count": len(today),
        "today_average": average_rating(today),
        "total_count": len(items),
        "alerts_count": sum(1 for r in items if is_alert(r, threshold)),
        "recent": items[:recent_limit],
    }
