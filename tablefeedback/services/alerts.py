from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from sqlalchemy.exc import IntegrityError

from tablefeedback.extensions import db
from tablefeedback.models.resolved_alert import ResolvedAlert
from .keywords import has_negative_keyword, matched_keyword

# Ratings at or below this value are always alerts
ALERT_RATING_THRESHOLD = 2

REASON_LOW_RATING = "low_rating"
REASON_KEYWORD = "keyword"
REASON_FLAGGED = "flagged"


@dataclass(frozen=True)
class AlertReason:
    code: str
    keyword: Optional[str] = None

    @property
    def label(self) -> str:
        if self.code == REASON_LOW_RATING:
            return "Low rating"
        if self.code == REASON_KEYWORD:
            return f'Contains "{self.keyword}"'
        return "Needs attention"

    def to_dict(self) -> dict:
        return {"code": self.code, "keyword": self.keyword, "label": self.label}


def _is_low_rating(rating, threshold: int) -> bool:
    # A missing rating is never a low rating; the survey layer rejects it upstream.
    if rating is None:
        return False
    try:
        return int(rating) <= threshold
    except (TypeError, ValueError):
        return False


def is_alert(record, threshold: int = ALERT_RATING_THRESHOLD) -> bool:
    """True when the rating is at/below the threshold or the comment hits the lexicon."""
    if _is_low_rating(getattr(record, "rating", None), threshold):
        return True
    return has_negative_keyword(getattr(record, "comment", None))


def alert_reason(record, threshold: int = ALERT_RATING_THRESHOLD) -> AlertReason:
    """
    Single reason for an alert, in priority order:
      1. low rating
      2. first matched keyword
      3. generic fallback
    """
    if _is_low_rating(getattr(record, "rating", None), threshold):
        return AlertReason(REASON_LOW_RATING)
    keyword = matched_keyword(getattr(record, "comment", None))
    if keyword:
        return AlertReason(REASON_KEYWORD, keyword)
    return AlertReason(REASON_FLAGGED)


def classify(record, threshold: int = ALERT_RATING_THRESHOLD) -> dict:
    flagged = is_alert(record, threshold)
    return {
        "is_alert": flagged,
        "reason": alert_reason(record, threshold).to_dict() if flagged else None,
    }


def unresolved_alerts(records: Iterable, resolved_ids: Set, threshold: int = ALERT_RATING_THRESHOLD) -> List:
    return [
        r for r in records
        if is_alert(r, threshold) and getattr(r, "id", None) not in resolved_ids
    ]


# --- Resolution markers (persisted) ---

def resolved_feedback_ids(business_id: int) -> Set[int]:
    rows = (
        db.session.query(ResolvedAlert.feedback_id)
        .filter(ResolvedAlert.business_id == business_id)
        .all()
    )
    return {r[0] for r in rows}


def resolve_alert(feedback, resolved_by: Optional[int] = None) -> Tuple[ResolvedAlert, bool]:
    """
    Create the resolution marker for a feedback record.
    Returns (marker, created). A marker that already exists is returned as-is,
    including when a concurrent insert wins the unique constraint.
    """
    existing = (
        db.session.query(ResolvedAlert)
        .filter_by(feedback_id=feedback.id, business_id=feedback.business_id)
        .one_or_none()
    )
    if existing is not None:
        return existing, False

    marker = ResolvedAlert(
        feedback_id=feedback.id,
        business_id=feedback.business_id,
        resolved_by=resolved_by,
    )
    db.session.add(marker)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        existing = (
            db.session.query(ResolvedAlert)
            .filter_by(feedback_id=feedback.id, business_id=feedback.business_id)
            .one()
        )
        return existing, False
    return marker, True
