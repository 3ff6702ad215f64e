import json
from typing import Any, Dict, Optional

from flask import current_app
from flask_mail import Message

from tablefeedback.extensions import db, mail
from tablefeedback.models.business import Business
from tablefeedback.utils.helpers import format_date, get_display_tz


def _log_structured(event: str, **fields):
    """
    Minimal structured log: one JSON object per line.
    (No comment text; ids and counts only.)
    """
    payload = {"event": event, **fields}
    current_app.logger.info(json.dumps(payload))


def build_alert_message(business: Business, payload: Dict[str, Any]) -> Message:
    reason = (payload.get("reason") or {}).get("label") or "Needs attention"
    tz = get_display_tz(current_app.config.get("DISPLAY_TIMEZONE"))
    when = format_date(payload["timestamp"], tz) if payload.get("timestamp") else ""
    subject = f"[{business.name}] Alert on table {payload.get('table_number')}: {reason}"
    body = "\n".join([
        f"New feedback needs attention at {business.name}.",
        "",
        f"Table: {payload.get('table_number')} ({payload.get('location')})",
        f"Rating: {payload.get('rating')}/5",
        f"Reason: {reason}",
        f"Comment: {payload.get('comment') or '(no comment)'}",
        f"Date: {when}",
    ])
    return Message(subject=subject, recipients=[business.owner_email], body=body)


def send_alert_email(payload: Dict[str, Any]) -> Optional[str]:
    """
    Email the business owner about one alert submission.
    Returns the recipient, or None when nothing was sent.
    """
    if not payload.get("is_alert"):
        return None
    business = db.session.get(Business, payload.get("business_id"))
    if business is None or not business.owner_email:
        _log_structured("alert_email_skipped", business_id=payload.get("business_id"), feedback_id=payload.get("id"))
        return None

    msg = build_alert_message(business, payload)
    try:
        mail.send(msg)
    except Exception as exc:
        current_app.logger.warning(json.dumps({
            "event": "alert_email_failed",
            "business_id": business.id,
            "feedback_id": payload.get("id"),
            "error": str(exc),
        }))
        return None

    _log_structured("alert_email_sent", business_id=business.id, feedback_id=payload.get("id"))
    return business.owner_email
