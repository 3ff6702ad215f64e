import os

from flask import request, jsonify, current_app, abort, send_from_directory
from flask_login import current_user

from tablefeedback.extensions import db
from tablefeedback.models import Feedback, DiningTable
from tablefeedback.services.alerts import (
    classify,
    resolve_alert,
    resolved_feedback_ids,
    unresolved_alerts,
)
from tablefeedback.services.policy import require_business, current_business_id
from tablefeedback.services.stats import dashboard_summary, filter_feedback, rating_emoji, FILTER_CHOICES
from tablefeedback.services.storage import signed_image_url, resolve_image_token
from tablefeedback.utils.helpers import get_display_tz, relative_time, utcnow
from . import bp


def _now():
    return utcnow()


def _threshold() -> int:
    return int(current_app.config.get("ALERT_RATING_THRESHOLD", 2))


def _business_feedback(business_id: int):
    return (
        db.session.query(Feedback)
        .filter(Feedback.business_id == business_id)
        .order_by(Feedback.timestamp.desc(), Feedback.id.desc())
        .all()
    )


def _serialize(fb: Feedback, now, tz) -> dict:
    out = fb.to_dict()
    out.update(classify(fb, _threshold()))
    out["emoji"] = rating_emoji(fb.rating)
    out["relative_time"] = relative_time(fb.timestamp, now=now, tz=tz)
    out["image_url"] = signed_image_url(fb.image_path)
    return out


@bp.get("/summary.json")
@require_business
def summary_json():
    business_id = current_business_id()
    now, tz = _now(), get_display_tz(current_app.config.get("DISPLAY_TIMEZONE"))
    items = _business_feedback(business_id)

    summary = dashboard_summary(
        items, now, tz,
        recent_limit=int(current_app.config.get("RECENT_FEEDBACK_LIMIT", 10)),
        threshold=_threshold(),
    )
    summary["recent"] = [_serialize(f, now, tz) for f in summary["recent"]]
    summary["unresolved_alerts_count"] = len(
        unresolved_alerts(items, resolved_feedback_ids(business_id), _threshold())
    )
    return jsonify(summary)


@bp.get("/feedback.json")
@require_business
def feedback_json():
    kind = (request.args.get("filter") or "all").strip().lower()
    if kind not in FILTER_CHOICES:
        return jsonify({"error": "invalid_filter", "choices": list(FILTER_CHOICES)}), 400

    now, tz = _now(), get_display_tz(current_app.config.get("DISPLAY_TIMEZONE"))
    items = _business_feedback(current_business_id())
    rows = filter_feedback(items, kind)
    return jsonify({
        "filter": kind,
        "total_count": len(items),
        "items": [_serialize(f, now, tz) for f in rows],
    })


@bp.get("/alerts.json")
@require_business
def alerts_json():
    business_id = current_business_id()
    now, tz = _now(), get_display_tz(current_app.config.get("DISPLAY_TIMEZONE"))
    items = _business_feedback(business_id)
    alerts = unresolved_alerts(items, resolved_feedback_ids(business_id), _threshold())

    out = [_serialize(fb, now, tz) for fb in alerts]
    return jsonify({"count": len(out), "items": out})


@bp.post("/alerts/<int:feedback_id>/resolve")
@require_business
def resolve_alert_post(feedback_id: int):
    business_id = current_business_id()
    fb = (
        db.session.query(Feedback)
        .filter_by(id=feedback_id, business_id=business_id)
        .one_or_none()
    )
    if fb is None:
        return jsonify({"error": "not_found", "code": 404}), 404

    marker, created = resolve_alert(fb, resolved_by=getattr(current_user, "id", None))
    current_app.logger.info(
        "alert_resolved",
        extra={"event": "alert_resolved", "business_id": business_id, "feedback_id": fb.id, "created": created},
    )
    return jsonify({"ok": True, "feedback_id": fb.id, "already_resolved": not created})


@bp.get("/tables.json")
@require_business
def tables_json():
    rows = (
        db.session.query(DiningTable)
        .filter(DiningTable.business_id == current_business_id())
        .order_by(DiningTable.table_number.asc())
        .all()
    )
    return jsonify([t.to_dict() for t in rows])


@bp.get("/images/<token>")
def image(token: str):
    """Serve a stored photo for a signed, unexpired token."""
    path = resolve_image_token(token)
    if not path:
        abort(404)
    root = current_app.config["UPLOAD_FOLDER"]
    if not os.path.isfile(os.path.join(root, path)):
        abort(404)
    return send_from_directory(root, path)
