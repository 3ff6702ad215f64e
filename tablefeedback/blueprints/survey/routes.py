from flask import request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from tablefeedback.extensions import db, csrf, limiter
from tablefeedback.models import Business, Feedback
from tablefeedback.services.alerts import classify
from tablefeedback.services.storage import save_image, delete_image, StorageError
from tablefeedback.utils.helpers import safe_int
from tablefeedback.utils.validators import validate_survey_payload, clean_str, DEFAULT_LOCATION
from . import bp


def _survey_limit():
    return current_app.config.get("SURVEY_RATE_LIMIT", "20 per minute")


@bp.get("/survey/info.json")
def survey_info():
    """What the QR link points at: business name, table and location."""
    business_id = safe_int(request.args.get("business"))
    table_number = safe_int(request.args.get("table"))
    if not business_id or not table_number or table_number <= 0:
        return jsonify({"ok": False, "error": "invalid_link"}), 400

    business = db.session.get(Business, business_id)
    if business is None:
        return jsonify({"ok": False, "error": "not_found"}), 404

    return jsonify({
        "ok": True,
        "business": business.to_dict(),
        "table_number": table_number,
        "location": clean_str(request.args.get("location"), max_len=120) or DEFAULT_LOCATION,
    })


@bp.post("/survey")
@csrf.exempt
@limiter.limit(_survey_limit)
def survey_submit():
    """Accept a customer submission from the survey form (multipart) or JSON."""
    data = (request.get_json(silent=True) or {}) if request.is_json else (request.form or {})

    cleaned, errors = validate_survey_payload(
        data, max_comment_len=current_app.config.get("MAX_COMMENT_LENGTH", 2000)
    )
    if errors:
        return jsonify({"ok": False, "errors": errors}), 400

    business = db.session.get(Business, cleaned["business_id"])
    if business is None:
        return jsonify({"ok": False, "errors": ["business: not found"]}), 404

    try:
        image_path = save_image(request.files.get("image")) if not request.is_json else None
    except StorageError as exc:
        return jsonify({"ok": False, "errors": [str(exc)]}), 400

    fb = Feedback(
        business_id=business.id,
        table_number=cleaned["table_number"],
        location=cleaned["location"],
        rating=cleaned["rating"],
        comment=cleaned["comment"],
        image_path=image_path,
    )
    db.session.add(fb)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        delete_image(image_path)
        raise

    threshold = current_app.config.get("ALERT_RATING_THRESHOLD", 2)
    payload = {**fb.to_dict(), **classify(fb, threshold)}

    # Structured log for observability (no comment body to avoid PII)
    current_app.logger.info(
        "feedback_submitted",
        extra={
            "event": "feedback_submitted",
            "business_id": business.id,
            "feedback_id": fb.id,
            "table_number": fb.table_number,
            "is_alert": payload["is_alert"],
            "has_image": bool(image_path),
        },
    )

    current_app.extensions["feedback_feed"].publish(business.id, payload)

    return jsonify({"ok": True, "feedback": payload}), 201
