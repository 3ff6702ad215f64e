from flask import request, jsonify, current_app
from flask_login import login_user, logout_user, current_user
from flask_wtf.csrf import generate_csrf
from sqlalchemy import func
from tablefeedback.extensions import db, limiter
from tablefeedback.models.user import User
from . import bp


def _login_email_scope():
    data_json = request.get_json(silent=True) or {}
    email = (request.form.get("email") or data_json.get("email") or "").strip().lower()
    # Keep a stable scope even if email is blank
    return f"login-email:{email or 'missing'}"


@bp.get("/csrf")
def csrf_token():
    """CSRF token for JSON clients (send back as X-CSRFToken)."""
    return jsonify({"csrf_token": generate_csrf()})


@bp.post("/login")
@limiter.limit("10 per minute; 100 per hour")              # per-IP (anon → IP via _rate_limit_key)
@limiter.limit("5 per minute; 20 per hour", key_func=_login_email_scope)  # per-account
def login_post():
    data = request.get_json(silent=True) if request.is_json else request.form
    data = data or {}
    email = (data.get("email") or "").strip()
    password = data.get("password") or ""

    if not email or not password:
        return jsonify({"ok": False, "error": "Email and password are required"}), 400

    user = db.session.execute(
        db.select(User).where(func.lower(User.email) == func.lower(email))
    ).scalar_one_or_none()

    if not user or not user.check_password(password) or not user.is_active:
        return jsonify({"ok": False, "error": "Invalid credentials"}), 400

    if not user.business_id:
        # Staff accounts are created against a business (see `flask bootstrap owner`)
        return jsonify({"ok": False, "error": "Account is not linked to a business"}), 403

    login_user(user)
    current_app.logger.info("login", extra={"event": "login", "user_id": user.id, "business_id": user.business_id})
    return jsonify({"ok": True, "user_id": user.id, "business_id": user.business_id})


@bp.post("/logout")
def logout_post():
    if current_user.is_authenticated:
        logout_user()
    return jsonify({"ok": True})
