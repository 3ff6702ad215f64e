from functools import wraps
from flask import abort, request, jsonify
from flask_login import current_user
from tablefeedback.extensions import db
from tablefeedback.models.business import Business

def current_business_id():
    if not getattr(current_user, "is_authenticated", False):
        return None
    return getattr(current_user, "business_id", None)

def require_business(fn):
    """Logged-in user bound to an existing business; JSON 401/404 otherwise."""
    @wraps(fn)
    def _wrap(*args, **kwargs):
        if not getattr(current_user, "is_authenticated", False):
            return _abort_smart(401)
        business_id = current_business_id()
        if not business_id:
            return _abort_smart(401)
        if db.session.get(Business, business_id) is None:
            return _abort_smart(404)  # anti-enumeration
        return fn(*args, **kwargs)
    return _wrap

def _abort_smart(code: int):
    # If the client asked for JSON, return a JSON-shaped error
    accept = (request.headers.get("Accept") or "").lower()
    if "application/json" in accept or request.path.endswith(".json") or request.is_json:
        return jsonify({"error": {401: "unauthorized", 403: "forbidden", 404: "not_found"}[code], "code": code}), code
    abort(code)
