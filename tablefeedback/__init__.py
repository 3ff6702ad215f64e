import os
from flask import Flask, request, jsonify

# Load .env only for local/dev. In prod, env vars come from the platform.
if os.getenv("APP_ENV", "development") != "production":
    from dotenv import load_dotenv
    load_dotenv(".env", override=False)


from .config import get_config
from .extensions import db, migrate, csrf, login_manager, limiter, mail
from .security import init_security
from .observability import init_logging, init_sentry
from .services.feed import FeedbackFeed

def create_app(config_overrides=None):
    app = Flask(__name__)

    # ---- Rate Limiting storage configuration ----
    app_env = (os.getenv("APP_ENV", "development") or "development").lower()
    use_redis = app_env in ("staging", "production")
    storage_uri = os.environ.get("REDIS_URL") if use_redis else "memory://"
    if use_redis and not storage_uri:
        # Hard fail in stage/prod so we never silently run without RL storage
        raise RuntimeError("REDIS_URL is required in staging/production for rate limiting")
    app.config["RATELIMIT_STORAGE_URI"] = storage_uri
    app.config.setdefault("RATELIMIT_HEADERS_ENABLED", True)

    # Config: clean, explicit, class-based
    app.config.from_object(get_config())
    if config_overrides:
        app.config.update(config_overrides)

    # --- Required env validation for prod-like envs (staging/production) ---
    def _require(name: str):
        val = os.getenv(name) or app.config.get(name)
        if not val:
            raise RuntimeError(f"Missing required environment variable: {name}")
        return val

    if app_env in ("staging", "production"):
        _require("SECRET_KEY")
        _require("DATABASE_URL")

    # --- Observability & Security ---
    init_logging(app)
    init_sentry(app)
    if app_env in ("staging", "production"):
        init_security(app)

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=os.path.join(os.path.dirname(app.root_path), "migrations"))
    csrf.init_app(app)
    login_manager.init_app(app)
    limiter.init_app(app)
    mail.init_app(app)

    # Realtime feed of new submissions (owned by this app instance)
    feed = FeedbackFeed(logger=app.logger)
    app.extensions["feedback_feed"] = feed
    if app.config.get("ALERT_EMAILS_ENABLED"):
        from .services.email import send_alert_email
        app.extensions["alert_email_subscription"] = feed.subscribe(None, send_alert_email)

    # Blueprints
    from .blueprints.survey import bp as survey_bp
    from .blueprints.auth import bp as auth_bp
    from .blueprints.dashboard import bp as dashboard_bp

    app.register_blueprint(survey_bp)                       # "/survey"
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(dashboard_bp, url_prefix="/dash")

    @limiter.exempt
    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}, 200

    # Error handlers: JSON everywhere (the dashboard and survey are API clients)
    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "not_found", "code": 404}), 404

    @app.errorhandler(413)
    def too_large(e):
        return jsonify({"ok": False, "errors": ["image: file too large"], "code": 413}), 413

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "server_error", "code": 500}), 500

    # CSRF error handler (clean 400 instead of generic 500)
    from flask_wtf.csrf import CSRFError
    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        return jsonify({"error": "csrf_failed", "detail": e.description, "code": 400}), 400

    @app.errorhandler(403)
    def forbidden(e):
        return jsonify({"error": "forbidden", "code": 403}), 403

    # 429 Too Many Requests with Retry-After
    @app.errorhandler(429)
    def too_many_requests(e):
        retry_after = getattr(e, "retry_after", None)
        headers = {}
        payload = {"error": "rate_limited", "code": 429}
        if retry_after is not None:
            headers["Retry-After"] = str(int(retry_after))
            payload["retry_after"] = int(retry_after)
        app.logger.warning("rate_limited", extra={"event": "rate_limited", "path": request.path})
        return (payload, 429, headers)

    # CLI commands (ops-grade utilities)
    from .cli import register_cli
    register_cli(app)

    return app
