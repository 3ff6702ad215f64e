import os

class BaseConfig:
    # Secrets (env in prod; dev/test may use defaults)
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-not-secure")
    WTF_CSRF_SECRET_KEY = SECRET_KEY
    WTF_CSRF_TIME_LIMIT = None

    # Database (env in prod; dev/test may use default)
    try:
        from dotenv import dotenv_values
        _ENV_FALLBACK = dotenv_values(".env")
    except ImportError:
        _ENV_FALLBACK = {}
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or _ENV_FALLBACK.get("DATABASE_URL") or "sqlite:///tablefeedback.db"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging / misc
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Cookies: secure-by-default
    SESSION_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    # Flask-Limiter default: off globally; prefer per-route limits
    RATELIMIT_DEFAULT = None
    SURVEY_RATE_LIMIT = os.getenv("SURVEY_RATE_LIMIT", "20 per minute; 200 per hour")

    # --- Feedback / dashboard ---
    # IANA zone used for "today" and absolute dates
    DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "UTC")
    ALERT_RATING_THRESHOLD = int(os.getenv("ALERT_RATING_THRESHOLD", "2"))
    RECENT_FEEDBACK_LIMIT = int(os.getenv("RECENT_FEEDBACK_LIMIT", "10"))
    MAX_COMMENT_LENGTH = int(os.getenv("MAX_COMMENT_LENGTH", "2000"))
    MAX_TABLES_PER_BUSINESS = 500

    # --- Image uploads ---
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(os.getcwd(), "uploads"))
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_MB", "10")) * 1024 * 1024
    IMAGE_URL_TTL_SECONDS = int(os.getenv("IMAGE_URL_TTL_SECONDS", "3600"))
    IMAGE_TOKEN_SALT = os.getenv("IMAGE_TOKEN_SALT", "image-token-v1")

    # --- Mail ---
    MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USE_TLS = (os.getenv("MAIL_USE_TLS", "true").lower() == "true")
    MAIL_USE_SSL = (os.getenv("MAIL_USE_SSL", "false").lower() == "true")
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "Table Feedback <no-reply@local.test>")
    MAIL_SUPPRESS_SEND = (os.getenv("MAIL_SUPPRESS_SEND", "false").lower() == "true")
    ALERT_EMAILS_ENABLED = (os.getenv("ALERT_EMAILS_ENABLED", "false").lower() == "true")

    # Used for survey URLs printed on table QR codes
    APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:5000")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False
    MAIL_SUPPRESS_SEND = True

class ProductionConfig(BaseConfig):
    DEBUG = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")
    SESSION_COOKIE_SECURE = True
    REMEMBER_COOKIE_SECURE = True
    SESSION_COOKIE_SAMESITE = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
    MAIL_SUPPRESS_SEND = False

class TestingConfig(BaseConfig):
    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite:///:memory:")
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    MAIL_SUPPRESS_SEND = True

_ENV_MAP = {
    "development": DevelopmentConfig,
    "staging": ProductionConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}

def get_config():
    env = os.environ.get("APP_ENV", "development").lower()
    return _ENV_MAP.get(env, DevelopmentConfig)
