from flask_talisman import Talisman

def init_security(app):
    """
    Production/staging security headers. The dashboard and survey are JSON APIs;
    images are served from our own origin via signed URLs.
    """
    csp = {
        "default-src": ["'self'"],
        "script-src":  ["'self'"],
        "style-src":   ["'self'"],
        "img-src":     ["'self'", "data:", "blob:"],
        "connect-src": ["'self'"],
        "frame-ancestors": ["'none'"],
        "base-uri":    ["'self'"],
        "form-action": ["'self'"],
    }

    Talisman(
        app,
        content_security_policy=csp,
        force_https=True,
        strict_transport_security=True,
        session_cookie_secure=True,
        frame_options="DENY",
        referrer_policy="strict-origin-when-cross-origin",
    )
