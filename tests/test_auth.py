from tablefeedback.extensions import db
from tablefeedback.models import User

def test_login_success_then_dashboard(client, business_user):
    biz_id, user_id = business_user
    resp = client.post("/auth/login", json={"email": "Owner@Example.com", "password": "secret-pass"})
    assert resp.status_code == 200
    assert resp.get_json() == {"ok": True, "user_id": user_id, "business_id": biz_id}
    assert client.get("/dash/summary.json").status_code == 200

    assert client.post("/auth/logout").get_json() == {"ok": True}
    assert client.get("/dash/summary.json").status_code == 401

def test_login_bad_password(client, business_user):
    resp = client.post("/auth/login", json={"email": "owner@example.com", "password": "nope"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid credentials"

def test_login_missing_fields(client):
    resp = client.post("/auth/login", data={"email": "owner@example.com"})
    assert resp.status_code == 400

def test_login_requires_business(app, client):
    with app.app_context():
        u = User(email="floating@example.com"); u.set_password("pw-123456")
        db.session.add(u); db.session.commit()
    resp = client.post("/auth/login", json={"email": "floating@example.com", "password": "pw-123456"})
    assert resp.status_code == 403

def test_csrf_endpoint(client):
    assert "csrf_token" in client.get("/auth/csrf").get_json()

def test_healthz(client):
    assert client.get("/healthz").get_json() == {"status": "ok"}
