import os
# Ensure the app factory picks the Testing config & SQLite memory DB
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite:///:memory:")

import pytest
from tablefeedback import create_app
from tablefeedback.extensions import db
from tablefeedback.models import Business, User

@pytest.fixture(scope="session")
def app(tmp_path_factory):
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI="sqlite:///:memory:",
        MAIL_SUPPRESS_SEND=True,
        APP_BASE_URL="http://example.test",
        WTF_CSRF_ENABLED=False,
        UPLOAD_FOLDER=str(tmp_path_factory.mktemp("uploads")),
        DISPLAY_TIMEZONE="UTC",
    )
    with app.app_context():
        db.create_all()
        db.session.expire_on_commit = False
    yield app
    with app.app_context():
        db.drop_all()

@pytest.fixture()
def client(app):
    return app.test_client()

@pytest.fixture(autouse=True)
def _db_clean(app):
    # Clean BEFORE each test
    with app.app_context():
        db.session.rollback()
        for tbl in reversed(db.metadata.sorted_tables):
            db.session.execute(tbl.delete())
        db.session.commit()
    yield
    # And AFTER each test (keeps state hermetic even if a test fails mid-transaction)
    with app.app_context():
        db.session.rollback()
        for tbl in reversed(db.metadata.sorted_tables):
            db.session.execute(tbl.delete())
        db.session.commit()

@pytest.fixture()
def business_user(app):
    """(business_id, user_id) for a business with one staff login."""
    with app.app_context():
        biz = Business(name="Chez Test", owner_email="owner@example.com")
        db.session.add(biz); db.session.commit()
        u = User(email="owner@example.com")
        u.set_password("secret-pass"); u.business_id = biz.id
        db.session.add(u); db.session.commit()
        return biz.id, u.id

@pytest.fixture()
def auth_client(client, business_user):
    """Test client with a logged-in session for `business_user`."""
    with client.session_transaction() as sess:
        sess["_user_id"] = str(business_user[1])
    return client
