from datetime import datetime, timedelta, timezone

from tablefeedback.cli import survey_url
from tablefeedback.extensions import db
from tablefeedback.models import Business, User, Feedback, DiningTable, ResolvedAlert

def test_survey_url():
    assert survey_url("http://example.test/", 3, 7) == "http://example.test/survey?business=3&table=7"

def test_bootstrap_owner(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["bootstrap", "owner", "--business-name", "Le Bistro",
                                 "--email", "chef@example.com", "--password", "pw-123456"])
    assert result.exit_code == 0, result.output
    assert "Bootstrap complete" in result.output
    with app.app_context():
        user = User.query.filter_by(email="chef@example.com").one()
        assert user.check_password("pw-123456")
        assert db.session.get(Business, user.business_id).name == "Le Bistro"

    again = runner.invoke(args=["bootstrap", "owner", "--business-name", "Le Bistro",
                                "--email", "chef@example.com", "--password", "x"])
    assert again.exit_code != 0
    assert "User already exists" in again.output

def test_tables_generate_replaces_existing(app, business_user):
    biz_id, _ = business_user
    runner = app.test_cli_runner()
    assert runner.invoke(args=["tables", "generate", "--business-id", str(biz_id), "--count", "5"]).exit_code == 0
    result = runner.invoke(args=["tables", "generate", "--business-id", str(biz_id), "--count", "3"])
    assert result.exit_code == 0, result.output
    assert f"Generated 3 tables for business_id={biz_id}" in result.output
    with app.app_context():
        rows = DiningTable.query.filter_by(business_id=biz_id).order_by(DiningTable.table_number).all()
        assert [r.table_number for r in rows] == [1, 2, 3]
        assert rows[2].qr_url == f"http://example.test/survey?business={biz_id}&table=3"

def test_tables_generate_validates(app, business_user):
    biz_id, _ = business_user
    runner = app.test_cli_runner()
    assert runner.invoke(args=["tables", "generate", "--business-id", str(biz_id), "--count", "0"]).exit_code != 0
    assert runner.invoke(args=["tables", "generate", "--business-id", str(biz_id), "--count", "501"]).exit_code != 0
    assert runner.invoke(args=["tables", "generate", "--business-id", "9999", "--count", "2"]).exit_code != 0

def test_alerts_list(app, business_user):
    biz_id, _ = business_user
    runner = app.test_cli_runner()
    result = runner.invoke(args=["alerts", "list", "--business-id", str(biz_id)])
    assert "No unresolved alerts" in result.output

    now = datetime.now(timezone.utc)
    with app.app_context():
        low = Feedback(business_id=biz_id, table_number=2, rating=1, timestamp=now - timedelta(minutes=3))
        kw = Feedback(business_id=biz_id, table_number=5, rating=4, comment="a bit dirty", timestamp=now)
        ok = Feedback(business_id=biz_id, table_number=6, rating=5, comment="merci", timestamp=now)
        db.session.add_all([low, kw, ok]); db.session.commit()
        db.session.add(ResolvedAlert(feedback_id=low.id, business_id=biz_id)); db.session.commit()
        kw_id = kw.id

    result = runner.invoke(args=["alerts", "list", "--business-id", str(biz_id)])
    assert result.exit_code == 0, result.output
    assert f"#{kw_id} table=5 rating=4" in result.output
    assert 'reason=Contains "dirty"' in result.output
    assert "1 unresolved alert(s)" in result.output
