import types
from tablefeedback.services.alerts import (
    ALERT_RATING_THRESHOLD,
    REASON_FLAGGED,
    REASON_KEYWORD,
    REASON_LOW_RATING,
    AlertReason,
    alert_reason,
    classify,
    is_alert,
    unresolved_alerts,
)

def fb(rating, comment="", id=1):
    return types.SimpleNamespace(id=id, rating=rating, comment=comment)

def test_default_threshold_is_two():
    assert ALERT_RATING_THRESHOLD == 2

def test_low_rating_is_alert_regardless_of_comment():
    assert is_alert(fb(1, "")) is True
    assert is_alert(fb(2, "great food")) is True

def test_high_rating_without_keyword_is_not_alert():
    assert is_alert(fb(5, "great food")) is False
    assert is_alert(fb(3, "")) is False

def test_keyword_makes_high_rating_an_alert():
    assert is_alert(fb(5, "Terrible service")) is True
    assert is_alert(fb(4, "un peu trop cher")) is True

def test_missing_comment_is_treated_as_empty():
    assert is_alert(fb(4, None)) is False

def test_missing_rating_is_not_low_rating():
    assert is_alert(fb(None, "")) is False
    assert is_alert(fb(None, "rude staff")) is True

def test_custom_threshold():
    assert is_alert(fb(3), threshold=3) is True
    assert is_alert(fb(2), threshold=1) is False

def test_reason_low_rating_takes_priority():
    reason = alert_reason(fb(1, "bad"))
    assert reason == AlertReason(REASON_LOW_RATING)
    assert reason.keyword is None
    assert reason.label == "Low rating"

def test_reason_reports_first_keyword():
    reason = alert_reason(fb(5, "Rude waiter, cold soup"))
    assert reason.code == REASON_KEYWORD
    assert reason.keyword == "rude"
    assert reason.label == 'Contains "rude"'

def test_reason_fallback():
    reason = alert_reason(fb(5, "lovely"))
    assert reason.code == REASON_FLAGGED
    assert reason.to_dict() == {"code": "flagged", "keyword": None, "label": "Needs attention"}

def test_classify_only_reports_reason_for_alerts():
    assert classify(fb(5, "fine")) == {"is_alert": False, "reason": None}
    out = classify(fb(2, "fine"))
    assert out["is_alert"] is True
    assert out["reason"]["code"] == "low_rating"

def test_unresolved_alerts_filters_and_keeps_order():
    records = [fb(1, id=10), fb(5, "great", id=11), fb(5, "dirty table", id=12), fb(2, id=13)]
    out = unresolved_alerts(records, resolved_ids={13})
    assert [r.id for r in out] == [10, 12]
    assert unresolved_alerts(records, resolved_ids={10, 12, 13}) == []
