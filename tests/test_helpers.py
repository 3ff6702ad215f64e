from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from tablefeedback.utils.helpers import as_utc, format_date, get_display_tz, relative_time, safe_int

NOW = datetime(2026, 3, 15, 12, 0, 0, tzinfo=timezone.utc)

def ago(seconds):
    return NOW - timedelta(seconds=seconds)

def test_just_now_bucket():
    assert relative_time(ago(0), now=NOW) == "Just now"
    assert relative_time(ago(59), now=NOW) == "Just now"

def test_minutes_bucket():
    assert relative_time(ago(61), now=NOW) == "1 min ago"
    assert relative_time(ago(59 * 60 + 59), now=NOW) == "59 min ago"

def test_hours_bucket():
    assert relative_time(ago(3600), now=NOW) == "1 hour ago"
    assert relative_time(ago(2 * 3600 + 120), now=NOW) == "2 hours ago"
    assert relative_time(ago(1439 * 60), now=NOW) == "23 hours ago"

def test_absolute_date_after_a_day():
    assert relative_time(ago(90000), now=NOW) == "3/14/2026"
    assert relative_time(ago(1440 * 60), now=NOW) == "3/14/2026"

def test_absolute_date_uses_display_timezone():
    ts = datetime(2026, 3, 10, 2, 0, tzinfo=timezone.utc)
    assert relative_time(ts, now=NOW, tz=ZoneInfo("America/New_York")) == "3/9/2026"

def test_future_timestamp_reads_just_now():
    assert relative_time(NOW + timedelta(minutes=5), now=NOW) == "Just now"

def test_accepts_iso_strings_and_naive_values():
    assert relative_time("2026-03-15T11:30:00Z", now=NOW) == "30 min ago"
    assert relative_time(datetime(2026, 3, 15, 10, 0), now=NOW) == "2 hours ago"

def test_as_utc_normalizes_offsets():
    dt = as_utc("2026-03-15T14:00:00+02:00")
    assert dt == datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)
    assert dt.tzinfo == timezone.utc

def test_format_date():
    assert format_date(datetime(2026, 1, 5, 23, 0, tzinfo=timezone.utc)) == "1/5/2026"

def test_get_display_tz_falls_back_to_utc():
    assert get_display_tz(None) is timezone.utc
    assert get_display_tz("Not/AZone") is timezone.utc
    assert get_display_tz("Africa/Tunis") == ZoneInfo("Africa/Tunis")

def test_safe_int():
    assert safe_int("7") == 7
    assert safe_int("x") is None
    assert safe_int(None, 0) == 0
