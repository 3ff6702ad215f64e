from tablefeedback.utils.validators import clean_comment, clean_str, parse_rating, validate_survey_payload

def test_valid_payload_is_cleaned():
    cleaned, errors = validate_survey_payload({
        "business": "3", "table": "12", "rating": "4",
        "location": "  Terrace   upstairs ", "comment": "  Lovely\nevening  ",
    })
    assert errors == []
    assert cleaned == {
        "business_id": 3,
        "table_number": 12,
        "rating": 4,
        "location": "Terrace upstairs",
        "comment": "Lovely\nevening",
    }

def test_location_defaults_when_missing():
    cleaned, errors = validate_survey_payload({"business": 1, "table": 2, "rating": 5})
    assert errors == []
    assert cleaned["location"] == "Default"
    assert cleaned["comment"] is None

def test_rating_is_required():
    _, errors = validate_survey_payload({"business": 1, "table": 2})
    assert errors == ["rating: required"]
    _, errors = validate_survey_payload({"business": 1, "table": 2, "rating": 0})
    assert errors == ["rating: required"]

def test_rating_out_of_range():
    _, errors = validate_survey_payload({"business": 1, "table": 2, "rating": 6})
    assert errors == ["rating: must be an integer between 1 and 5"]
    _, errors = validate_survey_payload({"business": 1, "table": 2, "rating": "4.5"})
    assert errors == ["rating: must be an integer between 1 and 5"]

def test_non_ascii_digits_are_rejected():
    _, errors = validate_survey_payload({"business": 1, "table": "\u00b3", "rating": 4})
    assert errors == ["table: must be a positive integer"]
    _, errors = validate_survey_payload({"business": 1, "table": 2, "rating": "\u00b2"})
    assert errors == ["rating: must be an integer between 1 and 5"]

def test_invalid_link_fields():
    _, errors = validate_survey_payload({"table": "-1", "rating": 3})
    assert "business: required" in errors
    assert "table: must be a positive integer" in errors

def test_comment_is_capped():
    cleaned, _ = validate_survey_payload({"business": 1, "table": 1, "rating": 3, "comment": "x" * 50}, max_comment_len=10)
    assert cleaned["comment"] == "x" * 10

def test_small_helpers():
    assert clean_str("   ") is None
    assert clean_str(" a   b ") == "a b"
    assert clean_comment("   ") is None
    assert parse_rating(True) is None
    assert parse_rating("5") == 5
