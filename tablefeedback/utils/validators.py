import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

MIN_RATING = 1
MAX_RATING = 5
DEFAULT_LOCATION = "Default"

def clean_str(val: Optional[str], max_len: int = 255) -> Optional[str]:
    """
    Collapse whitespace, trim, enforce max length. Returns None if empty after cleaning.
    """
    if val is None:
        return None
    s = re.sub(r"\s+", " ", str(val)).strip()
    if not s:
        return None
    return s[:max_len]

def clean_comment(val: Optional[str], max_len: int = 2000) -> Optional[str]:
    """Trim only; comments keep their line breaks."""
    if val is None:
        return None
    s = str(val).strip()
    return s[:max_len] or None

def _positive_int(val: Any) -> Optional[int]:
    if isinstance(val, bool):
        return None
    if isinstance(val, int):
        return val if val > 0 else None
    s = str(val or "").strip()
    if not s.isdecimal():
        return None
    n = int(s)
    return n if n > 0 else None

def parse_rating(val: Any) -> Optional[int]:
    n = _positive_int(val)
    if n is None or not (MIN_RATING <= n <= MAX_RATING):
        return None
    return n

def validate_survey_payload(data: Mapping, max_comment_len: int = 2000) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate a survey submission (form or JSON).
    Returns (cleaned, errors); `errors` is a list of "field: message" strings.
    """
    errors: List[str] = []

    business_id = _positive_int(data.get("business"))
    if business_id is None:
        errors.append("business: required")

    table_number = _positive_int(data.get("table"))
    if table_number is None:
        errors.append("table: must be a positive integer")

    raw_rating = data.get("rating")
    rating = parse_rating(raw_rating)
    if raw_rating in (None, "", 0, "0"):
        errors.append("rating: required")
    elif rating is None:
        errors.append(f"rating: must be an integer between {MIN_RATING} and {MAX_RATING}")

    cleaned = {
        "business_id": business_id,
        "table_number": table_number,
        "rating": rating,
        "location": clean_str(data.get("location"), max_len=120) or DEFAULT_LOCATION,
        "comment": clean_comment(data.get("comment"), max_len=max_comment_len),
    }
    return cleaned, errors
