"""Input checks for cat requests.

Each check returns an error message for the client, or None when the
input is acceptable.
"""

import math
import re

BIRTH_DATE_PATTERN = re.compile(
    r"^\d{4}-(0[1-9]|1[012])-(0[1-9]|[12][0-9]|3[01])$", re.ASCII
)

# Decimal literal with optional fraction and exponent, e.g. "12", "1.5", "1e3", ".5"
NUMERIC_ID_PATTERN = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII)
LEADING_INT_PATTERN = re.compile(r"\s*([+-]?\d+)", re.ASCII)

INVALID_BIRTH_DATE = "Invalid birth date. Must be in yyyy-mm-dd format."


def validate_new_cat(payload) -> str | None:
    """Check a parsed POST body before it becomes a Cat.

    Only the shape of birth_date is checked. Day 31 of a 30-day month
    passes and is rolled forward when the Cat is built.
    """
    if not isinstance(payload, dict) or not payload.get("name"):
        return "Missing name in cat."

    birth_date = payload.get("birth_date")
    if not birth_date:
        return "Missing birth_date in cat."

    if not isinstance(birth_date, str) or not BIRTH_DATE_PATTERN.fullmatch(birth_date):
        return INVALID_BIRTH_DATE

    return None


def parse_id(raw) -> int | None:
    """Parse a path id into an int. Returns None if it is not numeric.

    Any decimal number is accepted and cut down to its leading integer
    digits, so "1.5" and "1e3" both name cat 1. A number with no leading
    digits (".5") becomes 0.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None

    text = str(raw)
    if not NUMERIC_ID_PATTERN.fullmatch(text):
        return None

    leading = LEADING_INT_PATTERN.match(text)
    if leading is None:
        return 0
    return int(leading.group(1))
