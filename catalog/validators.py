"""
Input validation helpers for book records.
"""

import re
from datetime import date
from typing import Any, Optional

MIN_PUBLISHED_YEAR = 1000

_ISBN_SEPARATORS = re.compile(r"[-\s]")
_ISBN_DIGITS = re.compile(r"(?:[0-9]{10}|[0-9]{13})")


def is_valid_isbn(value: Any) -> bool:
    """
    Check the shape of an ISBN-10 or ISBN-13.

    Hyphens and whitespace are stripped first; the remainder must be exactly
    10 or 13 decimal digits. Check digits are not verified.
    """
    if not value or not isinstance(value, str):
        return False
    cleaned = _ISBN_SEPARATORS.sub("", value)
    return _ISBN_DIGITS.fullmatch(cleaned) is not None


def max_published_year(today: Optional[date] = None) -> int:
    """Latest accepted publication year (next calendar year)."""
    today = today or date.today()
    return today.year + 1


def is_valid_published_year(value: Any, today: Optional[date] = None) -> bool:
    """
    Check that a publication year is a whole number within bounds.

    Args:
        value: Candidate year
        today: Reference date, defaults to today

    Returns:
        True if MIN_PUBLISHED_YEAR <= value <= next calendar year
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        if not value.is_integer():
            return False
    elif not isinstance(value, int):
        return False
    return MIN_PUBLISHED_YEAR <= value <= max_published_year(today)
