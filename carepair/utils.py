"""Shared utilities used across the booking service."""

import re
from typing import Any


def as_text(value: Any) -> str:
    """Coerce an untyped payload value to text.

    Examples:
        >>> as_text(None)
        ''
        >>> as_text(2019)
        '2019'
        >>> as_text("  Civic ")
        '  Civic '
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def strip_non_digits(value: str) -> str:
    """Drop every character that is not a digit.

    Examples:
        >>> strip_non_digits("555-0123-4")
        '55501234'
        >>> strip_non_digits("+61 (412) 345-678")
        '61412345678'
    """
    return re.sub(r"[^0-9]", "", value)
