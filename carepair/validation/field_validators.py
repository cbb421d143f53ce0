"""
Field-level validators shared by the booking form and the submission handler.

Every validator takes one raw value and returns ``None`` when the value is
acceptable, or a single human-readable error message otherwise. Validators
never raise: ``None``, numbers and whitespace-only strings are coerced to
text first, and rules are checked in order so the first failing rule wins.

Usage:
    validate_name("J", "First name")   # -> "First name must be at least 2 characters"
    validate_phone("555-0123-4")       # -> None
"""

import re
from datetime import date, datetime
from typing import Any, Iterable, Optional

from carepair.utils import as_text, strip_non_digits

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
MIN_PHONE_DIGITS = 8
MAX_PHONE_DIGITS = 12
MIN_YEAR = 1900
MAX_YEAR_DIGITS = 6
MIN_PLATE_LENGTH = 2
MAX_PLATE_LENGTH = 10

NAME_PATTERN = re.compile(r"^[a-zA-Z\s'-]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
YEAR_PATTERN = re.compile(r"^-?[0-9]+$")
PLATE_PATTERN = re.compile(r"^[a-zA-Z0-9\s-]+$")
DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
DATE_FORMAT = "%Y-%m-%d"


def validate_required(value: Any, label: str) -> Optional[str]:
    if not as_text(value).strip():
        return f"{label} is required"
    return None


def validate_name(value: Any, label: str) -> Optional[str]:
    text = as_text(value)
    trimmed = text.strip()
    if not trimmed:
        return f"{label} is required"
    if len(trimmed) < MIN_NAME_LENGTH:
        return f"{label} must be at least {MIN_NAME_LENGTH} characters"
    if len(trimmed) > MAX_NAME_LENGTH:
        return f"{label} must be less than {MAX_NAME_LENGTH} characters"
    if not NAME_PATTERN.match(text):
        return f"{label} can only contain letters, spaces, hyphens, and apostrophes"
    return None


def validate_email(value: Any) -> Optional[str]:
    trimmed = as_text(value).strip()
    if not trimmed:
        return "Email is required"
    if not EMAIL_PATTERN.match(trimmed):
        return "Please enter a valid email address"
    return None


def validate_phone(value: Any) -> Optional[str]:
    """Check the digit count only; separators and spacing are free-form."""
    text = as_text(value)
    if not text.strip():
        return "Phone number is required"
    digits = strip_non_digits(text)
    if len(digits) < MIN_PHONE_DIGITS:
        return f"Phone number must be at least {MIN_PHONE_DIGITS} digits"
    if len(digits) > MAX_PHONE_DIGITS:
        return "Phone number is too long"
    return None


def max_vehicle_year(today: Optional[date] = None) -> int:
    """Latest acceptable model year: next year's models are already on sale."""
    return (today or date.today()).year + 1


def validate_year(value: Any, today: Optional[date] = None) -> Optional[str]:
    """
    Validate a vehicle model year.

    Order matters: empty, then non-numeric, then too low, then too high.

    Args:
        value: Raw year (string or int).
        today: Reference date for the upper bound, defaults to today.
    """
    trimmed = as_text(value).strip()
    if not trimmed:
        return "Year is required"
    if not YEAR_PATTERN.match(trimmed):
        return "Year must be a number"
    digits = trimmed.lstrip("-").lstrip("0")
    if len(digits) > MAX_YEAR_DIGITS:
        # Clamp long digit runs so int() never sees them
        digits = "9" * MAX_YEAR_DIGITS
    year = int(digits or "0")
    if trimmed.startswith("-"):
        year = -year
    if year < MIN_YEAR:
        return f"Year must be {MIN_YEAR} or later"
    latest = max_vehicle_year(today)
    if year > latest:
        return f"Year cannot be later than {latest}"
    return None


def validate_license_plate(value: Any) -> Optional[str]:
    trimmed = as_text(value).strip()
    if not trimmed:
        return "License plate is required"
    if not MIN_PLATE_LENGTH <= len(trimmed) <= MAX_PLATE_LENGTH:
        return (
            f"License plate must be between {MIN_PLATE_LENGTH} "
            f"and {MAX_PLATE_LENGTH} characters"
        )
    if not PLATE_PATTERN.match(trimmed):
        return "License plate can only contain letters, numbers, spaces, and hyphens"
    return None


def validate_choice(value: Any, label: str, choices: Iterable[str]) -> Optional[str]:
    """Require the value to be one of a fixed catalog (service types, time slots)."""
    trimmed = as_text(value).strip()
    if not trimmed:
        return f"{label} is required"
    if trimmed not in set(choices):
        return f"Please select a valid {label.lower()}"
    return None


def parse_date(value: Any) -> datetime:
    """Parse an ISO ``YYYY-MM-DD`` string. Raises ValueError on bad input."""
    text = as_text(value).strip()
    if not DATE_PATTERN.match(text):
        raise ValueError(f"Not an ISO date: {text!r}")
    return datetime.strptime(text, DATE_FORMAT)


def validate_date(value: Any) -> Optional[str]:
    if not as_text(value).strip():
        return "Date is required"
    try:
        parse_date(value)
    except ValueError:
        return "Please enter a valid date (YYYY-MM-DD)"
    return None
