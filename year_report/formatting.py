"""
Text formatting helpers for report output.
"""

import math
import re

CONTROL_CHAR_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MONTH_LABEL_RE = re.compile(r"^\d{4}-\d{2}$")

MONTH_NAMES = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

WEEKDAY_NAMES = [
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
]


def sanitize_text(value) -> str:
    """Convert to str and strip control characters (None becomes "")."""
    if value is None:
        return ""
    return CONTROL_CHAR_RE.sub("", str(value))


def format_number(value, separator: str = ",") -> str:
    """
    Format a number with thousands separators.

    Non-numeric and non-finite values format as "0".

    Args:
        value: Number to format
        separator: Thousands separator
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "0"
    if isinstance(value, float) and not math.isfinite(value):
        return "0"

    if isinstance(value, float) and not value.is_integer():
        formatted = f"{value:,.3f}".rstrip("0").rstrip(".")
    else:
        formatted = f"{int(value):,}"

    return formatted.replace(",", separator) if separator != "," else formatted


def to_percent(value, digits: int = 1) -> str:
    """Format a ratio (0.25) as a percentage ("25.0%")."""
    zero = f"{0:.{digits}f}%"
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return zero
    if not math.isfinite(value) or value <= 0:
        return zero
    return f"{value * 100:.{digits}f}%"


def format_date(iso_date: str | None) -> str:
    """Format YYYY-MM-DD as "Jan 18", or "--" for missing/invalid dates."""
    if not iso_date or not ISO_DATE_RE.match(iso_date):
        return "--"

    _, month, day = iso_date.split("-")
    month_index = int(month) - 1
    if not 0 <= month_index < 12:
        return "--"

    return f"{MONTH_NAMES[month_index]} {int(day)}"


def format_date_range(start_date: str | None, end_date: str | None) -> str:
    """Format a date range as "Jan 1 - Jan 5", or "--" if either end is missing."""
    if not start_date or not end_date:
        return "--"
    return f"{format_date(start_date)} - {format_date(end_date)}"


def format_month(month_label: str | None) -> str:
    """Format a YYYY-MM label as "Feb 2025"."""
    if not month_label or not MONTH_LABEL_RE.match(month_label):
        return "--"
    year, month = month_label.split("-")
    month_index = int(month) - 1
    if not 0 <= month_index < 12:
        return "--"
    return f"{MONTH_NAMES[month_index]} {year}"


def truncate(value, max_length: int) -> str:
    """Truncate text to max_length characters, ending with an ellipsis."""
    text = sanitize_text(value)
    if len(text) <= max_length:
        return text
    return text[: max(max_length - 1, 0)] + "…"
