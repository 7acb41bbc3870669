"""
Timezone-aware date helpers.

Resolves which calendar date an instant falls on for an observer in a given
IANA time zone.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class InvalidTimeZoneError(ValueError):
    """Raised when a time zone name cannot be resolved."""

    pass


@dataclass(frozen=True)
class DateParts:
    """Calendar date of an instant as observed in a time zone."""

    year: int
    month: int
    day: int
    iso_date: str


def resolve_zone(time_zone: str) -> ZoneInfo:
    """
    Look up an IANA time zone.

    Args:
        time_zone: Zone name, e.g. "Asia/Shanghai" or "UTC"

    Returns:
        ZoneInfo for the name

    Raises:
        InvalidTimeZoneError: If the name is empty or unknown
    """
    if not time_zone or not isinstance(time_zone, str):
        raise InvalidTimeZoneError(f"Invalid time zone: {time_zone!r}")

    try:
        return ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimeZoneError(f"Invalid time zone: {time_zone!r}") from e


def date_parts_in_zone(instant: datetime, time_zone: str) -> DateParts:
    """
    Get the wall-clock date of an instant in a time zone.

    Naive datetimes are treated as UTC.

    Args:
        instant: The moment to convert
        time_zone: IANA zone name

    Returns:
        DateParts with year, month, day and the YYYY-MM-DD string
    """
    zone = resolve_zone(time_zone)

    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)

    local = instant.astimezone(zone)

    return DateParts(
        year=local.year,
        month=local.month,
        day=local.day,
        iso_date=local.date().isoformat(),
    )


def today_iso_in_zone(time_zone: str, now: datetime | None = None) -> str:
    """
    Get today's date (YYYY-MM-DD) for an observer in a time zone.

    Args:
        time_zone: IANA zone name
        now: Override the current instant (for testing)
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return date_parts_in_zone(now, time_zone).iso_date
