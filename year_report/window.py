"""
Report windows and the day-inclusion policy.

A report covers either a fixed calendar year or a rolling window of the last
365 days ending today.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from year_report.time_zone import date_parts_in_zone, resolve_zone

MIN_YEAR = 2008
MAX_YEAR = 2100
ROLLING_WINDOW_DAYS = 365


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of ISO dates (YYYY-MM-DD)."""

    start: str
    end: str


@dataclass(frozen=True)
class WindowOptions:
    """
    Options controlling which days count toward the statistics.

    year is required in both modes; it labels months and is the fallback
    filter when no date_range is given. now defaults to the current instant.
    """

    year: int
    time_zone: str
    now: datetime | None = None
    date_range: DateRange | None = None


@dataclass(frozen=True)
class ReportWindow:
    """A resolved report window, including the values the API client needs."""

    year: int
    is_rolling: bool
    date_range: DateRange | None
    from_timestamp: str
    to_timestamp: str
    created_range: str

    def options(self, time_zone: str, now: datetime | None = None) -> WindowOptions:
        """Build the WindowOptions for this window."""
        return WindowOptions(
            year=self.year,
            time_zone=time_zone,
            now=now,
            date_range=self.date_range,
        )


def should_include_day(
    day_date,
    *,
    year: int,
    current_year: int,
    today_iso: str,
    date_range: DateRange | None = None,
) -> bool:
    """
    Decide whether a day counts toward the active window.

    With a date_range, only the inclusive range is checked; the day may fall
    in a different calendar year than `year`. Without one, the day must be
    in `year`, and for the current year it must not be after today.

    Days without a usable date string are never included.

    Args:
        day_date: The day's date (YYYY-MM-DD)
        year: Report year
        current_year: The year "today" falls in for the observer
        today_iso: Today's date (YYYY-MM-DD) for the observer
        date_range: Optional explicit inclusive range

    Returns:
        True if the day is part of the window
    """
    if not isinstance(day_date, str) or not day_date:
        return False

    # Zero-padded ISO dates compare correctly as strings
    if date_range is not None:
        return date_range.start <= day_date <= date_range.end

    if not day_date.startswith(f"{year}-"):
        return False

    if year != current_year:
        return True

    return day_date <= today_iso


def validate_year(year: int) -> None:
    """Raise ValueError for years GitHub cannot report on."""
    if not isinstance(year, int) or isinstance(year, bool) or not MIN_YEAR <= year <= MAX_YEAR:
        raise ValueError(f"Invalid year: {year}")


def resolve_window(
    year: int | None, time_zone: str, now: datetime | None = None
) -> ReportWindow:
    """
    Resolve the report window.

    An explicit year selects that calendar year. Without one, the window is
    the last 365 days ending today as observed in time_zone, labelled with
    the current year.

    Args:
        year: Calendar year, or None for the rolling window
        time_zone: IANA zone name used to decide what "today" is
        now: Override the current instant (for testing)

    Raises:
        ValueError: If the year is out of range
        InvalidTimeZoneError: If the time zone is unknown
    """
    if year is not None:
        validate_year(year)
        resolve_zone(time_zone)
        return ReportWindow(
            year=year,
            is_rolling=False,
            date_range=None,
            from_timestamp=f"{year}-01-01T00:00:00Z",
            to_timestamp=f"{year}-12-31T23:59:59Z",
            created_range=f"{year}-01-01..{year}-12-31",
        )

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    today = date_parts_in_zone(now, time_zone)
    end_date = datetime.strptime(today.iso_date, "%Y-%m-%d").date()
    start_date = end_date - timedelta(days=ROLLING_WINDOW_DAYS - 1)

    start_instant = now - timedelta(days=ROLLING_WINDOW_DAYS)

    return ReportWindow(
        year=today.year,
        is_rolling=True,
        date_range=DateRange(start=start_date.isoformat(), end=end_date.isoformat()),
        from_timestamp=_to_utc_timestamp(start_instant),
        to_timestamp=_to_utc_timestamp(now),
        created_range=f"{start_date.isoformat()}..{end_date.isoformat()}",
    )


def _to_utc_timestamp(instant: datetime) -> str:
    return instant.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
