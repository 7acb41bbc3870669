"""
Normalize a raw contribution calendar into heatmap weeks.

Accepts both upstream payload shapes (contributionDays/contributionCount/
contributionLevel and days/count/level) and marks each day as included or
excluded for the active report window.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone

from year_report.time_zone import date_parts_in_zone
from year_report.window import WindowOptions, should_include_day

NONE_LEVEL = "NONE"
EXCLUDED_LEVEL = "NULL"


@dataclass(frozen=True)
class NormalizedDay:
    """A single heatmap cell."""

    date: str | None
    count: int
    level: str
    weekday: int
    included: bool

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "count": self.count,
            "level": self.level,
            "weekday": self.weekday,
            "included": self.included,
        }


def build_heatmap_weeks(calendar: dict | None, options: WindowOptions) -> list[list[NormalizedDay]]:
    """
    Build heatmap weeks from a contribution calendar.

    Week and day order is preserved from the source. Excluded days keep
    their position but always have count 0 and the EXCLUDED_LEVEL level, so
    a renderer can tell "no activity" apart from "outside the window".

    Days whose date is not a valid YYYY-MM-DD string are treated as excluded.

    Args:
        calendar: Dict with a "weeks" list, or None
        options: Window options (year, time zone, now, date range)

    Returns:
        List of weeks, each a list of NormalizedDay

    Raises:
        InvalidTimeZoneError: If options.time_zone is unknown
    """
    now = options.now if options.now is not None else datetime.now(timezone.utc)
    today = date_parts_in_zone(now, options.time_zone)

    weeks = (calendar or {}).get("weeks") or []

    heatmap_weeks = []
    for week in weeks:
        days = week.get("contributionDays")
        if days is None:
            days = week.get("days")

        normalized = []
        for day in days or []:
            day_date = day.get("date")
            parsed = _parse_iso_date(day_date)

            included = parsed is not None and should_include_day(
                day_date,
                year=options.year,
                current_year=today.year,
                today_iso=today.iso_date,
                date_range=options.date_range,
            )

            normalized.append(
                NormalizedDay(
                    date=day_date,
                    count=_first_present(day, "contributionCount", "count", 0, _coerce_count) if included else 0,
                    level=_first_present(day, "contributionLevel", "level", NONE_LEVEL, str) if included else EXCLUDED_LEVEL,
                    weekday=_resolve_weekday(day.get("weekday"), parsed),
                    included=included,
                )
            )

        heatmap_weeks.append(normalized)

    return heatmap_weeks


def _first_present(day: dict, primary: str, alias: str, default, convert):
    """Read a field under its primary or alias name, falling back to default."""
    value = day.get(primary)
    if value is None:
        value = day.get(alias)
    if value is None:
        return default
    return convert(value)


def _coerce_count(value) -> int:
    """Convert a raw contribution count to a non-negative int (0 if unusable)."""
    if isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError):
        return 0
    return max(count, 0)


def _parse_iso_date(value) -> date | None:
    if not isinstance(value, str) or len(value) != 10:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def _resolve_weekday(value, parsed: date | None) -> int:
    """
    Get the weekday index (0=Sunday..6=Saturday).

    Uses the supplied value when valid, otherwise derives it from the date.
    """
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 6:
        return value
    if parsed is not None:
        return (parsed.weekday() + 1) % 7
    return 0
