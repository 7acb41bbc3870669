"""
Tests for heatmap normalization.
"""

from datetime import datetime, timezone

import pytest

from year_report.heatmap_builder import EXCLUDED_LEVEL, NONE_LEVEL, build_heatmap_weeks
from year_report.time_zone import InvalidTimeZoneError
from year_report.window import DateRange, WindowOptions

OPTIONS = WindowOptions(
    year=2025, time_zone="UTC", now=datetime(2026, 1, 1, tzinfo=timezone.utc)
)


def test_preserves_week_and_day_structure(make_calendar):
    calendar = make_calendar(2025)

    weeks = build_heatmap_weeks(calendar, OPTIONS)

    assert len(weeks) == len(calendar["weeks"])
    assert [len(week) for week in weeks] == [
        len(week["contributionDays"]) for week in calendar["weeks"]
    ]
    assert weeks[0][0].date == "2025-01-01"
    assert weeks[-1][-1].date == "2025-12-31"


def test_accepts_primary_field_names():
    calendar = {
        "weeks": [{
            "contributionDays": [
                {"date": "2025-03-01", "contributionCount": 6, "contributionLevel": "THIRD_QUARTILE", "weekday": 6},
            ]
        }]
    }

    day = build_heatmap_weeks(calendar, OPTIONS)[0][0]

    assert day.count == 6
    assert day.level == "THIRD_QUARTILE"
    assert day.weekday == 6
    assert day.included is True


def test_accepts_alias_field_names():
    calendar = {"weeks": [{"days": [{"date": "2025-03-01", "count": 2, "level": "FIRST_QUARTILE", "weekday": 6}]}]}

    day = build_heatmap_weeks(calendar, OPTIONS)[0][0]

    assert day.count == 2
    assert day.level == "FIRST_QUARTILE"


def test_defaults_missing_count_and_level():
    calendar = {"weeks": [{"days": [{"date": "2025-03-01", "weekday": 6}]}]}

    day = build_heatmap_weeks(calendar, OPTIONS)[0][0]

    assert day.count == 0
    assert day.level == NONE_LEVEL
    assert day.included is True


def test_excluded_day_is_zeroed_with_sentinel_level():
    calendar = {
        "weeks": [{
            "days": [
                {"date": "2024-12-31", "count": 9, "level": "FOURTH_QUARTILE", "weekday": 2},
            ]
        }]
    }

    day = build_heatmap_weeks(calendar, OPTIONS)[0][0]

    assert day.included is False
    assert day.count == 0
    assert day.level == EXCLUDED_LEVEL
    assert day.level != NONE_LEVEL
    assert day.date == "2024-12-31"


def test_date_range_includes_other_years():
    calendar = {"weeks": [{"days": [{"date": "2024-12-31", "count": 9, "weekday": 2}]}]}
    options = WindowOptions(
        year=2025,
        time_zone="UTC",
        now=OPTIONS.now,
        date_range=DateRange("2024-12-01", "2025-01-31"),
    )

    day = build_heatmap_weeks(calendar, options)[0][0]

    assert day.included is True
    assert day.count == 9


def test_missing_calendar_is_empty():
    assert build_heatmap_weeks(None, OPTIONS) == []
    assert build_heatmap_weeks({}, OPTIONS) == []
    assert build_heatmap_weeks({"weeks": None}, OPTIONS) == []


def test_week_without_days_is_empty():
    assert build_heatmap_weeks({"weeks": [{}]}, OPTIONS) == [[]]


def test_invalid_date_is_excluded():
    calendar = {
        "weeks": [{
            "days": [
                {"date": "2025-13-40", "count": 3, "weekday": 1},
                {"count": 3, "weekday": 1},
            ]
        }]
    }

    days = build_heatmap_weeks(calendar, OPTIONS)[0]

    assert all(not day.included for day in days)
    assert all(day.count == 0 for day in days)


def test_non_numeric_count_becomes_zero():
    calendar = {"weeks": [{"days": [{"date": "2025-03-01", "count": "lots", "weekday": 6}]}]}

    day = build_heatmap_weeks(calendar, OPTIONS)[0][0]

    assert day.count == 0


def test_missing_weekday_is_derived_from_date():
    # 2025-01-01 was a Wednesday
    calendar = {"weeks": [{"days": [{"date": "2025-01-01", "count": 1}]}]}

    day = build_heatmap_weeks(calendar, OPTIONS)[0][0]

    assert day.weekday == 3


def test_invalid_time_zone_raises():
    options = WindowOptions(year=2025, time_zone="Nowhere/Special")

    with pytest.raises(InvalidTimeZoneError):
        build_heatmap_weeks({"weeks": []}, options)
