"""
Derive yearly contribution statistics from a contribution calendar.
"""

import math
from dataclasses import dataclass, field, replace

from year_report.heatmap_builder import NormalizedDay, build_heatmap_weeks
from year_report.window import WindowOptions

ACTIVE = "active"
INACTIVE = "inactive"


@dataclass(frozen=True)
class RunRecord:
    """The longest run of one kind seen so far."""

    length: int = 0
    start: str | None = None
    end: str | None = None


@dataclass(frozen=True)
class RunState:
    """
    Streak/gap tracking state threaded through the day scan.

    kind is None before the first day, then ACTIVE or INACTIVE for the run
    the most recent day belongs to. A day of the other kind starts a new run,
    so the open run is always of a single kind.
    """

    kind: str | None = None
    start: str | None = None
    length: int = 0
    longest_streak: RunRecord = field(default_factory=RunRecord)
    longest_gap: RunRecord = field(default_factory=RunRecord)


def advance_run(state: RunState, day_date: str, active: bool) -> RunState:
    """
    Fold one included day into the run state.

    Args:
        state: State after the previous included day
        day_date: Date of this day (YYYY-MM-DD)
        active: Whether the day had any contributions

    Returns:
        The new RunState
    """
    kind = ACTIVE if active else INACTIVE

    if state.kind == kind:
        start, length = state.start, state.length + 1
    else:
        start, length = day_date, 1

    state = replace(state, kind=kind, start=start, length=length)

    if active and length > state.longest_streak.length:
        state = replace(state, longest_streak=RunRecord(length, start, day_date))
    elif not active and length > state.longest_gap.length:
        state = replace(state, longest_gap=RunRecord(length, start, day_date))

    return state


@dataclass(frozen=True)
class YearlyStatistics:
    """Statistics for one report window."""

    total_contributions: int
    total_days_considered: int
    active_days: int
    average_contributions_per_day: float
    max_contributions_in_a_day: int
    max_contributions_date: str | None
    longest_streak: int
    longest_streak_start_date: str | None
    longest_streak_end_date: str | None
    longest_gap: int
    longest_gap_start_date: str | None
    longest_gap_end_date: str | None
    max_contributions_month: str | None
    max_monthly_contributions: int
    monthly_contributions: tuple[int, ...]
    weekday_contributions: tuple[int, ...]
    busiest_weekday: int
    heatmap_weeks: tuple[tuple[NormalizedDay, ...], ...] = ()

    def to_dict(self, include_heatmap: bool = True) -> dict:
        """
        Convert to the JSON shape used by snapshots and renderers.

        Args:
            include_heatmap: Include the heatmapWeeks matrix
        """
        data = {
            "totalContributions": self.total_contributions,
            "totalDaysConsidered": self.total_days_considered,
            "activeDays": self.active_days,
            "averageContributionsPerDay": self.average_contributions_per_day,
            "maxContributionsInADay": self.max_contributions_in_a_day,
            "maxContributionsDate": self.max_contributions_date,
            "longestStreak": self.longest_streak,
            "longestStreakStartDate": self.longest_streak_start_date,
            "longestStreakEndDate": self.longest_streak_end_date,
            "longestGap": self.longest_gap,
            "longestGapStartDate": self.longest_gap_start_date,
            "longestGapEndDate": self.longest_gap_end_date,
            "maxContributionsMonth": self.max_contributions_month,
            "maxMonthlyContributions": self.max_monthly_contributions,
            "monthlyContributions": list(self.monthly_contributions),
            "weekdayContributions": list(self.weekday_contributions),
            "busiestWeekday": self.busiest_weekday,
        }
        if include_heatmap:
            data["heatmapWeeks"] = [
                {"days": [day.to_dict() for day in week]} for week in self.heatmap_weeks
            ]
        return data


def aggregate_statistics(heatmap_weeks: list[list[NormalizedDay]], year: int) -> YearlyStatistics:
    """
    Scan normalized heatmap weeks and compute the statistics.

    Only included days are scanned; excluded days are skipped and do not
    break a streak or gap. Days are visited in week/day order, which is
    date order for calendars returned by GitHub.

    Args:
        heatmap_weeks: Output of build_heatmap_weeks()
        year: Report year, used to label the busiest month

    Returns:
        YearlyStatistics for the included days
    """
    total_contributions = 0
    total_days_considered = 0
    active_days = 0

    max_contributions_in_a_day = 0
    max_contributions_date = None

    monthly_contributions = [0] * 12
    weekday_contributions = [0] * 7

    runs = RunState()

    for week in heatmap_weeks:
        for day in week:
            if not day.included:
                continue

            count = day.count
            active = count > 0

            total_days_considered += 1
            total_contributions += count
            if active:
                active_days += 1

            weekday_contributions[day.weekday] += count
            monthly_contributions[int(day.date[5:7]) - 1] += count

            # Strict comparison keeps the first date on ties
            if active and count > max_contributions_in_a_day:
                max_contributions_in_a_day = count
                max_contributions_date = day.date

            runs = advance_run(runs, day.date, active)

    max_contributions_month = None
    max_monthly_contributions = 0
    for index, value in enumerate(monthly_contributions):
        if value > max_monthly_contributions:
            max_monthly_contributions = value
            max_contributions_month = f"{year}-{index + 1:02d}"

    busiest_weekday = 0
    busiest_weekday_value = -1
    for weekday, value in enumerate(weekday_contributions):
        if value > busiest_weekday_value:
            busiest_weekday_value = value
            busiest_weekday = weekday

    return YearlyStatistics(
        total_contributions=total_contributions,
        total_days_considered=total_days_considered,
        active_days=active_days,
        average_contributions_per_day=_average(total_contributions, total_days_considered),
        max_contributions_in_a_day=max_contributions_in_a_day,
        max_contributions_date=max_contributions_date,
        longest_streak=runs.longest_streak.length,
        longest_streak_start_date=runs.longest_streak.start,
        longest_streak_end_date=runs.longest_streak.end,
        longest_gap=runs.longest_gap.length,
        longest_gap_start_date=runs.longest_gap.start,
        longest_gap_end_date=runs.longest_gap.end,
        max_contributions_month=max_contributions_month,
        max_monthly_contributions=max_monthly_contributions,
        monthly_contributions=tuple(monthly_contributions),
        weekday_contributions=tuple(weekday_contributions),
        busiest_weekday=busiest_weekday,
        heatmap_weeks=tuple(tuple(week) for week in heatmap_weeks),
    )


def derive_yearly_statistics(calendar: dict | None, options: WindowOptions) -> YearlyStatistics:
    """
    Compute statistics for a contribution calendar.

    Args:
        calendar: Contribution calendar with a "weeks" list
        options: Window options

    Raises:
        InvalidTimeZoneError: If options.time_zone is unknown
    """
    heatmap_weeks = build_heatmap_weeks(calendar, options)
    return aggregate_statistics(heatmap_weeks, options.year)


def _average(total: int, days: int) -> float:
    """Average per day rounded to one decimal place, halves rounding up."""
    if days <= 0:
        return 0.0
    return math.floor(total / days * 10 + 0.5) / 10
