"""
CLI display functions for year-report.
"""

from year_report.formatting import (
    WEEKDAY_NAMES,
    format_date,
    format_date_range,
    format_month,
    format_number,
    to_percent,
    truncate,
)
from year_report.rankings import LanguageAggregate, RepositoryAggregate
from year_report.stats_calculator import YearlyStatistics
from year_report.summary import Summary

# Cell glyphs by contribution level
LEVEL_GLYPHS = {
    "NONE": "·",
    "FIRST_QUARTILE": "░",
    "SECOND_QUARTILE": "▒",
    "THIRD_QUARTILE": "▓",
    "FOURTH_QUARTILE": "█",
    "NULL": " ",
}


def get_period_label(year: int, is_rolling: bool) -> str:
    """Get the label for the report period."""
    return "Past 365 days" if is_rolling else f"Year {year}"


def display_overview(stats: YearlyStatistics, year: int, is_rolling: bool = False) -> None:
    """
    Display the headline statistics.

    Args:
        stats: YearlyStatistics from derive_yearly_statistics()
        year: Report year
        is_rolling: Whether the report covers the last 365 days
    """
    total = stats.total_contributions
    total_label = "contribution" if total == 1 else "contributions"

    print(f"📊 {get_period_label(year, is_rolling)}")
    print(f"   Total:          {format_number(total)} {total_label}")
    print(f"   Active days:    {stats.active_days} / {stats.total_days_considered}")
    print(f"   Daily average:  {stats.average_contributions_per_day}")

    if stats.max_contributions_date:
        print(
            f"   Busiest day:    {format_date(stats.max_contributions_date)} "
            f"({format_number(stats.max_contributions_in_a_day)})"
        )
    if stats.max_contributions_month:
        print(
            f"   Busiest month:  {format_month(stats.max_contributions_month)} "
            f"({format_number(stats.max_monthly_contributions)})"
        )
    print(f"   Busiest weekday: {WEEKDAY_NAMES[stats.busiest_weekday]}")
    print()

    streak_word = "day" if stats.longest_streak == 1 else "days"
    gap_word = "day" if stats.longest_gap == 1 else "days"
    print(f"🔥 Longest streak: {stats.longest_streak} {streak_word}")
    if stats.longest_streak:
        print(
            f"   {format_date_range(stats.longest_streak_start_date, stats.longest_streak_end_date)}"
        )
    print(f"💤 Longest gap: {stats.longest_gap} {gap_word}")
    if stats.longest_gap:
        print(f"   {format_date_range(stats.longest_gap_start_date, stats.longest_gap_end_date)}")
    print()


def render_heatmap(heatmap_weeks) -> list[str]:
    """
    Render heatmap weeks as text rows, one row per weekday (Sunday first).

    Args:
        heatmap_weeks: Weeks of NormalizedDay from YearlyStatistics.heatmap_weeks

    Returns:
        Seven strings, one per weekday
    """
    rows = [[] for _ in range(7)]

    for week in heatmap_weeks:
        cells = [" "] * 7
        for day in week:
            cells[day.weekday] = LEVEL_GLYPHS.get(day.level, "?")
        for weekday, cell in enumerate(cells):
            rows[weekday].append(cell)

    return [f"{WEEKDAY_NAMES[i][:3]} {''.join(row)}".rstrip() for i, row in enumerate(rows)]


def display_heatmap(heatmap_weeks) -> None:
    """Display the contribution heatmap."""
    print("Contribution Heatmap:")
    for row in render_heatmap(heatmap_weeks):
        print(f"  {row}")
    print()


def display_top_repositories(repos: list[RepositoryAggregate]) -> None:
    """Display the top repositories by commits."""
    print("🏆 Top Repositories:")
    for index, repo in enumerate(repos, start=1):
        plural = "commit" if repo.commits == 1 else "commits"
        print(
            f"   {index}. {truncate(repo.name_with_owner, 40):<40} "
            f"{format_number(repo.commits)} {plural}  ★ {format_number(repo.stars)}"
        )
    print()


def display_top_languages(languages: list[LanguageAggregate]) -> None:
    """Display the top languages by code size."""
    print("💻 Top Languages:")
    for index, item in enumerate(languages, start=1):
        print(f"   {index}. {item.language:<20} {to_percent(item.ratio):>6}")
    print()


def display_summary(summary: Summary) -> None:
    """Display the written summary."""
    print("📝 Summary:")
    print(f"   {summary.intro}")
    for section in summary.sections:
        print(f"   {section.heading}: {section.content}")
    if summary.mode == "fallback" and summary.reason:
        print(f"   (fallback summary: {summary.reason})")
    print()
