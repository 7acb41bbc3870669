"""
Shared fixtures for year-report tests.
"""

from datetime import date, timedelta

import pytest


def contribution_level(count: int) -> str:
    """Map a count to a GitHub-style contribution level."""
    if count <= 0:
        return "NONE"
    if count <= 2:
        return "FIRST_QUARTILE"
    if count <= 4:
        return "SECOND_QUARTILE"
    if count <= 7:
        return "THIRD_QUARTILE"
    return "FOURTH_QUARTILE"


def build_calendar(year: int, day_counts: dict | None = None) -> dict:
    """
    Build a GitHub-style contribution calendar covering a whole year.

    Args:
        year: Calendar year
        day_counts: Optional mapping of YYYY-MM-DD -> count (others are 0)
    """
    day_counts = day_counts or {}
    days = []
    cursor = date(year, 1, 1)
    end = date(year, 12, 31)

    while cursor <= end:
        iso_date = cursor.isoformat()
        count = day_counts.get(iso_date, 0)
        days.append({
            "contributionCount": count,
            "contributionLevel": contribution_level(count),
            "date": iso_date,
            "weekday": (cursor.weekday() + 1) % 7,
        })
        cursor += timedelta(days=1)

    return {"weeks": [{"contributionDays": days[i:i + 7]} for i in range(0, len(days), 7)]}


def every_day(year: int, count: int = 1) -> dict:
    """Day counts giving every day of the year the same count."""
    cursor = date(year, 1, 1)
    counts = {}
    while cursor.year == year:
        counts[cursor.isoformat()] = count
        cursor += timedelta(days=1)
    return counts


@pytest.fixture
def make_calendar():
    """Factory fixture for full-year contribution calendars."""
    return build_calendar


@pytest.fixture
def sample_repo_rows():
    """commitContributionsByRepository rows as returned by GitHub."""
    return [
        {
            "contributions": {"totalCount": 40},
            "repository": {
                "nameWithOwner": "octo/alpha",
                "url": "https://github.com/octo/alpha",
                "description": "Alpha project",
                "stargazerCount": 10,
                "forkCount": 2,
                "languages": {
                    "edges": [
                        {"size": 3000, "node": {"name": "Python"}},
                        {"size": 1000, "node": {"name": "Shell"}},
                    ]
                },
            },
        },
        {
            "contributions": {"totalCount": 40},
            "repository": {
                "nameWithOwner": "octo/beta",
                "url": "https://github.com/octo/beta",
                "description": None,
                "stargazerCount": 50,
                "forkCount": 5,
                "languages": {
                    "edges": [
                        {"size": 2000, "node": {"name": "Python"}},
                        {"size": 4000, "node": {"name": "TypeScript"}},
                    ]
                },
            },
        },
        {
            "contributions": {"totalCount": 5},
            "repository": {
                "nameWithOwner": "octo/gamma",
                "url": "https://github.com/octo/gamma",
                "description": "Gamma",
                "stargazerCount": 0,
                "forkCount": 0,
                "languages": {"edges": []},
            },
        },
    ]


@pytest.fixture
def every_day_counts():
    """Factory fixture for day counts covering a whole year."""
    return every_day


@pytest.fixture
def profile_data(sample_repo_rows):
    """fetch_yearly_profile_data() result for a 2025 calendar year."""
    return {
        "user": {
            "name": "The Octocat",
            "login": "octocat",
            "avatarUrl": "https://avatars.githubusercontent.com/u/583231",
            "bio": None,
            "followers": {"totalCount": 120},
            "following": {"totalCount": 9},
            "contributionsCollection": {
                "contributionCalendar": build_calendar(2025, {
                    "2025-03-10": 2,
                    "2025-03-11": 5,
                    "2025-03-12": 1,
                }),
                "commitContributionsByRepository": sample_repo_rows,
            },
        },
        "rateLimit": {"remaining": 4990, "resetAt": "2026-01-01T01:00:00Z"},
    }
