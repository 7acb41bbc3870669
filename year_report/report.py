"""
Assemble an annual report from GitHub data.

Fetches the raw data, derives statistics and rankings, and adds the summary.
Used by both the command-line entry point and the web app.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from year_report.github_client import GitHubClient
from year_report.rankings import (
    LanguageAggregate,
    RepositoryAggregate,
    derive_top_languages,
    derive_top_repositories,
    pad_languages,
    pad_repositories,
)
from year_report.stats_calculator import YearlyStatistics, derive_yearly_statistics
from year_report.summary import ClaudeClient, Summary, generate_summary
from year_report.window import ReportWindow

TOP_REPOSITORY_SLOTS = 3
TOP_LANGUAGE_SLOTS = 5


@dataclass(frozen=True)
class AnnualReport:
    """Everything needed to render or save a report."""

    generated_at: str
    username: str
    time_zone: str
    window: ReportWindow
    profile: dict
    stats: YearlyStatistics
    issues_count: int
    pr_count: int
    top_repos: list[RepositoryAggregate]
    top_languages: list[LanguageAggregate]
    summary: Summary
    rate_limit: dict | None = None

    def snapshot(self) -> dict:
        """JSON snapshot of the report, without the heatmap matrix."""
        return {
            "generatedAt": self.generated_at,
            "year": self.window.year,
            "isRolling": self.window.is_rolling,
            "dateRange": (
                {"start": self.window.date_range.start, "end": self.window.date_range.end}
                if self.window.date_range
                else None
            ),
            "timezone": self.time_zone,
            "username": self.username,
            "profile": self.profile,
            "aiMode": self.summary.mode,
            "aiReason": self.summary.reason,
            "rateLimit": self.rate_limit,
            "stats": self.stats.to_dict(include_heatmap=False),
            "issuesCount": self.issues_count,
            "prCount": self.pr_count,
            "topRepos": [repo.to_dict() for repo in self.top_repos],
            "topLanguages": [item.to_dict() for item in self.top_languages],
            "aiSummary": self.summary.to_dict(),
        }


def _profile_from_user(user: dict) -> dict:
    return {
        "name": user.get("name") or user.get("login"),
        "login": user.get("login"),
        "bio": user.get("bio") or "",
        "avatarUrl": user.get("avatarUrl"),
        "followers": (user.get("followers") or {}).get("totalCount") or 0,
        "following": (user.get("following") or {}).get("totalCount") or 0,
    }


def build_report(
    client: GitHubClient,
    username: str,
    window: ReportWindow,
    time_zone: str,
    ai_enabled: bool = True,
    llm_client: ClaudeClient | None = None,
    now: datetime | None = None,
) -> AnnualReport:
    """
    Fetch GitHub data and build the annual report.

    Args:
        client: GitHub GraphQL client
        username: GitHub login
        window: Resolved report window
        time_zone: IANA zone used to decide what "today" is
        ai_enabled: Whether to try an AI-written summary
        llm_client: Claude client override (for testing)
        now: Override the current instant (for testing)

    Raises:
        GitHubClientError: If fetching data fails
        InvalidTimeZoneError: If time_zone is unknown
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    profile_data = client.fetch_yearly_profile_data(
        username, window.year, window.from_timestamp, window.to_timestamp
    )
    issues_count = client.fetch_issue_count(username, window.year, window.created_range)
    pr_count = client.fetch_pr_count(username, window.year, window.created_range)

    user = profile_data["user"]
    collection = user.get("contributionsCollection") or {}
    calendar = collection.get("contributionCalendar")
    repo_rows = collection.get("commitContributionsByRepository") or []

    stats = derive_yearly_statistics(calendar, window.options(time_zone, now))

    top_repos = pad_repositories(
        derive_top_repositories(repo_rows, TOP_REPOSITORY_SLOTS), TOP_REPOSITORY_SLOTS
    )
    top_languages = pad_languages(
        derive_top_languages(repo_rows, TOP_LANGUAGE_SLOTS), TOP_LANGUAGE_SLOTS
    )

    login = user.get("login") or username

    summary = generate_summary(
        enabled=ai_enabled,
        username=login,
        year=window.year,
        stats=stats,
        issues_count=issues_count,
        top_languages=top_languages,
        top_repos=top_repos,
        is_rolling=window.is_rolling,
        client=llm_client,
    )

    return AnnualReport(
        generated_at=now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        username=login,
        time_zone=time_zone,
        window=window,
        profile=_profile_from_user(user),
        stats=stats,
        issues_count=issues_count,
        pr_count=pr_count,
        top_repos=top_repos,
        top_languages=top_languages,
        summary=summary,
        rate_limit=profile_data.get("rateLimit"),
    )
