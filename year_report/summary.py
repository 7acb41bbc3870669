"""
Report summaries.

Generates a short written summary of the yearly statistics using the
Anthropic API, falling back to a deterministic template when AI is
disabled, not configured, or fails.
"""

import json
from dataclasses import dataclass, field

import anthropic

from year_report.config import ANTHROPIC_API_KEY, ANTHROPIC_MODEL
from year_report.formatting import format_date, format_date_range, format_month, format_number
from year_report.rankings import LanguageAggregate, RepositoryAggregate
from year_report.stats_calculator import YearlyStatistics


class LLMConfigError(Exception):
    """Raised when LLM is not configured (missing API key)."""

    pass


class LLMRateLimitError(Exception):
    """Raised when LLM API rate limit is exceeded."""

    pass


class LLMError(Exception):
    """Generic LLM error."""

    pass


@dataclass(frozen=True)
class SummarySection:
    heading: str
    content: str


@dataclass(frozen=True)
class Summary:
    """A report summary, either AI-written or from the fallback template."""

    mode: str
    intro: str
    sections: list[SummarySection] = field(default_factory=list)
    reason: str | None = None

    def to_dict(self) -> dict:
        data = {
            "mode": self.mode,
            "intro": self.intro,
            "sections": [
                {"heading": s.heading, "content": s.content} for s in self.sections
            ],
        }
        if self.reason:
            data["reason"] = self.reason
        return data


SYSTEM_PROMPT = """You are a GitHub annual report analyst.
Goal: write a dense, verifiable summary of the user's year. Avoid filler, hype and boilerplate.
Rules:
1) Every claim must come from the input data. Prefer concrete numbers, dates, rankings and repository names.
2) Lead with the conclusion, then the evidence. No encouragement unrelated to the data.
3) Keep it concise and professional, at most 2 sentences per section.
4) If a value is missing, skip it. Do not guess.
Return JSON exactly in the form {"intro": string, "sections": [{"heading": string, "content": string}]}.
Always return 3 sections, suggested topics: contribution overview, rhythm and consistency, technology and projects."""

AI_TIMEOUT_SECONDS = 20

USER_PROMPT = """Write the JSON report summary from the data below.
Mode: {mode}.
Include where possible: total contributions, daily average, peak month, peak day, longest streak and gap, issues, top languages and top repositories.
Data: {data}

Respond with only valid JSON, no markdown or explanation."""


def _period_text(year: int, is_rolling: bool) -> str:
    return "the past year" if is_rolling else str(year)


def build_fallback_summary(
    stats: YearlyStatistics,
    year: int,
    issues_count: int,
    is_rolling: bool = False,
    reason: str | None = None,
) -> Summary:
    """
    Build a deterministic summary from the statistics.

    Args:
        stats: Yearly statistics
        year: Report year
        issues_count: Issues the user was involved in
        is_rolling: Whether the report covers the last 365 days
        reason: Why the fallback was used

    Returns:
        Summary with mode "fallback"
    """
    period = _period_text(year, is_rolling)

    if stats.max_contributions_month:
        hottest_month = format_month(stats.max_contributions_month)
    else:
        hottest_month = "no particular month"

    if stats.max_contributions_date:
        busiest_day = (
            f"Your busiest day was {format_date(stats.max_contributions_date)} "
            f"with {format_number(stats.max_contributions_in_a_day)} contributions."
        )
    else:
        busiest_day = "No contributions were recorded in this period."

    gap_range = format_date_range(stats.longest_gap_start_date, stats.longest_gap_end_date)

    return Summary(
        mode="fallback",
        intro=(
            f"In {period} you made {format_number(stats.total_contributions)} contributions "
            f"on GitHub, {stats.average_contributions_per_day} per day on average."
        ),
        sections=[
            SummarySection(
                heading="Rhythm",
                content=(
                    f"Activity peaked in {hottest_month}, and your longest streak "
                    f"ran for {stats.longest_streak} days."
                ),
            ),
            SummarySection(heading="Highlight", content=busiest_day),
            SummarySection(
                heading="Collaboration",
                content=(
                    f"You took part in {format_number(issues_count)} issues in {period}; "
                    f"your longest break was {stats.longest_gap} days ({gap_range})."
                ),
            ),
        ],
        reason=reason,
    )


def build_prompt_data(
    username: str,
    year: int,
    stats: YearlyStatistics,
    issues_count: int,
    top_languages: list[LanguageAggregate],
    top_repos: list[RepositoryAggregate],
    is_rolling: bool = False,
) -> dict:
    """Collect the figures sent to the model."""
    return {
        "username": username,
        "year": year,
        "mode": "Rolling 365 Days" if is_rolling else "Calendar Year",
        "totalContributions": stats.total_contributions,
        "averagePerDay": stats.average_contributions_per_day,
        "longestStreak": stats.longest_streak,
        "longestGap": stats.longest_gap,
        "mostActiveMonth": stats.max_contributions_month,
        "maxContributionsDay": stats.max_contributions_in_a_day,
        "maxContributionsDate": stats.max_contributions_date,
        "issuesCount": issues_count,
        "topLanguages": ", ".join(
            f"#{idx + 1} {item.language}" for idx, item in enumerate(top_languages[:3])
        ),
        "topRepos": ", ".join(
            f"{repo.name_with_owner}({repo.commits})" for repo in top_repos[:3]
        ),
    }


class ClaudeClient:
    """Client for Claude API summaries."""

    def __init__(self, api_key: str | None = None, model: str | None = None):
        """
        Initialize the Claude client.

        Args:
            api_key: Anthropic API key. Defaults to ANTHROPIC_API_KEY.
            model: Model name. Defaults to ANTHROPIC_MODEL.
        """
        self.api_key = api_key if api_key is not None else ANTHROPIC_API_KEY
        self.model = model or ANTHROPIC_MODEL
        self._client = None

    @property
    def is_configured(self) -> bool:
        """Check if the API key is configured."""
        return bool(self.api_key) and self.api_key != "your_api_key_here"

    def _get_client(self):
        """Get or create the Anthropic client."""
        if not self.is_configured:
            raise LLMConfigError(
                "Anthropic API key not configured. "
                "Set ANTHROPIC_API_KEY in your .env file."
            )

        if self._client is None:
            self._client = anthropic.Anthropic(api_key=self.api_key, timeout=AI_TIMEOUT_SECONDS)

        return self._client

    def generate_summary(self, prompt_data: dict) -> Summary:
        """
        Ask the model for a summary of the report data.

        Args:
            prompt_data: Output of build_prompt_data()

        Returns:
            Summary with mode "ai" and at most 3 sections

        Raises:
            LLMConfigError: If API key is not configured
            LLMRateLimitError: If rate limit is exceeded
            LLMError: For other API errors or an invalid response
        """
        client = self._get_client()
        mode = (
            "rolling statistics for the last 365 days"
            if prompt_data.get("mode") == "Rolling 365 Days"
            else f"calendar year {prompt_data.get('year')}"
        )
        prompt = USER_PROMPT.format(
            mode=mode, data=json.dumps(prompt_data, ensure_ascii=False)
        )

        try:
            message = client.messages.create(
                model=self.model,
                max_tokens=1000,
                temperature=0.3,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.RateLimitError as e:
            raise LLMRateLimitError(
                "Rate limit exceeded. Please wait before making more requests."
            ) from e
        except anthropic.APIError as e:
            raise LLMError(f"API error: {e}") from e

        if not message.content:
            raise LLMError("AI returned empty content")

        response_text = message.content[0].text.strip()

        # Handle potential markdown code blocks
        if response_text.startswith("```"):
            lines = response_text.split("\n")
            response_text = "\n".join(lines[1:-1])

        try:
            data = json.loads(response_text)
        except json.JSONDecodeError as e:
            raise LLMError(f"Failed to parse AI response as JSON: {e}") from e

        if not isinstance(data, dict):
            raise LLMError("AI response schema is invalid")

        sections = data.get("sections")
        if not data.get("intro") or not isinstance(sections, list) or not sections:
            raise LLMError("AI response schema is invalid")

        return Summary(
            mode="ai",
            intro=str(data["intro"]),
            sections=[
                SummarySection(
                    heading=str(item.get("heading") or "Analysis"),
                    content=str(item.get("content") or ""),
                )
                for item in sections[:3]
                if isinstance(item, dict)
            ],
        )


def generate_summary(
    *,
    enabled: bool,
    username: str,
    year: int,
    stats: YearlyStatistics,
    issues_count: int,
    top_languages: list[LanguageAggregate],
    top_repos: list[RepositoryAggregate],
    is_rolling: bool = False,
    client: ClaudeClient | None = None,
) -> Summary:
    """
    Produce the report summary.

    Returns the AI summary when enabled and configured; otherwise, or when
    the AI call fails, returns the fallback summary with the reason.
    """
    if client is None:
        client = ClaudeClient()

    if not enabled or not client.is_configured:
        return build_fallback_summary(
            stats,
            year,
            issues_count,
            is_rolling,
            reason="AI is disabled or ANTHROPIC_API_KEY is missing",
        )

    prompt_data = build_prompt_data(
        username, year, stats, issues_count, top_languages, top_repos, is_rolling
    )

    try:
        return client.generate_summary(prompt_data)
    except (LLMConfigError, LLMRateLimitError, LLMError) as e:
        return build_fallback_summary(stats, year, issues_count, is_rolling, reason=str(e))
