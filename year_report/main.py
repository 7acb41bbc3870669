"""
year-report: A GitHub annual report generator

Entry point for the application.
"""

import argparse
import json
import re
import sys
from pathlib import Path

from year_report.config import GH_STATS_TOKEN, GH_USERNAME, REPORT_TZ, validate_config
from year_report.cli import (
    display_heatmap,
    display_overview,
    display_summary,
    display_top_languages,
    display_top_repositories,
)
from year_report.github_client import GitHubClient, GitHubClientError
from year_report.report import build_report
from year_report.time_zone import InvalidTimeZoneError
from year_report.window import resolve_window

SNAPSHOT_FILENAME = "github-annual-report.json"


def _year_arg(value: str) -> int:
    if not re.fullmatch(r"\d{4}", value):
        raise argparse.ArgumentTypeError("--year must be a 4-digit year")
    return int(value)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="year-report",
        description="Generate a GitHub annual contribution report.",
    )
    parser.add_argument(
        "--year",
        type=_year_arg,
        default=None,
        help="Calendar year to report on (default: the last 365 days)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print a summary as JSON without writing the snapshot",
    )
    parser.add_argument(
        "--no-ai",
        action="store_true",
        help="Use the template summary instead of asking Claude",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("assets"),
        help="Directory for the JSON snapshot (default: assets)",
    )
    return parser.parse_args(argv)


def write_snapshot(snapshot: dict, output_dir: Path) -> Path:
    """Write the report snapshot as JSON and return its path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / SNAPSHOT_FILENAME
    path.write_text(json.dumps(snapshot, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    print("year-report - Your year on GitHub")
    print("-" * 50)

    # Validate configuration
    try:
        validate_config()
    except ValueError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1

    try:
        window = resolve_window(args.year, REPORT_TZ)
    except (ValueError, InvalidTimeZoneError) as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1

    try:
        client = GitHubClient(GH_STATS_TOKEN)
        print(f"\nFetching contributions for {GH_USERNAME}...\n")
        report = build_report(client, GH_USERNAME, window, REPORT_TZ, ai_enabled=not args.no_ai)
    except GitHubClientError as e:
        print(f"\nError: {e}")
        return 1

    snapshot = report.snapshot()

    if args.dry_run:
        stats = snapshot["stats"]
        print(
            json.dumps(
                {
                    "generatedAt": snapshot["generatedAt"],
                    "username": snapshot["username"],
                    "year": snapshot["year"],
                    "totalContributions": stats["totalContributions"],
                    "averageContributionsPerDay": stats["averageContributionsPerDay"],
                    "maxContributionsMonth": stats["maxContributionsMonth"],
                    "aiMode": snapshot["aiMode"],
                    "issuesCount": snapshot["issuesCount"],
                    "prCount": snapshot["prCount"],
                },
                indent=2,
            )
        )
        return 0

    display_overview(report.stats, window.year, window.is_rolling)
    display_heatmap(report.stats.heatmap_weeks)
    display_top_repositories(report.top_repos)
    display_top_languages(report.top_languages)
    display_summary(report.summary)

    if report.summary.mode == "fallback" and report.summary.reason and not args.no_ai:
        print(f"Warning: AI summary unavailable: {report.summary.reason}", file=sys.stderr)

    path = write_snapshot(snapshot, args.output)
    print(f"Updated snapshot: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
