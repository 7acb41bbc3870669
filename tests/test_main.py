"""
Tests for the command-line entry point.
"""

import io
import json
from contextlib import redirect_stdout
from unittest.mock import patch

import pytest

from year_report.github_client import GitHubClientError
from year_report.main import SNAPSHOT_FILENAME, main, parse_args


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])

        assert args.year is None
        assert args.dry_run is False
        assert args.no_ai is False

    def test_flags(self, tmp_path):
        args = parse_args(["--year", "2024", "--dry-run", "--no-ai", "--output", str(tmp_path)])

        assert args.year == 2024
        assert args.dry_run is True
        assert args.no_ai is True
        assert args.output == tmp_path

    @pytest.mark.parametrize("value", ["24", "twenty", "20245"])
    def test_year_must_have_four_digits(self, value):
        with pytest.raises(SystemExit):
            parse_args(["--year", value])

    def test_unknown_argument(self):
        with pytest.raises(SystemExit):
            parse_args(["--bogus"])


@pytest.fixture
def configured():
    with patch("year_report.main.validate_config"), \
            patch("year_report.main.GH_USERNAME", "octocat"), \
            patch("year_report.main.GH_STATS_TOKEN", "ghp_test"), \
            patch("year_report.main.REPORT_TZ", "UTC"):
        yield


def run_main(argv) -> tuple[int, str]:
    output = io.StringIO()
    with redirect_stdout(output):
        code = main(argv)
    return code, output.getvalue()


class TestMain:
    def test_configuration_error(self):
        with patch("year_report.main.validate_config", side_effect=ValueError("Missing GH_USERNAME")):
            code, output = run_main([])

        assert code == 1
        assert "Configuration Error" in output
        assert "Missing GH_USERNAME" in output

    def test_invalid_year(self, configured):
        code, output = run_main(["--year", "1999"])

        assert code == 1
        assert "Invalid year: 1999" in output

    def test_github_error(self, configured):
        with patch("year_report.main.GitHubClient") as mock_client:
            mock_client.return_value.fetch_yearly_profile_data.side_effect = GitHubClientError(
                "Authentication failed."
            )
            code, output = run_main(["--year", "2025", "--no-ai"])

        assert code == 1
        assert "Error: Authentication failed." in output

    def test_dry_run_prints_json(self, configured, profile_data, tmp_path):
        with patch("year_report.main.GitHubClient") as mock_client:
            instance = mock_client.return_value
            instance.fetch_yearly_profile_data.return_value = profile_data
            instance.fetch_issue_count.return_value = 2
            instance.fetch_pr_count.return_value = 1

            code, output = run_main(["--year", "2025", "--no-ai", "--dry-run", "--output", str(tmp_path)])

        assert code == 0
        summary = json.loads(output[output.index("{"):])
        assert summary["username"] == "octocat"
        assert summary["year"] == 2025
        assert summary["totalContributions"] == 8
        assert summary["aiMode"] == "fallback"
        assert summary["prCount"] == 1
        assert not (tmp_path / SNAPSHOT_FILENAME).exists()

    def test_writes_snapshot(self, configured, profile_data, tmp_path):
        with patch("year_report.main.GitHubClient") as mock_client:
            instance = mock_client.return_value
            instance.fetch_yearly_profile_data.return_value = profile_data
            instance.fetch_issue_count.return_value = 2
            instance.fetch_pr_count.return_value = 1

            code, output = run_main(["--year", "2025", "--no-ai", "--output", str(tmp_path / "out")])

        assert code == 0
        assert "Longest streak: 3 days" in output
        snapshot_path = tmp_path / "out" / SNAPSHOT_FILENAME
        assert f"Updated snapshot: {snapshot_path}" in output
        snapshot = json.loads(snapshot_path.read_text(encoding="utf-8"))
        assert snapshot["stats"]["totalContributions"] == 8
        assert snapshot["issuesCount"] == 2
        assert len(snapshot["topRepos"]) == 3
        assert len(snapshot["topLanguages"]) == 5
