"""
FastAPI web application for year-report.

Provides REST API endpoints for the annual report data.
"""

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from year_report.config import GH_STATS_TOKEN, GH_USERNAME, REPORT_TZ, validate_config
from year_report.github_client import GitHubClient, GitHubClientError
from year_report.report import build_report
from year_report.time_zone import InvalidTimeZoneError
from year_report.window import resolve_window

app = FastAPI(
    title="year-report",
    description="GitHub annual contribution reports",
    version="0.1.0",
)


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str


@app.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


def _build_report_data(year: int | None, ai: bool, include_heatmap: bool) -> dict:
    """
    Fetch GitHub data and build the report snapshot.

    Raises:
        HTTPException: on configuration, input or GitHub API errors
    """
    # Validate configuration
    try:
        validate_config()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")

    try:
        window = resolve_window(year, REPORT_TZ)
    except (ValueError, InvalidTimeZoneError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        client = GitHubClient(GH_STATS_TOKEN)
        report = build_report(client, GH_USERNAME, window, REPORT_TZ, ai_enabled=ai)
    except GitHubClientError as e:
        raise HTTPException(status_code=502, detail=str(e))

    data = report.snapshot()
    if include_heatmap:
        data["stats"] = report.stats.to_dict(include_heatmap=True)
    return data


@app.get("/api/report")
def get_report(
    year: int | None = Query(None, description="Calendar year; omit for the last 365 days"),
    ai: bool = Query(False, description="Ask Claude for the written summary"),
):
    """
    Get the annual report snapshot.

    Returns:
        JSON with statistics, top repositories, top languages and summary
    """
    return _build_report_data(year, ai, include_heatmap=False)


@app.get("/api/heatmap")
def get_heatmap(
    year: int | None = Query(None, description="Calendar year; omit for the last 365 days"),
):
    """
    Get the report statistics including the heatmap matrix.

    Returns:
        JSON with the stats record and its heatmapWeeks
    """
    data = _build_report_data(year, ai=False, include_heatmap=True)
    return {
        "year": data["year"],
        "isRolling": data["isRolling"],
        "dateRange": data["dateRange"],
        "stats": data["stats"],
    }
