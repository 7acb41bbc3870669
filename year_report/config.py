"""
Configuration management for year-report.

Loads GitHub and Anthropic credentials from environment variables.
"""

import os
from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

GH_USERNAME = os.getenv("GH_USERNAME")
GH_STATS_TOKEN = os.getenv("GH_STATS_TOKEN")
REPORT_TZ = os.getenv("REPORT_TZ") or "Asia/Shanghai"
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL") or "claude-sonnet-4-20250514"


def validate_config():
    """Validate that required configuration is present."""
    missing = []

    if not GH_STATS_TOKEN or GH_STATS_TOKEN == "your_token_here":
        missing.append("GH_STATS_TOKEN")

    if not GH_USERNAME or GH_USERNAME == "your_username_here":
        missing.append("GH_USERNAME")

    if missing:
        raise ValueError(
            f"Missing required configuration: {', '.join(missing)}\n"
            "Please copy .env.example to .env and fill in your values.\n"
            "Get a GitHub token at: https://github.com/settings/tokens"
        )
