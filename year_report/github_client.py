"""
GitHub GraphQL client for fetching yearly contribution data.
"""

import requests


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    pass


YEARLY_PROFILE_QUERY = """
query YearlyProfileData($username: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $username) {
    name
    login
    avatarUrl
    bio
    followers {
      totalCount
    }
    following {
      totalCount
    }
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            contributionCount
            contributionLevel
            date
            weekday
          }
        }
      }
      commitContributionsByRepository(maxRepositories: 100) {
        contributions {
          totalCount
        }
        repository {
          nameWithOwner
          url
          description
          stargazerCount
          forkCount
          languages(first: 20, orderBy: { field: SIZE, direction: DESC }) {
            edges {
              size
              node {
                name
              }
            }
          }
        }
      }
    }
  }
  rateLimit {
    remaining
    resetAt
  }
}
"""

SEARCH_COUNT_QUERY = """
query SearchCount($queryString: String!) {
  search(type: ISSUE, query: $queryString, first: 1) {
    issueCount
  }
}
"""


class GitHubClient:
    """Client for the GitHub GraphQL API."""

    GRAPHQL_URL = "https://api.github.com/graphql"
    TIMEOUT = 30

    def __init__(self, token: str):
        """
        Initialize the GitHub client.

        Args:
            token: GitHub personal access token

        Raises:
            GitHubClientError: If no token is given
        """
        if not token:
            raise GitHubClientError("GH_STATS_TOKEN is required")

        self.token = token
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            }
        )

    def graphql(self, query: str, variables: dict | None = None) -> dict:
        """
        Run a GraphQL query.

        Args:
            query: GraphQL query text
            variables: Query variables

        Returns:
            The "data" object of the response

        Raises:
            GitHubClientError: On HTTP failures or GraphQL errors
        """
        try:
            response = self.session.post(
                self.GRAPHQL_URL,
                json={"query": query, "variables": variables or {}},
                timeout=self.TIMEOUT,
            )
        except requests.RequestException as e:
            raise GitHubClientError(f"GitHub GraphQL request failed: {e}") from e

        if response.status_code == 401:
            raise GitHubClientError(
                "Authentication failed. Check your GH_STATS_TOKEN is valid."
            )
        elif response.status_code == 403:
            remaining = response.headers.get("X-RateLimit-Remaining", "unknown")
            raise GitHubClientError(
                f"API rate limit exceeded or access forbidden. "
                f"Remaining requests: {remaining}"
            )
        elif not response.ok:
            raise GitHubClientError(
                f"GitHub GraphQL request failed ({response.status_code}): {response.text}"
            )

        payload = response.json()

        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            message = (errors[0] or {}).get("message") or "Unknown error"
            raise GitHubClientError(f"GitHub GraphQL error: {message}")

        return payload.get("data") or {}

    def fetch_yearly_profile_data(
        self,
        username: str,
        year: int,
        from_date: str | None = None,
        to_date: str | None = None,
    ) -> dict:
        """
        Fetch the profile, contribution calendar and per-repository commits.

        Args:
            username: GitHub login
            year: Calendar year used when from_date/to_date are not given
            from_date: ISO timestamp for the start of the window
            to_date: ISO timestamp for the end of the window

        Returns:
            GraphQL data with "user" and "rateLimit" keys

        Raises:
            GitHubClientError: If the request fails or the user does not exist
        """
        variables = {
            "username": username,
            "from": from_date or f"{year}-01-01T00:00:00Z",
            "to": to_date or f"{year}-12-31T23:59:59Z",
        }

        data = self.graphql(YEARLY_PROFILE_QUERY, variables)

        if not data.get("user"):
            raise GitHubClientError(f"GitHub user not found: {username}")

        return data

    def fetch_issue_count(
        self, username: str, year: int, created_range: str | None = None
    ) -> int:
        """Count issues involving the user created in the window."""
        created = created_range or f"{year}-01-01..{year}-12-31"
        return self._search_count(f"involves:{username} is:issue created:{created}")

    def fetch_pr_count(
        self, username: str, year: int, created_range: str | None = None
    ) -> int:
        """Count pull requests authored by the user created in the window."""
        created = created_range or f"{year}-01-01..{year}-12-31"
        return self._search_count(f"author:{username} is:pr created:{created}")

    def _search_count(self, query_string: str) -> int:
        data = self.graphql(SEARCH_COUNT_QUERY, {"queryString": query_string})
        return (data.get("search") or {}).get("issueCount") or 0
