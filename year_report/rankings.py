"""
Rank repositories by commits and languages by code size.

Both functions take the commitContributionsByRepository rows returned by the
GitHub GraphQL API.
"""

from dataclasses import asdict, dataclass

REPO_PLACEHOLDER_NAME = "No repository data"
REPO_PLACEHOLDER_DESCRIPTION = "No repositories with commits in this period."
LANGUAGE_PLACEHOLDER_NAME = "N/A"


@dataclass(frozen=True)
class RepositoryAggregate:
    """A repository with its commit contributions in the report window."""

    name_with_owner: str
    url: str
    description: str
    stars: int
    forks: int
    commits: int

    def to_dict(self) -> dict:
        return {
            "nameWithOwner": self.name_with_owner,
            "url": self.url,
            "description": self.description,
            "stars": self.stars,
            "forks": self.forks,
            "commits": self.commits,
        }


@dataclass(frozen=True)
class LanguageAggregate:
    """A language's share of code across the contributed repositories."""

    language: str
    bytes: int
    ratio: float

    def to_dict(self) -> dict:
        return asdict(self)


def derive_top_repositories(rows: list[dict] | None, limit: int = 3) -> list[RepositoryAggregate]:
    """
    Get the repositories with the most commits.

    Ties are broken by more stars, then by name (ascending).

    Args:
        rows: commitContributionsByRepository rows
        limit: Maximum number of repositories to return

    Returns:
        Sorted list of RepositoryAggregate
    """
    if not isinstance(rows, list):
        rows = []

    repos = []
    for row in rows:
        repo = row.get("repository")
        if not repo:
            continue

        repos.append(
            RepositoryAggregate(
                name_with_owner=repo.get("nameWithOwner") or "",
                url=repo.get("url") or "",
                description=repo.get("description") or "",
                stars=repo.get("stargazerCount") or 0,
                forks=repo.get("forkCount") or 0,
                commits=(row.get("contributions") or {}).get("totalCount") or 0,
            )
        )

    repos.sort(key=lambda r: (-r.commits, -r.stars, r.name_with_owner))
    return repos[:limit]


def derive_top_languages(rows: list[dict] | None, limit: int = 5) -> list[LanguageAggregate]:
    """
    Get the languages with the most bytes across all contributed repositories.

    Bytes are summed per language over every repository. Ties are broken by
    language name (ascending).

    Args:
        rows: commitContributionsByRepository rows
        limit: Maximum number of languages to return

    Returns:
        Sorted list of LanguageAggregate, ratio relative to all languages
    """
    if not isinstance(rows, list):
        rows = []

    language_bytes: dict[str, int] = {}
    total_bytes = 0

    for row in rows:
        languages = (row.get("repository") or {}).get("languages") or {}
        edges = languages.get("edges")
        if not isinstance(edges, list):
            continue

        for edge in edges:
            if not edge:
                continue
            language = (edge.get("node") or {}).get("name")
            size = edge.get("size") or 0

            if not language or size <= 0:
                continue

            language_bytes[language] = language_bytes.get(language, 0) + size
            total_bytes += size

    items = [
        LanguageAggregate(
            language=language,
            bytes=size,
            ratio=size / total_bytes if total_bytes > 0 else 0,
        )
        for language, size in language_bytes.items()
    ]

    items.sort(key=lambda item: (-item.bytes, item.language))
    return items[:limit]


def pad_repositories(repos: list[RepositoryAggregate], size: int = 3) -> list[RepositoryAggregate]:
    """Trim or pad the repository list with placeholders to exactly `size` slots."""
    result = list(repos[:size])
    while len(result) < size:
        result.append(
            RepositoryAggregate(
                name_with_owner=REPO_PLACEHOLDER_NAME,
                url="",
                description=REPO_PLACEHOLDER_DESCRIPTION,
                stars=0,
                forks=0,
                commits=0,
            )
        )
    return result


def pad_languages(languages: list[LanguageAggregate], size: int = 5) -> list[LanguageAggregate]:
    """Trim or pad the language list with placeholders to exactly `size` slots."""
    result = list(languages[:size])
    while len(result) < size:
        result.append(LanguageAggregate(language=LANGUAGE_PLACEHOLDER_NAME, bytes=0, ratio=0))
    return result
