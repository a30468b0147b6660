"""Repository data models and star/language statistics."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from github_showcase.utils.dates import parse_datetime


class Repository(BaseModel):
    """GitHub repository data, normalized from the REST API."""

    id: int
    name: str
    full_name: str = ""
    description: str | None = None
    html_url: str = ""
    homepage: str | None = None
    language: str | None = None
    stargazers_count: int = Field(default=0, ge=0)
    forks_count: int = Field(default=0, ge=0)
    watchers_count: int = Field(default=0, ge=0)
    topics: list[str] = Field(default_factory=list)
    is_fork: bool = False
    is_archived: bool = False
    visibility: str = "public"
    updated_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Repository":
        """Create from GitHub REST API response.

        The API sends explicit nulls for several fields, so `or` is used
        instead of `.get()` defaults to fold both null and missing into
        the neutral value.
        """
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            full_name=data.get("full_name") or "",
            description=data.get("description") or None,
            html_url=data.get("html_url") or "",
            homepage=data.get("homepage") or None,
            language=data.get("language") or None,
            stargazers_count=data.get("stargazers_count") or 0,
            forks_count=data.get("forks_count") or 0,
            watchers_count=data.get("watchers_count") or 0,
            topics=data.get("topics") or [],
            is_fork=bool(data.get("fork")),
            is_archived=bool(data.get("archived")),
            visibility=data.get("visibility") or "public",
            updated_at=parse_datetime(data.get("updated_at")),
        )


class RepoStars(BaseModel):
    """One entry of the per-repository star ranking."""

    name: str
    stars: int


class StatsSummary(BaseModel):
    """Summary metrics over a user's repositories."""

    total_stars: int = 0
    total_forks: int = 0
    total_watchers: int = 0
    languages: dict[str, int] = Field(default_factory=dict)  # language -> repo count
    stars_per_repo: list[RepoStars] = Field(default_factory=list)

    @classmethod
    def from_repos(cls, repos: list[Repository]) -> "StatsSummary":
        """Create summary from list of repositories.

        Every repository is ranked, including those with zero stars. Each
        repository casts one vote for its primary language regardless of
        its star count.
        """
        summary = cls()

        for repo in repos:
            summary.total_stars += repo.stargazers_count
            summary.total_forks += repo.forks_count
            summary.total_watchers += repo.watchers_count

            if repo.language:
                summary.languages[repo.language] = summary.languages.get(repo.language, 0) + 1

            summary.stars_per_repo.append(RepoStars(name=repo.name, stars=repo.stargazers_count))

        # sorted() is stable, so ties keep input order
        summary.stars_per_repo = sorted(
            summary.stars_per_repo, key=lambda r: r.stars, reverse=True
        )

        return summary

    @property
    def repo_count(self) -> int:
        return len(self.stars_per_repo)

    def top_languages(self, limit: int | None = 5) -> list[tuple[str, int]]:
        """Languages by repository count, highest first."""
        ranked = sorted(self.languages.items(), key=lambda x: x[1], reverse=True)
        return ranked if limit is None else ranked[:limit]

    def top_starred(self, limit: int = 3) -> list[RepoStars]:
        """Most starred repositories."""
        return self.stars_per_repo[:limit]
