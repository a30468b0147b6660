"""Search, filter and sort over a user's repositories."""

import logging
from collections.abc import Callable, Collection
from typing import Any

from github_showcase.models.project import (
    ALL_LANGUAGES,
    Category,
    ProjectFilterState,
    ProjectQueryResult,
    SortDirection,
    SortKey,
)
from github_showcase.models.repository import Repository

logger = logging.getLogger(__name__)


def _updated_key(repo: Repository) -> float:
    # Repositories without a timestamp sort as the oldest
    return repo.updated_at.timestamp() if repo.updated_at else float("-inf")


def _stars_key(repo: Repository) -> int:
    return repo.stargazers_count


def _name_key(repo: Repository) -> str:
    return repo.name.casefold()


SORT_KEYS: dict[SortKey, Callable[[Repository], Any]] = {
    SortKey.UPDATED: _updated_key,
    SortKey.STARS: _stars_key,
    SortKey.NAME: _name_key,
}


def matches_search(repo: Repository, query: str) -> bool:
    """Case-insensitive substring match on name or description."""
    if not query:
        return True
    query = query.casefold()
    return query in repo.name.casefold() or query in (repo.description or "").casefold()


def matches_category(
    repo: Repository,
    category: Category,
    bookmarks: Collection[int],
) -> bool:
    """Check a repository against a project tab."""
    if category == Category.BOOKMARKED:
        return repo.id in bookmarks
    if category == Category.FORKED:
        return repo.is_fork
    if category == Category.SOURCE:
        return not repo.is_fork
    return True


def matches_language(repo: Repository, language: str) -> bool:
    """Exact match on the primary language. Repos without one never match a specific language."""
    return language == ALL_LANGUAGES or repo.language == language


def sort_projects(
    repos: list[Repository],
    sort_key: SortKey,
    direction: SortDirection,
) -> list[Repository]:
    """Stable sort; equal keys keep their relative order in both directions."""
    return sorted(
        repos,
        key=SORT_KEYS[sort_key],
        reverse=direction == SortDirection.DESC,
    )


def query_projects(
    repos: list[Repository],
    state: ProjectFilterState,
    bookmarks: Collection[int] = (),
) -> ProjectQueryResult:
    """Apply search, category, language and sort, in that order.

    Args:
        repos: Unfiltered repository collection
        state: Current filter and sort selection
        bookmarks: Bookmarked repository ids

    Returns:
        ProjectQueryResult with the ordered projects and the unfiltered total
    """
    result = [r for r in repos if matches_search(r, state.search)]
    result = [r for r in result if matches_category(r, state.category, bookmarks)]
    result = [r for r in result if matches_language(r, state.language)]
    result = sort_projects(result, state.sort_key, state.direction)

    logger.debug(
        "Project query %s matched %d of %d repositories",
        state.model_dump(mode="json"),
        len(result),
        len(repos),
    )

    return ProjectQueryResult(projects=result, total=len(repos))


def available_languages(repos: list[Repository]) -> list[str]:
    """Language filter options: "all" followed by each distinct primary language."""
    languages = dict.fromkeys(r.language for r in repos if r.language)
    return [ALL_LANGUAGES, *languages]
