"""GitHub Showcase - A visitor-facing dashboard of a GitHub account.

Pulls a user's public profile, repositories and events and derives:
- Repository statistics (stars, forks, watchers, language histogram, star ranking)
- A 30-day activity series and event type breakdown
- A searchable, filterable, sortable project list with persisted bookmarks

Example usage:
    ```python
    from github_showcase import GitHubShowcase

    async with GitHubShowcase() as showcase:
        await showcase.select("torvalds")
        print(f"Total stars: {showcase.profile_view.data.stats.total_stars}")
    ```
"""

from github_showcase._version import version as __version__
from github_showcase.config import Config
from github_showcase.exceptions import (
    FetchFailure,
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    IdentityNotSetError,
    RateLimitExceededError,
    ShowcaseError,
    ViewNotReadyError,
)
from github_showcase.models import (
    ActivitySeries,
    Category,
    DailyActivity,
    GitHubEvent,
    ProfileView,
    ProjectFilterState,
    ProjectQueryResult,
    ProjectsView,
    Repository,
    RepoStars,
    SortDirection,
    SortKey,
    StatsSummary,
    UserProfile,
)
from github_showcase.sdk import GitHubShowcase
from github_showcase.session import ViewSession, ViewStatus
from github_showcase.storage import BookmarkSet, JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "__version__",
    # Main SDK class
    "GitHubShowcase",
    # Configuration
    "Config",
    # Exceptions
    "ShowcaseError",
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubNotFoundError",
    "RateLimitExceededError",
    "FetchFailure",
    "ViewNotReadyError",
    "IdentityNotSetError",
    # View sessions
    "ViewSession",
    "ViewStatus",
    # Persisted state
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "BookmarkSet",
    # Models
    "UserProfile",
    "Repository",
    "RepoStars",
    "StatsSummary",
    "GitHubEvent",
    "DailyActivity",
    "ActivitySeries",
    "Category",
    "SortKey",
    "SortDirection",
    "ProjectFilterState",
    "ProjectQueryResult",
    "ProfileView",
    "ProjectsView",
]
