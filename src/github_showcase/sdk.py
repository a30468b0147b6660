"""GitHub Showcase SDK - High-level API behind the dashboard views."""

import asyncio
import logging
from dataclasses import replace
from typing import Any

import httpx

from github_showcase.config import Config, get_config
from github_showcase.exceptions import IdentityNotSetError, ShowcaseError
from github_showcase.models.activity import ActivitySeries, GitHubEvent
from github_showcase.models.project import ProjectFilterState, ProjectQueryResult
from github_showcase.models.repository import Repository, StatsSummary
from github_showcase.models.user import UserProfile
from github_showcase.models.views import ProfileView, ProjectsView
from github_showcase.services.activity_collector import ActivityCollector
from github_showcase.services.github_rest_client import GitHubRestClient
from github_showcase.services.profile_collector import ProfileCollector
from github_showcase.services.project_query import available_languages, query_projects
from github_showcase.services.repo_collector import RepoCollector
from github_showcase.session import ViewSession, ViewStatus
from github_showcase.storage.bookmarks import BookmarkSet
from github_showcase.storage.store import (
    JsonFileStore,
    KeyValueStore,
    clear_identity,
    load_identity,
    save_identity,
)
from github_showcase.utils.rate_limiter import RateLimiter, get_rate_limiter

logger = logging.getLogger(__name__)


class GitHubShowcase:
    """High-level SDK for the portfolio dashboard.

    Owns the REST client, the persisted store and the three view sessions
    (profile, projects, activity). The remembered identity and bookmarks
    are read from the store when the object is created.

    Example usage:
        ```python
        from github_showcase import GitHubShowcase

        async with GitHubShowcase() as showcase:
            await showcase.select("octocat")

            stats = showcase.profile_view.data.stats
            series = showcase.activity_view.data

            showcase.update_filters(category="source", sort_key="stars")
            result = showcase.query_projects()
        ```

    Args:
        config: Configuration (defaults to the global config)
        store: Persisted key-value store (defaults to a JSON file at config.state_path)
        api_url: Override for the GitHub API base URL
        transport: Optional httpx transport, mainly for tests
    """

    def __init__(
        self,
        config: Config | None = None,
        store: KeyValueStore | None = None,
        api_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        config = config or get_config()
        if api_url:
            config = replace(config, github_api_url=api_url)
        self._config = config
        self._store = store if store is not None else JsonFileStore(config.state_path)
        self._transport = transport
        self._rate_limiter: RateLimiter | None = None
        self._rest_client: GitHubRestClient | None = None
        self._initialized = False

        self._identity = load_identity(self._store)
        self.bookmarks = BookmarkSet.load(self._store)
        self.filters = ProjectFilterState()

        self.profile_view: ViewSession[ProfileView] = ViewSession("profile", self._load_profile)
        self.projects_view: ViewSession[ProjectsView] = ViewSession("projects", self._load_projects)
        self.activity_view: ViewSession[ActivitySeries] = ViewSession("activity", self._load_activity)

    async def __aenter__(self) -> "GitHubShowcase":
        """Async context manager entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Initialize clients."""
        if self._initialized:
            return

        self._rate_limiter = get_rate_limiter()
        self._rest_client = GitHubRestClient(
            config=self._config,
            rate_limiter=self._rate_limiter,
            transport=self._transport,
        )

        self._initialized = True
        logger.debug("GitHubShowcase initialized (identity=%s)", self._identity)

    async def close(self) -> None:
        """Close all HTTP connections."""
        if self._rest_client:
            await self._rest_client.close()
        self._initialized = False
        logger.debug("GitHubShowcase closed")

    def _ensure_initialized(self) -> None:
        """Ensure the client is initialized."""
        if not self._initialized:
            raise ShowcaseError(
                "Client not initialized. Use 'async with GitHubShowcase(...) as showcase:'"
            )

    # Identity

    @property
    def identity(self) -> str | None:
        """The remembered account identifier, if any."""
        return self._identity

    def _resolve_identity(self, identity: str | None) -> str:
        identity = identity or self._identity
        if not identity:
            raise IdentityNotSetError(
                "No GitHub account selected. Pass a username or run 'showcase use <username>'."
            )
        return identity

    async def select(self, identity: str) -> dict[str, ViewStatus]:
        """Remember a new account and reload every view for it.

        Results still in flight for the previous account are discarded
        when they arrive.
        """
        self._ensure_initialized()
        self._identity = save_identity(self._store, identity)
        logger.info("Selected account %s", self._identity)
        return await self.refresh()

    def reset(self) -> None:
        """Forget the remembered account and return every view to Idle."""
        clear_identity(self._store)
        self._identity = None
        self.filters = ProjectFilterState()
        for session in self.sessions:
            session.reset()
        logger.info("Account selection cleared")

    @property
    def sessions(self) -> tuple[ViewSession, ...]:
        return (self.profile_view, self.projects_view, self.activity_view)

    async def refresh(self, identity: str | None = None) -> dict[str, ViewStatus]:
        """Load all three views concurrently."""
        self._ensure_initialized()
        identity = self._resolve_identity(identity)

        statuses = await asyncio.gather(*(session.enter(identity) for session in self.sessions))
        return {session.name: status for session, status in zip(self.sessions, statuses)}

    # View loading

    async def load_profile(self, identity: str | None = None) -> ViewStatus:
        """Enter the profile view (profile + repository statistics)."""
        self._ensure_initialized()
        return await self.profile_view.enter(self._resolve_identity(identity))

    async def load_projects(self, identity: str | None = None) -> ViewStatus:
        """Enter the project browser."""
        self._ensure_initialized()
        return await self.projects_view.enter(self._resolve_identity(identity))

    async def load_activity(self, identity: str | None = None) -> ViewStatus:
        """Enter the activity view."""
        self._ensure_initialized()
        return await self.activity_view.enter(self._resolve_identity(identity))

    async def _load_profile(self, identity: str) -> ProfileView:
        # Both requests must succeed; a half-loaded view is never aggregated
        profile, repos = await asyncio.gather(
            self.get_profile(identity),
            self.get_repos(identity),
        )
        return ProfileView(profile=profile, stats=StatsSummary.from_repos(repos))

    async def _load_projects(self, identity: str) -> ProjectsView:
        return ProjectsView(repositories=await self.get_repos(identity))

    async def _load_activity(self, identity: str) -> ActivitySeries:
        events = await self.get_events(identity)
        collector = ActivityCollector(self._rest_client)
        return collector.summarize_activity(events, days=self._config.activity_days)

    # Raw fetches

    async def get_profile(self, username: str) -> UserProfile:
        """Get a user's profile.

        Raises:
            GitHubNotFoundError: If the user doesn't exist
        """
        self._ensure_initialized()
        logger.info("Fetching profile for %s", username)
        return await ProfileCollector(self._rest_client).collect_profile(username)

    async def get_repos(self, username: str) -> list[Repository]:
        """Get a user's public repositories, most recently updated first."""
        self._ensure_initialized()
        logger.info("Fetching repositories for %s", username)
        return await RepoCollector(self._rest_client).collect_repos(username)

    async def get_events(self, username: str) -> list[GitHubEvent]:
        """Get a user's recent public events."""
        self._ensure_initialized()
        logger.info("Fetching events for %s", username)
        return await ActivityCollector(self._rest_client).collect_events(username)

    # Project browser

    def update_filters(self, **changes: Any) -> ProjectFilterState:
        """Change part of the filter state. Never triggers a fetch."""
        self.filters = ProjectFilterState.model_validate({**self.filters.model_dump(), **changes})
        return self.filters

    def clear_filters(self) -> ProjectFilterState:
        """Reset search, tab and language. The sort order is kept."""
        self.filters = ProjectFilterState(sort_key=self.filters.sort_key, direction=self.filters.direction)
        return self.filters

    def query_projects(self, state: ProjectFilterState | None = None) -> ProjectQueryResult:
        """Filter and sort the loaded repositories.

        Raises:
            ViewNotReadyError: If the project view is not Ready
        """
        repos = self.projects_view.data.repositories
        return query_projects(repos, state or self.filters, self.bookmarks)

    def languages(self) -> list[str]:
        """Language filter options for the loaded repositories."""
        return available_languages(self.projects_view.data.repositories)

    def toggle_bookmark(self, repo_id: int) -> bool:
        """Toggle and persist a bookmark. Call query_projects() again to see the effect."""
        bookmarked = self.bookmarks.toggle(repo_id)
        logger.debug("Repository %d %s", repo_id, "bookmarked" if bookmarked else "unbookmarked")
        return bookmarked
