"""Tests for the GitHubShowcase SDK."""

from datetime import datetime, time, timedelta, timezone

import httpx
import pytest
from factories import PROFILE_PAYLOAD, event_payload, repo_payload

from github_showcase import GitHubShowcase
from github_showcase.config import Config
from github_showcase.exceptions import IdentityNotSetError, ShowcaseError, ViewNotReadyError
from github_showcase.models.project import Category, SortDirection, SortKey
from github_showcase.session import ViewStatus
from github_showcase.storage.store import BOOKMARKS_KEY, IDENTITY_KEY, MemoryStore
from github_showcase.utils.dates import utc_today


def iso_days_ago(days: int) -> str:
    day = utc_today() - timedelta(days=days)
    return datetime.combine(day, time(12), tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")


REPOS = [
    repo_payload(1, "alpha", language="Go", stargazers_count=5, forks_count=1, updated_at="2024-03-01T00:00:00Z"),
    repo_payload(2, "beta", language="Go", stargazers_count=9, fork=True, updated_at="2024-05-01T00:00:00Z"),
    repo_payload(3, "gamma", language="Rust", stargazers_count=2, updated_at="2024-04-01T00:00:00Z"),
]


@pytest.fixture
def octocat_routes():
    return {
        "/users/octocat": PROFILE_PAYLOAD,
        "/users/octocat/repos": REPOS,
        "/users/octocat/events": [
            event_payload("1", "PushEvent", iso_days_ago(0)),
            event_payload("2", "PushEvent", iso_days_ago(0)),
            event_payload("3", "WatchEvent", iso_days_ago(3)),
            event_payload("4", "ForkEvent", iso_days_ago(45)),
        ],
    }


def make_showcase(transport, store=None) -> GitHubShowcase:
    return GitHubShowcase(config=Config(), store=store if store is not None else MemoryStore(), transport=transport)


class TestLifecycle:
    """Tests for initialization and identity handling."""

    @pytest.mark.asyncio
    async def test_requires_context_manager(self, mock_github):
        showcase = make_showcase(mock_github({}))

        with pytest.raises(ShowcaseError, match="not initialized"):
            await showcase.select("octocat")

    def test_loads_persisted_state(self, mock_github):
        store = MemoryStore({IDENTITY_KEY: "octocat", BOOKMARKS_KEY: "[3]"})

        showcase = make_showcase(mock_github({}), store)

        assert showcase.identity == "octocat"
        assert showcase.bookmarks.ids == [3]
        assert all(s.status == ViewStatus.IDLE for s in showcase.sessions)

    @pytest.mark.asyncio
    async def test_refresh_without_identity(self, mock_github):
        async with make_showcase(mock_github({})) as showcase:
            with pytest.raises(IdentityNotSetError):
                await showcase.refresh()

    @pytest.mark.asyncio
    async def test_select_persists_and_loads(self, mock_github, octocat_routes):
        store = MemoryStore()

        async with make_showcase(mock_github(octocat_routes), store) as showcase:
            statuses = await showcase.select(" octocat ")

        assert statuses == {
            "profile": ViewStatus.READY,
            "projects": ViewStatus.READY,
            "activity": ViewStatus.READY,
        }
        assert store.get(IDENTITY_KEY) == "octocat"

    @pytest.mark.asyncio
    async def test_reset(self, mock_github, octocat_routes):
        store = MemoryStore()

        async with make_showcase(mock_github(octocat_routes), store) as showcase:
            await showcase.select("octocat")
            showcase.update_filters(search="a")
            showcase.reset()

        assert showcase.identity is None
        assert store.get(IDENTITY_KEY) is None
        assert showcase.filters.search == ""
        assert all(s.status == ViewStatus.IDLE for s in showcase.sessions)


class TestViews:
    """Tests for the three dashboard views."""

    @pytest.mark.asyncio
    async def test_profile_view(self, mock_github, octocat_routes):
        async with make_showcase(mock_github(octocat_routes)) as showcase:
            assert await showcase.load_profile("octocat") == ViewStatus.READY
            view = showcase.profile_view.data

        assert view.profile.username == "octocat"
        assert view.stats.total_stars == 16
        assert view.stats.total_forks == 1
        assert view.stats.languages == {"Go": 2, "Rust": 1}
        assert [r.name for r in view.stats.stars_per_repo] == ["beta", "alpha", "gamma"]

    @pytest.mark.asyncio
    async def test_profile_view_fails_when_repos_fail(self, mock_github, octocat_routes):
        routes = {**octocat_routes, "/users/octocat/repos": httpx.Response(500)}

        async with make_showcase(mock_github(routes)) as showcase:
            assert await showcase.load_profile("octocat") == ViewStatus.FAILED

        assert showcase.profile_view.error.view == "profile"
        with pytest.raises(ViewNotReadyError):
            showcase.profile_view.data

    @pytest.mark.asyncio
    async def test_unknown_user(self, mock_github):
        async with make_showcase(mock_github({})) as showcase:
            statuses = await showcase.refresh("ghost")

        assert set(statuses.values()) == {ViewStatus.FAILED}
        assert all(s.error.not_found for s in showcase.sessions)

    @pytest.mark.asyncio
    async def test_activity_view(self, mock_github, octocat_routes):
        async with make_showcase(mock_github(octocat_routes)) as showcase:
            await showcase.load_activity("octocat")
            series = showcase.activity_view.data

        assert len(series.days) == 30
        assert series.days[-1].date == utc_today()
        assert series.counts[-1] == 2
        assert series.counts[-4] == 1
        assert series.window_total == 3
        assert series.event_types == {"PushEvent": 2, "WatchEvent": 1, "ForkEvent": 1}

    @pytest.mark.asyncio
    async def test_non_json_body_fails_view(self, mock_github, octocat_routes):
        routes = {**octocat_routes, "/users/octocat/repos": httpx.Response(200, text="<html>proxy error</html>")}

        async with make_showcase(mock_github(routes)) as showcase:
            assert await showcase.load_projects("octocat") == ViewStatus.FAILED

        assert "Invalid JSON" in str(showcase.projects_view.error)

    @pytest.mark.asyncio
    async def test_null_error_message_fails_view(self, mock_github, octocat_routes):
        routes = {**octocat_routes, "/users/octocat": httpx.Response(403, json={"message": None})}

        async with make_showcase(mock_github(routes)) as showcase:
            statuses = await showcase.refresh("octocat")

        assert statuses["profile"] == ViewStatus.FAILED
        assert statuses["projects"] == ViewStatus.READY

    @pytest.mark.asyncio
    async def test_views_fail_independently(self, mock_github, octocat_routes):
        routes = {**octocat_routes, "/users/octocat/events": httpx.Response(503)}

        async with make_showcase(mock_github(routes)) as showcase:
            statuses = await showcase.refresh("octocat")

        assert statuses["activity"] == ViewStatus.FAILED
        assert statuses["profile"] == ViewStatus.READY
        assert statuses["projects"] == ViewStatus.READY


class TestProjectBrowser:
    """Tests for querying the loaded repositories."""

    @pytest.mark.asyncio
    async def test_query_requires_ready_view(self, mock_github):
        async with make_showcase(mock_github({})) as showcase:
            with pytest.raises(ViewNotReadyError):
                showcase.query_projects()

    @pytest.mark.asyncio
    async def test_default_order_is_recently_updated(self, mock_github, octocat_routes):
        async with make_showcase(mock_github(octocat_routes)) as showcase:
            await showcase.load_projects("octocat")
            result = showcase.query_projects()

        assert [r.name for r in result.projects] == ["beta", "gamma", "alpha"]
        assert result.total == 3

    @pytest.mark.asyncio
    async def test_update_filters_without_refetch(self, mock_github, octocat_routes):
        transport = mock_github(octocat_routes)

        async with make_showcase(transport) as showcase:
            await showcase.load_projects("octocat")
            requests_before = len(transport.requests)

            state = showcase.update_filters(search="a", category="source", sort_key="stars")
            result = showcase.query_projects()

        assert state.category == Category.SOURCE
        assert state.sort_key == SortKey.STARS
        assert state.direction == SortDirection.DESC
        assert [r.name for r in result.projects] == ["alpha", "gamma"]
        assert len(transport.requests) == requests_before

    @pytest.mark.asyncio
    async def test_clear_filters_keeps_sort(self, mock_github, octocat_routes):
        async with make_showcase(mock_github(octocat_routes)) as showcase:
            await showcase.load_projects("octocat")
            showcase.update_filters(search="zzz", category="forked", language="Rust", sort_key="stars", direction="asc")
            assert showcase.query_projects().is_empty

            state = showcase.clear_filters()
            result = showcase.query_projects()

        assert state.search == ""
        assert state.category == Category.ALL
        assert state.language == "all"
        assert state.sort_key == SortKey.STARS
        assert state.direction == SortDirection.ASC
        assert [r.name for r in result.projects] == ["gamma", "alpha", "beta"]

    @pytest.mark.asyncio
    async def test_invalid_filter_rejected(self, mock_github):
        showcase = make_showcase(mock_github({}))

        with pytest.raises(ValueError):
            showcase.update_filters(sort_key="popularity")

        assert showcase.filters.sort_key == SortKey.UPDATED

    @pytest.mark.asyncio
    async def test_bookmarks(self, mock_github, octocat_routes):
        store = MemoryStore()

        async with make_showcase(mock_github(octocat_routes), store) as showcase:
            await showcase.load_projects("octocat")
            showcase.update_filters(category="bookmarked")
            assert showcase.query_projects().is_empty

            assert showcase.toggle_bookmark(3) is True
            assert [r.id for r in showcase.query_projects().projects] == [3]

        assert store.get(BOOKMARKS_KEY) == "[3]"
        assert make_showcase(mock_github({}), store).bookmarks.ids == [3]

    @pytest.mark.asyncio
    async def test_languages(self, mock_github, octocat_routes):
        async with make_showcase(mock_github(octocat_routes)) as showcase:
            await showcase.load_projects("octocat")

            assert showcase.languages() == ["all", "Go", "Rust"]
