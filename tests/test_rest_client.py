"""Tests for the GitHub REST client."""

import time

import httpx
import pytest
from factories import repo_payload

from github_showcase.config import Config
from github_showcase.exceptions import (
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    RateLimitExceededError,
)
from github_showcase.services.github_rest_client import GitHubRestClient
from github_showcase.utils.rate_limiter import RateLimiter


def make_client(transport, **config_overrides) -> GitHubRestClient:
    return GitHubRestClient(
        config=Config(**config_overrides),
        rate_limiter=RateLimiter(),
        transport=transport,
    )


class TestRequests:
    """Tests for request construction."""

    @pytest.mark.asyncio
    async def test_repos_query_parameters(self, mock_github):
        transport = mock_github({"/users/octocat/repos": [repo_payload(1, "a")]})

        async with make_client(transport) as client:
            repos = await client.get_user_repos("octocat")

        assert len(repos) == 1
        params = transport.requests[0].url.params
        assert params["per_page"] == "100"
        assert params["sort"] == "updated"
        assert params["direction"] == "desc"

    @pytest.mark.asyncio
    async def test_events_endpoint(self, mock_github):
        transport = mock_github({"/users/octocat/events": []})

        async with make_client(transport) as client:
            events = await client.get_user_events("octocat")

        assert events == []
        assert transport.requests[0].url.params["per_page"] == "100"

    @pytest.mark.asyncio
    async def test_headers(self, mock_github):
        transport = mock_github({"/users/octocat": {"login": "octocat"}})

        async with make_client(transport) as client:
            await client.get_user("octocat")

        headers = transport.requests[0].headers
        assert headers["Accept"] == "application/vnd.github+json"
        assert headers["User-Agent"].startswith("github-showcase/")
        assert "Authorization" not in headers


class TestPagination:
    """Tests for Link header pagination."""

    @staticmethod
    def paged_handler(pages: int):
        def handler(request: httpx.Request) -> httpx.Response:
            page = int(request.url.params.get("page", "1"))
            headers = {}
            if page < pages:
                headers["Link"] = (
                    f'<https://api.github.com/users/octocat/repos?per_page=100&page={page + 1}>; rel="next"'
                )
            return httpx.Response(200, json=[repo_payload(page, f"r{page}")], headers=headers)

        return handler

    @pytest.mark.asyncio
    async def test_single_page_by_default(self, mock_github):
        transport = mock_github({"/users/octocat/repos": self.paged_handler(3)})

        async with make_client(transport) as client:
            repos = await client.get_user_repos("octocat")

        assert [r["id"] for r in repos] == [1]
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_follows_next_links(self, mock_github):
        transport = mock_github({"/users/octocat/repos": self.paged_handler(3)})

        async with make_client(transport, max_pages=0) as client:
            repos = await client.get_user_repos("octocat")

        assert [r["id"] for r in repos] == [1, 2, 3]
        assert transport.requests[1].url.params["page"] == "2"

    @pytest.mark.asyncio
    async def test_stops_at_max_pages(self, mock_github):
        transport = mock_github({"/users/octocat/repos": self.paged_handler(5)})

        async with make_client(transport) as client:
            repos = await client.get_user_repos("octocat", max_pages=2)

        assert [r["id"] for r in repos] == [1, 2]

    @pytest.mark.asyncio
    async def test_non_list_body_is_an_error(self, mock_github):
        transport = mock_github({"/users/octocat/repos": {"message": "odd"}})

        async with make_client(transport) as client:
            with pytest.raises(GitHubAPIError, match="Expected a list"):
                await client.get_user_repos("octocat")


class TestErrorMapping:
    """Tests for HTTP status to exception mapping."""

    @pytest.mark.asyncio
    async def test_not_found(self, mock_github):
        async with make_client(mock_github({})) as client:
            with pytest.raises(GitHubNotFoundError) as exc_info:
                await client.get_user("ghost")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_rate_limit_403(self, mock_github):
        response = httpx.Response(
            403,
            json={"message": "API rate limit exceeded for 1.2.3.4."},
            headers={"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1700000000"},
        )
        async with make_client(mock_github({"/users/octocat": response})) as client:
            with pytest.raises(GitHubRateLimitError) as exc_info:
                await client.get_user("octocat")

        assert exc_info.value.reset_time == 1700000000.0

    @pytest.mark.asyncio
    async def test_rate_limit_429(self, mock_github):
        response = httpx.Response(429, json={"message": "Too many requests"})
        async with make_client(mock_github({"/users/octocat": response})) as client:
            with pytest.raises(GitHubRateLimitError):
                await client.get_user("octocat")

    @pytest.mark.asyncio
    async def test_forbidden(self, mock_github):
        response = httpx.Response(403, json={"message": "Repository access blocked"})
        async with make_client(mock_github({"/users/octocat": response})) as client:
            with pytest.raises(GitHubAPIError, match="Forbidden") as exc_info:
                await client.get_user("octocat")

        assert not isinstance(exc_info.value, GitHubRateLimitError)

    @pytest.mark.asyncio
    async def test_server_error_without_json(self, mock_github):
        response = httpx.Response(502, text="<html>Bad gateway</html>")
        async with make_client(mock_github({"/users/octocat": response})) as client:
            with pytest.raises(GitHubAPIError) as exc_info:
                await client.get_user("octocat")

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_null_error_message(self, mock_github):
        response = httpx.Response(403, json={"message": None})
        async with make_client(mock_github({"/users/octocat": response})) as client:
            with pytest.raises(GitHubAPIError, match="Forbidden: Unknown error") as exc_info:
                await client.get_user("octocat")

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_non_json_success_body(self, mock_github):
        response = httpx.Response(200, text="<html>proxy error</html>")
        async with make_client(mock_github({"/users/octocat": response})) as client:
            with pytest.raises(GitHubAPIError, match="Invalid JSON") as exc_info:
                await client.get_user("octocat")

        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_non_json_page(self, mock_github):
        response = httpx.Response(200, text="<html>proxy error</html>")
        async with make_client(mock_github({"/users/octocat/repos": response})) as client:
            with pytest.raises(GitHubAPIError, match="Invalid JSON from /users/octocat/repos"):
                await client.get_user_repos("octocat")


class TestRetries:
    """Tests for transport retry configuration."""

    @staticmethod
    def flaky(failures: int):
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            if calls["count"] <= failures:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={"login": "octocat"})

        return handler, calls

    @pytest.mark.asyncio
    async def test_no_retry_by_default(self, mock_github):
        handler, calls = self.flaky(1)

        async with make_client(mock_github({"/users/octocat": handler})) as client:
            with pytest.raises(httpx.ConnectError):
                await client.get_user("octocat")

        assert calls["count"] == 1

    @pytest.mark.asyncio
    async def test_retries_when_configured(self, mock_github, monkeypatch):
        monkeypatch.setattr("asyncio.sleep", _no_sleep)
        handler, calls = self.flaky(1)

        async with make_client(mock_github({"/users/octocat": handler}), request_attempts=2) as client:
            user = await client.get_user("octocat")

        assert user == {"login": "octocat"}
        assert calls["count"] == 2


async def _no_sleep(seconds):
    return None


class TestRateLimiting:
    """Tests for local rate limit tracking."""

    @pytest.mark.asyncio
    async def test_headers_update_limiter(self, mock_github):
        response = httpx.Response(
            200,
            json={"login": "octocat"},
            headers={"x-ratelimit-limit": "60", "x-ratelimit-remaining": "41", "x-ratelimit-reset": "1700000000"},
        )
        client = make_client(mock_github({"/users/octocat": response}))

        async with client:
            await client.get_user("octocat")

        assert client.rate_limiter.remaining == 41
        assert client.rate_limiter.reset_time == 1700000000.0

    @pytest.mark.asyncio
    async def test_exhausted_budget_blocks_request(self, mock_github):
        transport = mock_github({"/users/octocat": {"login": "octocat"}})
        limiter = RateLimiter(remaining=0, reset_time=time.time() + 600)
        client = GitHubRestClient(config=Config(), rate_limiter=limiter, transport=transport)

        async with client:
            with pytest.raises(RateLimitExceededError):
                await client.get_user("octocat")

        assert transport.requests == []
