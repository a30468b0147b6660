"""Pytest configuration and fixtures."""

from typing import Any, Callable

import httpx
import pytest
from factories import make_repo

from github_showcase.config import Config, set_config
from github_showcase.models.repository import Repository
from github_showcase.storage.store import MemoryStore
from github_showcase.utils.rate_limiter import reset_rate_limiter


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset global state before each test."""
    reset_rate_limiter()
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration with state kept in a temp dir."""
    config = Config(
        github_api_url="https://api.github.com",
        state_path=tmp_path / "state.json",
    )
    set_config(config)
    return config


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sample_repos() -> list[Repository]:
    """alpha/beta/gamma collection used across query tests."""
    return [
        make_repo(1, "alpha", stars=5, language="Go", updated="2024-03-01T00:00:00"),
        make_repo(2, "beta", stars=9, language="Go", fork=True, updated="2024-05-01T00:00:00"),
        make_repo(3, "gamma", stars=2, language="Rust", updated="2024-04-01T00:00:00"),
    ]


@pytest.fixture
def mock_github() -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport serving canned JSON by URL path.

    Values may be JSON-able payloads, ready httpx.Response objects, or
    callables taking the request. Unknown paths return 404. Every request
    is recorded on `transport.requests`.
    """

    def factory(routes: dict[str, Any]) -> httpx.MockTransport:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            route = routes.get(request.url.path)
            if route is None:
                return httpx.Response(404, json={"message": "Not Found"})
            if isinstance(route, httpx.Response):
                return route
            if callable(route):
                return route(request)
            return httpx.Response(200, json=route)

        transport = httpx.MockTransport(handler)
        transport.requests = requests  # type: ignore[attr-defined]
        return transport

    return factory
