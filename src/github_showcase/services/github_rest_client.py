"""GitHub REST API client."""

import logging
from typing import Any, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from github_showcase._version import version as __version__
from github_showcase.config import Config, get_config
from github_showcase.exceptions import (
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from github_showcase.utils.pagination import get_next_page_url
from github_showcase.utils.rate_limiter import RateLimiter, get_rate_limiter

logger = logging.getLogger(__name__)


def _json_body(response: httpx.Response) -> dict:
    """Best-effort JSON body of an error response."""
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _decode_json(response: httpx.Response, endpoint: str) -> Any:
    """JSON body of a successful response; a non-JSON body is an API error."""
    try:
        return response.json()
    except ValueError as e:
        raise GitHubAPIError(
            f"Invalid JSON from {endpoint}",
            status_code=response.status_code,
        ) from e


class GitHubRestClient:
    """Async client for the public, unauthenticated GitHub REST API."""

    def __init__(
        self,
        config: Optional[Config] = None,
        rate_limiter: Optional[RateLimiter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or get_config()
        self.rate_limiter = rate_limiter or get_rate_limiter()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        return {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": f"github-showcase/{__version__}",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.github_api_url,
                headers=self._get_headers(),
                timeout=self.config.request_timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "GitHubRestClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Make an API request, retrying transport failures up to the configured attempts."""
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
            stop=stop_after_attempt(max(1, self.config.request_attempts)),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        ):
            with attempt:
                return await self._send(method, url, **kwargs)
        raise AssertionError("unreachable")

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        await self.rate_limiter.acquire()

        client = await self._get_client()
        response = await client.request(method, url, **kwargs)

        self.rate_limiter.update_from_headers(response.headers)
        self._raise_for_status(response, url)
        return response

    def _raise_for_status(self, response: httpx.Response, url: str) -> None:
        """Map error responses onto the exception hierarchy."""
        status = response.status_code
        if status < 400:
            return

        body = _json_body(response)
        message = str(body.get("message") or "Unknown error")

        if status == 404:
            raise GitHubNotFoundError(
                f"Resource not found: {url}",
                response_body=body,
            )
        if status == 429 or (status == 403 and "rate limit" in message.lower()):
            reset = response.headers.get("x-ratelimit-reset")
            raise GitHubRateLimitError(
                "Rate limit exceeded",
                status_code=status,
                response_body=body,
                reset_time=float(reset) if reset else None,
            )
        if status == 403:
            raise GitHubAPIError(f"Forbidden: {message}", status_code=403, response_body=body)
        if status >= 500:
            raise GitHubAPIError(f"Server error: {status}", status_code=status)
        raise GitHubAPIError(f"API error: {message}", status_code=status, response_body=body)

    async def get(self, endpoint: str, **kwargs) -> Any:
        """Make a GET request and return JSON response."""
        response = await self._request("GET", endpoint, **kwargs)
        return _decode_json(response, endpoint)

    async def get_paginated(
        self,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
        max_pages: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """Fetch pages of a list endpoint, following the Link header.

        Args:
            endpoint: API endpoint
            params: Extra query parameters for the first page
            max_pages: Maximum number of pages (defaults to config.max_pages, 0 for all)

        Returns:
            List of all items across the fetched pages
        """
        if max_pages is None:
            max_pages = self.config.max_pages

        all_items: list[dict[str, Any]] = []
        query: Optional[dict[str, Any]] = {"per_page": self.config.per_page, **(params or {})}
        url: Optional[str] = endpoint
        page = 1

        while url and (not max_pages or page <= max_pages):
            response = await self._request("GET", url, params=query)
            data = _decode_json(response, endpoint)

            if not isinstance(data, list):
                raise GitHubAPIError(
                    f"Expected a list from {endpoint}, got {type(data).__name__}",
                    status_code=response.status_code,
                )
            all_items.extend(data)

            # The next link already carries every query parameter
            url = get_next_page_url(response.headers.get("Link"))
            query = None
            page += 1

        logger.debug("Fetched %d items from %s in %d page(s)", len(all_items), endpoint, page - 1)
        return all_items

    # Convenience methods for the three dashboard endpoints

    async def get_user(self, username: str) -> dict[str, Any]:
        """Get user profile data."""
        return await self.get(f"/users/{username}")

    async def get_user_repos(
        self,
        username: str,
        max_pages: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """Get user's public repositories, most recently updated first."""
        return await self.get_paginated(
            f"/users/{username}/repos",
            params={"sort": "updated", "direction": "desc"},
            max_pages=max_pages,
        )

    async def get_user_events(
        self,
        username: str,
        max_pages: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """Get user's public events (GitHub keeps roughly the last 90 days)."""
        return await self.get_paginated(
            f"/users/{username}/events",
            max_pages=max_pages,
        )
