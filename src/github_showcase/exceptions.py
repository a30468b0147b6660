"""Exceptions for GitHub Showcase.

Exception Hierarchy:
    ShowcaseError (base)
    ├── GitHubAPIError (HTTP API errors with status codes)
    │   ├── GitHubRateLimitError (403 rate limit from API response)
    │   └── GitHubNotFoundError (404 not found)
    ├── RateLimitExceededError (local rate limit tracking, before making request)
    ├── FetchFailure (a view could not be loaded; wraps the underlying error)
    ├── ViewNotReadyError (view data accessed outside the Ready state)
    └── IdentityNotSetError (no account identifier chosen or stored)

Usage:
    - Collectors and the REST client raise GitHubAPIError subclasses or
      httpx transport errors.
    - ViewSession catches those at the boundary and records a FetchFailure;
      nothing below the session is retried.
"""

__all__ = [
    "ShowcaseError",
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubNotFoundError",
    "RateLimitExceededError",
    "FetchFailure",
    "ViewNotReadyError",
    "IdentityNotSetError",
]


class ShowcaseError(Exception):
    """Base exception for all GitHub Showcase errors."""

    pass


class GitHubAPIError(ShowcaseError):
    """Base exception for GitHub API errors (HTTP responses with error status codes)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: dict | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class GitHubRateLimitError(GitHubAPIError):
    """Raised when GitHub API returns a rate limit error (HTTP 403 or 429).

    For preemptive rate limiting (before making requests), see RateLimitExceededError.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = 403,
        response_body: dict | None = None,
        reset_time: float | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)
        self.reset_time = reset_time


class GitHubNotFoundError(GitHubAPIError):
    """Raised when a GitHub resource is not found (HTTP 404)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = 404,
        response_body: dict | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)


class RateLimitExceededError(ShowcaseError):
    """Raised by the local rate limiter when the REST budget is exhausted.

    Unlike GitHubRateLimitError, this does not involve an actual API call.
    """

    pass


class FetchFailure(ShowcaseError):
    """A view failed to load. Retryable by re-entering the view."""

    def __init__(self, view: str, identity: str, cause: BaseException):
        super().__init__(f"Failed to load {view} for {identity}: {cause}")
        self.view = view
        self.identity = identity
        self.cause = cause

    @property
    def not_found(self) -> bool:
        """Whether the account (or resource) does not exist."""
        return isinstance(self.cause, GitHubNotFoundError)

    @property
    def rate_limited(self) -> bool:
        """Whether the failure came from GitHub or local rate limiting."""
        return isinstance(self.cause, (GitHubRateLimitError, RateLimitExceededError))


class ViewNotReadyError(ShowcaseError):
    """Raised when view data is requested before the view reached Ready."""

    def __init__(self, view: str, status: str):
        super().__init__(f"View '{view}' is not ready (status: {status})")
        self.view = view
        self.status = status


class IdentityNotSetError(ShowcaseError):
    """Raised when no account identifier is given and none is stored."""

    pass
