"""Per-view load state: Idle -> Loading -> Ready | Failed."""

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Generic, Optional, TypeVar

import httpx
from pydantic import ValidationError

from github_showcase.exceptions import FetchFailure, ShowcaseError, ViewNotReadyError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Everything a loader may raise that means "the fetch failed"
FETCH_ERRORS = (ShowcaseError, httpx.HTTPError, ValidationError)


class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ViewSession(Generic[T]):
    """Load state of one dashboard view for the current account.

    A result is only applied if the session's identity is still the one
    captured when the load started; late responses for a previous account
    are dropped.

    Args:
        name: View name used in logs and errors
        loader: Coroutine function fetching and aggregating the view for an identity
    """

    def __init__(self, name: str, loader: Callable[[str], Awaitable[T]]):
        self.name = name
        self._loader = loader
        self.status = ViewStatus.IDLE
        self.identity: Optional[str] = None
        self.error: Optional[FetchFailure] = None
        self._data: Optional[T] = None

    def __repr__(self) -> str:
        return f"ViewSession(name={self.name!r}, status={self.status.value}, identity={self.identity!r})"

    @property
    def is_ready(self) -> bool:
        return self.status == ViewStatus.READY

    @property
    def data(self) -> T:
        """The loaded view model. Only available in the Ready state."""
        if self.status != ViewStatus.READY:
            raise ViewNotReadyError(self.name, self.status.value)
        return self._data  # type: ignore[return-value]

    async def enter(self, identity: str) -> ViewStatus:
        """Start loading the view for `identity` and wait for the outcome.

        Fetch errors never propagate; they move the session to Failed.

        Returns:
            The session status once this load settles (unchanged if the
            result was stale)
        """
        self.identity = identity
        self.status = ViewStatus.LOADING
        self.error = None
        self._data = None

        logger.debug("Loading %s view for %s", self.name, identity)

        try:
            data = await self._loader(identity)
        except FETCH_ERRORS as e:
            if self._is_stale(identity):
                return self.status
            logger.warning("Failed to load %s view for %s: %s", self.name, identity, e)
            self.error = FetchFailure(self.name, identity, e)
            self.status = ViewStatus.FAILED
            return self.status

        if self._is_stale(identity):
            return self.status

        self._data = data
        self.status = ViewStatus.READY
        logger.debug("%s view ready for %s", self.name, identity)
        return self.status

    async def retry(self) -> ViewStatus:
        """Re-enter Loading for the current identity after a failure."""
        if self.status != ViewStatus.FAILED or self.identity is None:
            raise ShowcaseError(f"Only a failed view can be retried ({self.name} is {self.status.value})")
        return await self.enter(self.identity)

    def reset(self) -> None:
        """Back to Idle, dropping any data and any outstanding result."""
        self.status = ViewStatus.IDLE
        self.identity = None
        self.error = None
        self._data = None

    def _is_stale(self, identity: str) -> bool:
        if self.identity != identity:
            logger.debug(
                "Discarding stale %s result for %s (current: %s)",
                self.name,
                identity,
                self.identity,
            )
            return True
        return False
