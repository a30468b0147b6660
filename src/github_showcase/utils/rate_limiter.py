"""Local tracking of the unauthenticated REST rate limit."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional

from github_showcase.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

UNAUTHENTICATED_LIMIT = 60  # requests per hour


def format_time_remaining(seconds: float) -> str:
    """Format seconds into a human-friendly string."""
    if seconds <= 0:
        return "now"

    seconds = int(seconds)

    if seconds < 60:
        return f"{seconds} second{'s' if seconds != 1 else ''}"
    elif seconds < 3600:
        minutes = seconds // 60
        secs = seconds % 60
        if secs > 0:
            return f"{minutes} min {secs} sec"
        return f"{minutes} minute{'s' if minutes != 1 else ''}"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        if minutes > 0:
            return f"{hours} hr {minutes} min"
        return f"{hours} hour{'s' if hours != 1 else ''}"


def format_reset_time(reset_timestamp: float) -> str:
    """Format reset timestamp to a human-readable local time."""
    return datetime.fromtimestamp(reset_timestamp).strftime("%H:%M:%S")


@dataclass
class RateLimiter:
    """Tracks remaining REST requests from GitHub's x-ratelimit-* headers.

    Refuses to send a request once GitHub has reported the budget as spent
    and the reset time is still in the future.
    """

    limit: int = UNAUTHENTICATED_LIMIT
    remaining: int = UNAUTHENTICATED_LIMIT
    reset_time: float = field(default_factory=lambda: time.time() + 3600)

    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @property
    def seconds_until_reset(self) -> float:
        return max(0.0, self.reset_time - time.time())

    @property
    def is_exhausted(self) -> bool:
        return self.remaining <= 0 and self.seconds_until_reset > 0

    async def acquire(self) -> None:
        """Reserve one request, or raise if the budget is spent."""
        async with self._lock:
            if self.remaining <= 0 and self.seconds_until_reset <= 0:
                # Window rolled over without a fresh header; start a new one
                self.remaining = self.limit
                self.reset_time = time.time() + 3600

            if self.remaining <= 0:
                human_time = format_time_remaining(self.seconds_until_reset)
                reset_at = format_reset_time(self.reset_time)
                logger.warning("REST rate limit exhausted, resets in %s", human_time)
                raise RateLimitExceededError(
                    f"Rate limit exceeded. Resets in {human_time} (at {reset_at})"
                )

            self.remaining -= 1

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """Update state from GitHub API response headers."""
        if "x-ratelimit-limit" in headers:
            self.limit = int(headers["x-ratelimit-limit"])
        if "x-ratelimit-remaining" in headers:
            self.remaining = int(headers["x-ratelimit-remaining"])
        if "x-ratelimit-reset" in headers:
            self.reset_time = float(headers["x-ratelimit-reset"])

    def get_status(self) -> dict:
        return {
            "remaining": self.remaining,
            "limit": self.limit,
            "reset_in": self.seconds_until_reset,
        }


# Global rate limiter instance
_rate_limiter: Optional[RateLimiter] = None


def get_rate_limiter() -> RateLimiter:
    """Get or create the global rate limiter instance."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = RateLimiter()
    return _rate_limiter


def reset_rate_limiter() -> None:
    """Reset the global rate limiter (useful for testing)."""
    global _rate_limiter
    _rate_limiter = None
