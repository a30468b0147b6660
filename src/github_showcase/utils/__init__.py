"""Utility modules for GitHub Showcase."""

from github_showcase.utils.dates import parse_datetime, utc_today
from github_showcase.utils.pagination import get_next_page_url, parse_link_header
from github_showcase.utils.rate_limiter import RateLimiter, get_rate_limiter, reset_rate_limiter

__all__ = [
    "RateLimiter",
    "get_rate_limiter",
    "reset_rate_limiter",
    "parse_link_header",
    "get_next_page_url",
    "parse_datetime",
    "utc_today",
]
