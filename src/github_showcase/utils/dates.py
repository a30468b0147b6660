"""Date helpers shared by the API models."""

from datetime import date, datetime, timezone


def parse_datetime(value: str | None) -> datetime | None:
    """Parse ISO datetime string."""
    if not value:
        return None
    try:
        # Handle ISO format with or without Z suffix
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()
