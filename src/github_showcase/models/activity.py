"""Activity and event data models."""

import re
from datetime import date, datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field

from github_showcase.utils.dates import parse_datetime, utc_today

ACTIVITY_WINDOW_DAYS = 30
OTHER_EVENT = "Other"

_WORD_START = re.compile(r"(?=[A-Z])")


def event_label(event_type: str) -> str:
    """Readable label for an event type tag, e.g. PullRequestEvent -> Pull Request."""
    words = _WORD_START.split(event_type.replace("Event", "", 1))
    return " ".join(w for w in words if w) or event_type


class GitHubEvent(BaseModel):
    """GitHub event from Events API."""

    id: str = ""
    type: str
    created_at: datetime | None = None
    actor: str = ""
    repo: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "GitHubEvent":
        """Create from GitHub Events API response."""
        return cls(
            id=str(data.get("id") or ""),
            type=data.get("type") or OTHER_EVENT,
            created_at=parse_datetime(data.get("created_at")),
            actor=(data.get("actor") or {}).get("login", ""),
            repo=(data.get("repo") or {}).get("name", ""),
        )


class DailyActivity(BaseModel):
    """Event count for one calendar day."""

    date: date
    count: int = 0

    @property
    def label(self) -> str:
        """Chart label, e.g. 03/07."""
        return self.date.strftime("%m/%d")


class ActivitySeries(BaseModel):
    """Trailing daily activity plus an all-time event type table.

    `days` covers only the chart window while `event_types` and
    `total_events` count every fetched event.
    """

    days: list[DailyActivity] = Field(default_factory=list)
    event_types: dict[str, int] = Field(default_factory=dict)  # sorted by count, desc
    total_events: int = 0

    @classmethod
    def from_events(
        cls,
        events: list[GitHubEvent],
        today: date | None = None,
        days: int = ACTIVITY_WINDOW_DAYS,
    ) -> "ActivitySeries":
        """Bucket events by day over the window ending at `today` (inclusive).

        Args:
            events: Events in any order
            today: Last day of the window (defaults to the current UTC date)
            days: Window length

        Returns:
            ActivitySeries with exactly `days` entries, oldest first
        """
        today = today or utc_today()
        buckets: dict[date, int] = {
            today - timedelta(days=offset): 0 for offset in range(days - 1, -1, -1)
        }
        event_types: dict[str, int] = {}

        for event in events:
            event_types[event.type] = event_types.get(event.type, 0) + 1

            if event.created_at is None:
                continue
            # Plain date truncation, no time zone conversion
            day = event.created_at.date()
            if day in buckets:
                buckets[day] += 1

        return cls(
            days=[DailyActivity(date=day, count=count) for day, count in buckets.items()],
            event_types=dict(sorted(event_types.items(), key=lambda x: x[1], reverse=True)),
            total_events=len(events),
        )

    @property
    def labels(self) -> list[str]:
        return [day.label for day in self.days]

    @property
    def counts(self) -> list[int]:
        return [day.count for day in self.days]

    @property
    def window_total(self) -> int:
        """Events that fell inside the chart window."""
        return sum(self.counts)

    def top_event_types(self, limit: int = 4) -> list[tuple[str, int]]:
        """Most frequent event types."""
        return list(self.event_types.items())[:limit]
