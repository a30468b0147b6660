"""Activity collector service."""

import logging
from datetime import date

from github_showcase.models.activity import ACTIVITY_WINDOW_DAYS, ActivitySeries, GitHubEvent
from github_showcase.services.github_rest_client import GitHubRestClient

logger = logging.getLogger(__name__)


class ActivityCollector:
    """Collects public events and turns them into an activity series."""

    def __init__(self, rest_client: GitHubRestClient):
        self.rest_client = rest_client

    async def collect_events(self, username: str) -> list[GitHubEvent]:
        """Collect user's public events.

        Args:
            username: GitHub username

        Returns:
            List of GitHubEvent objects, newest first as returned by the API
        """
        logger.debug("Fetching public events for %s", username)

        events_data = await self.rest_client.get_user_events(username)
        events = [GitHubEvent.from_api(e) for e in events_data]

        logger.debug("Found %d events", len(events))
        return events

    def summarize_activity(
        self,
        events: list[GitHubEvent],
        today: date | None = None,
        days: int = ACTIVITY_WINDOW_DAYS,
    ) -> ActivitySeries:
        """Bucket collected events into the daily activity series."""
        return ActivitySeries.from_events(events, today=today, days=days)
