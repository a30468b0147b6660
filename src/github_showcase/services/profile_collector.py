"""Profile collector service."""

import logging

from github_showcase.models.user import UserProfile
from github_showcase.services.github_rest_client import GitHubRestClient

logger = logging.getLogger(__name__)


class ProfileCollector:
    """Collects user profile data."""

    def __init__(self, rest_client: GitHubRestClient):
        self.rest_client = rest_client

    async def collect_profile(self, username: str) -> UserProfile:
        """Collect user profile data.

        Raises:
            GitHubNotFoundError: If the account does not exist
        """
        logger.debug("Fetching profile for %s", username)

        data = await self.rest_client.get_user(username)
        return UserProfile.from_api(data)
