"""Repository collector service."""

import logging

from github_showcase.models.repository import Repository
from github_showcase.services.github_rest_client import GitHubRestClient

logger = logging.getLogger(__name__)


class RepoCollector:
    """Collects a user's public repositories."""

    def __init__(self, rest_client: GitHubRestClient):
        self.rest_client = rest_client

    async def collect_repos(self, username: str) -> list[Repository]:
        """Collect user's public repositories, most recently updated first.

        Args:
            username: GitHub username

        Returns:
            Normalized repositories in API order
        """
        logger.debug("Fetching repositories for %s", username)

        repos_data = await self.rest_client.get_user_repos(username)
        repos = [Repository.from_api(r) for r in repos_data]

        logger.debug("Found %d public repositories", len(repos))
        return repos
