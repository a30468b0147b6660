"""Services for GitHub data collection and querying."""

from github_showcase.services.activity_collector import ActivityCollector
from github_showcase.services.github_rest_client import GitHubRestClient
from github_showcase.services.profile_collector import ProfileCollector
from github_showcase.services.project_query import available_languages, query_projects
from github_showcase.services.repo_collector import RepoCollector

__all__ = [
    "GitHubRestClient",
    "ProfileCollector",
    "RepoCollector",
    "ActivityCollector",
    "query_projects",
    "available_languages",
]
