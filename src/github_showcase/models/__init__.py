"""Data models for GitHub Showcase."""

from github_showcase.models.activity import (
    ActivitySeries,
    DailyActivity,
    GitHubEvent,
    event_label,
)
from github_showcase.models.project import (
    Category,
    ProjectFilterState,
    ProjectQueryResult,
    SortDirection,
    SortKey,
)
from github_showcase.models.repository import RepoStars, Repository, StatsSummary
from github_showcase.models.user import UserProfile
from github_showcase.models.views import ProfileView, ProjectsView

__all__ = [
    "UserProfile",
    "Repository",
    "RepoStars",
    "StatsSummary",
    "GitHubEvent",
    "event_label",
    "DailyActivity",
    "ActivitySeries",
    "Category",
    "SortKey",
    "SortDirection",
    "ProjectFilterState",
    "ProjectQueryResult",
    "ProfileView",
    "ProjectsView",
]
