"""View models handed to the renderers."""

from pydantic import BaseModel, Field

from github_showcase.models.repository import Repository, StatsSummary
from github_showcase.models.user import UserProfile


class ProfileView(BaseModel):
    """Profile header plus repository statistics."""

    profile: UserProfile
    stats: StatsSummary


class ProjectsView(BaseModel):
    """The unfiltered repository snapshot behind the project browser.

    Filtered results are re-derived from this snapshot without refetching.
    """

    repositories: list[Repository] = Field(default_factory=list)
