"""User profile model."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from github_showcase.utils.dates import parse_datetime


class UserProfile(BaseModel):
    """GitHub user profile data. Passed through to the renderer as-is."""

    username: str
    name: str | None = None
    avatar_url: str = ""
    html_url: str = ""
    bio: str | None = None
    company: str | None = None
    location: str | None = None
    blog: str | None = None
    public_repos: int = 0
    public_gists: int = 0
    followers: int = 0
    following: int = 0
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "UserProfile":
        """Create from GitHub REST API response."""
        return cls(
            username=data.get("login") or "",
            name=data.get("name"),
            avatar_url=data.get("avatar_url") or "",
            html_url=data.get("html_url") or "",
            bio=data.get("bio"),
            company=data.get("company"),
            location=data.get("location"),
            blog=data.get("blog") or None,
            public_repos=data.get("public_repos") or 0,
            public_gists=data.get("public_gists") or 0,
            followers=data.get("followers") or 0,
            following=data.get("following") or 0,
            created_at=parse_datetime(data.get("created_at")),
        )

    @property
    def display_name(self) -> str:
        return self.name or self.username
