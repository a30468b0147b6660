"""Project browser filter state and results."""

from enum import Enum

from pydantic import BaseModel, Field

from github_showcase.models.repository import Repository

ALL_LANGUAGES = "all"


class Category(str, Enum):
    """Project tabs."""

    ALL = "all"
    BOOKMARKED = "bookmarked"
    SOURCE = "source"
    FORKED = "forked"


class SortKey(str, Enum):
    UPDATED = "updated"
    STARS = "stars"
    NAME = "name"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ProjectFilterState(BaseModel):
    """Search, tab, language and sort selection for one view session.

    Never persisted.
    """

    search: str = ""
    category: Category = Category.ALL
    language: str = ALL_LANGUAGES
    sort_key: SortKey = SortKey.UPDATED
    direction: SortDirection = SortDirection.DESC

    def toggled_direction(self) -> "ProjectFilterState":
        """Copy with the sort direction flipped."""
        flipped = SortDirection.ASC if self.direction == SortDirection.DESC else SortDirection.DESC
        return self.model_copy(update={"direction": flipped})


class ProjectQueryResult(BaseModel):
    """Filtered, sorted projects plus the size of the unfiltered collection."""

    projects: list[Repository] = Field(default_factory=list)
    total: int = 0

    @property
    def shown(self) -> int:
        return len(self.projects)

    @property
    def is_empty(self) -> bool:
        return not self.projects
