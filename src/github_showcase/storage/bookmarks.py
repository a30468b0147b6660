"""Client-side bookmarked repositories."""

import json
import logging
from collections.abc import Iterator

from pydantic import StrictInt, TypeAdapter, ValidationError

from github_showcase.storage.store import BOOKMARKS_KEY, KeyValueStore

logger = logging.getLogger(__name__)

_BOOKMARK_IDS = TypeAdapter(list[StrictInt])


def decode_bookmarks(raw: str | None) -> list[int]:
    """Parse the persisted bookmark list. Absent or malformed data yields []."""
    if not raw:
        return []
    try:
        return _BOOKMARK_IDS.validate_json(raw)
    except ValidationError as e:
        logger.warning("Discarding malformed bookmarks (%d errors)", e.error_count())
        return []


def encode_bookmarks(ids: list[int]) -> str:
    return json.dumps(ids)


class BookmarkSet:
    """Ordered set of bookmarked repository ids.

    Ids stay bookmarked even when the repository is no longer returned by
    the API. Every toggle is written to the store before it returns.
    """

    def __init__(self, store: KeyValueStore, ids: list[int] | None = None):
        self._store = store
        self._ids: dict[int, None] = dict.fromkeys(ids or [])

    @classmethod
    def load(cls, store: KeyValueStore) -> "BookmarkSet":
        """Load bookmarks from the store."""
        ids = decode_bookmarks(store.get(BOOKMARKS_KEY))
        logger.debug("Loaded %d bookmarks", len(ids))
        return cls(store, ids)

    def toggle(self, repo_id: int) -> bool:
        """Add or remove a repository id.

        Returns:
            True if the id is bookmarked after the toggle
        """
        if repo_id in self._ids:
            del self._ids[repo_id]
            bookmarked = False
        else:
            self._ids[repo_id] = None
            bookmarked = True
        self.save()
        return bookmarked

    def save(self) -> None:
        self._store.set(BOOKMARKS_KEY, encode_bookmarks(self.ids))

    @property
    def ids(self) -> list[int]:
        return list(self._ids)

    def __contains__(self, repo_id: object) -> bool:
        return repo_id in self._ids

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)
