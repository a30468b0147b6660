"""Persisted client state: remembered identity and bookmarks."""

from github_showcase.storage.bookmarks import BookmarkSet
from github_showcase.storage.store import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    clear_identity,
    load_identity,
    save_identity,
)

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "BookmarkSet",
    "load_identity",
    "save_identity",
    "clear_identity",
]
