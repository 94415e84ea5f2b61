"""Album store port and the in-memory reference store."""

from albumdedupe.store.base import AlbumStore
from albumdedupe.store.memory import InMemoryAlbumStore

__all__ = ["AlbumStore", "InMemoryAlbumStore"]
