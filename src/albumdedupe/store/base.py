"""Record store port consumed by the merge and canonical workflows.

The store owns persistence, the unique normalized-key constraint and the
transactional boundary. The engine never locks on its own.
"""

from collections.abc import Mapping
from contextlib import AbstractContextManager
from typing import Any, Protocol, runtime_checkable

from albumdedupe.models import AlbumRecord

__all__ = ["AlbumStore"]


@runtime_checkable
class AlbumStore(Protocol):
    """Operations the engine needs from an album store."""

    def get(self, album_id: str) -> AlbumRecord | None:
        """Fetch a record by id, or None if absent."""
        ...

    def list_albums(self) -> list[AlbumRecord]:
        """Return every stored record."""
        ...

    def lookup_by_normalized_key(self, artist: str, title: str) -> AlbumRecord | None:
        """Find the record sharing the normalized (artist, title) key."""
        ...

    def insert(self, record: AlbumRecord) -> str:
        """Insert a new record and return its id.

        Must reject a second record with the same normalized key.
        """
        ...

    def update(self, album_id: str, changes: Mapping[str, Any]) -> None:
        """Apply partial field changes to a stored record."""
        ...

    def repoint_references(self, old_id: str, new_id: str) -> int:
        """Move every dependent reference from ``old_id`` to ``new_id``.

        Returns the number of references moved.
        """
        ...

    def delete(self, album_id: str) -> int:
        """Delete a record; returns the number of records removed (0 or 1)."""
        ...

    def list_exclusion_pairs(self) -> set[tuple[str, str]]:
        """Return all exclusion pairs as sorted id tuples."""
        ...

    def add_exclusion_pair(self, id_a: str, id_b: str) -> None:
        """Record that two albums are distinct (idempotent)."""
        ...

    def remove_exclusion_pairs_mentioning(self, album_id: str) -> int:
        """Drop every exclusion pair containing ``album_id``; returns count."""
        ...

    def repoint_exclusion_pairs(self, old_id: str, new_id: str) -> int:
        """Rewrite exclusion pairs mentioning ``old_id`` to use ``new_id``.

        Returns the number of pairs rewritten.
        """
        ...

    def generate_internal_id(self) -> str:
        """Return a fresh id distinguishable from external ids."""
        ...

    def transaction(self) -> AbstractContextManager[Any]:
        """Atomic unit: all writes inside commit together or not at all."""
        ...
