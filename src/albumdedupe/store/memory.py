"""In-memory album store.

Reference implementation of the ``AlbumStore`` port: enforces the unique
normalized (artist, title) key, tracks dependent references (for example
list memberships) and provides an all-or-nothing ``transaction()``.
"""

import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from albumdedupe.errors import AlbumValidationError, DuplicateKeyError, RecordNotFoundError
from albumdedupe.models import AlbumRecord, IdGenerator, UuidIdGenerator
from albumdedupe.normalize import lookup_key
from albumdedupe.utils import get_iso_timestamp

__all__ = ["InMemoryAlbumStore"]


@dataclass
class _State:
    albums: dict[str, AlbumRecord] = field(default_factory=dict)
    keys: dict[str, str] = field(default_factory=dict)
    references: dict[str, str] = field(default_factory=dict)
    exclusions: set[tuple[str, str]] = field(default_factory=set)

    def copy(self) -> "_State":
        return _State(
            albums=dict(self.albums),
            keys=dict(self.keys),
            references=dict(self.references),
            exclusions=set(self.exclusions),
        )


class InMemoryAlbumStore:
    """Thread-safe in-memory album store.

    Parameters
    ----------
    id_generator : IdGenerator | None, optional
        Source of internal ids; random UUID-based ids by default.
    """

    def __init__(self, id_generator: IdGenerator | None = None) -> None:
        self._id_generator = id_generator or UuidIdGenerator()
        self._lock = threading.RLock()
        self._state = _State()

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def get(self, album_id: str) -> AlbumRecord | None:
        with self._lock:
            return self._state.albums.get(album_id)

    def list_albums(self) -> list[AlbumRecord]:
        with self._lock:
            return list(self._state.albums.values())

    def lookup_by_normalized_key(self, artist: str, title: str) -> AlbumRecord | None:
        with self._lock:
            album_id = self._state.keys.get(lookup_key(artist, title))
            return self._state.albums.get(album_id) if album_id else None

    def insert(self, record: AlbumRecord) -> str:
        with self._lock:
            album_id = record.album_id or self.generate_internal_id()
            if album_id in self._state.albums:
                raise DuplicateKeyError(f"Album id already exists: {album_id}")

            key = lookup_key(record.artist, record.title)
            if key in self._state.keys:
                raise DuplicateKeyError(f"Album already exists for key: {key}")

            now = get_iso_timestamp()
            stored = record.with_changes(
                album_id=album_id,
                created_at=record.created_at or now,
                updated_at=record.updated_at or now,
            )
            self._state.albums[album_id] = stored
            self._state.keys[key] = album_id
            return album_id

    def update(self, album_id: str, changes: Mapping[str, Any]) -> None:
        with self._lock:
            current = self._state.albums.get(album_id)
            if current is None:
                raise RecordNotFoundError(album_id)

            updated = current.with_changes(**{**changes, "updated_at": get_iso_timestamp()})
            new_id = updated.album_id
            if not new_id:
                raise AlbumValidationError("album_id cannot be cleared")
            if new_id != album_id and new_id in self._state.albums:
                raise DuplicateKeyError(f"Album id already exists: {new_id}")

            old_key = lookup_key(current.artist, current.title)
            new_key = lookup_key(updated.artist, updated.title)
            owner = self._state.keys.get(new_key)
            if owner is not None and owner != album_id:
                raise DuplicateKeyError(f"Album already exists for key: {new_key}")

            del self._state.albums[album_id]
            self._state.keys.pop(old_key, None)
            self._state.albums[new_id] = updated
            self._state.keys[new_key] = new_id

    def delete(self, album_id: str) -> int:
        with self._lock:
            record = self._state.albums.pop(album_id, None)
            if record is None:
                return 0
            key = lookup_key(record.artist, record.title)
            if self._state.keys.get(key) == album_id:
                del self._state.keys[key]
            return 1

    def generate_internal_id(self) -> str:
        return self._id_generator()

    # ------------------------------------------------------------------
    # Dependent references
    # ------------------------------------------------------------------

    def add_reference(self, ref_id: str, album_id: str) -> None:
        """Attach a dependent reference (e.g. a list item) to an album."""
        with self._lock:
            if album_id not in self._state.albums:
                raise RecordNotFoundError(album_id)
            self._state.references[ref_id] = album_id

    def references_to(self, album_id: str) -> list[str]:
        """Return ids of references pointing at ``album_id``, sorted."""
        with self._lock:
            return sorted(r for r, a in self._state.references.items() if a == album_id)

    def repoint_references(self, old_id: str, new_id: str) -> int:
        with self._lock:
            moved = 0
            for ref_id, album_id in self._state.references.items():
                if album_id == old_id:
                    self._state.references[ref_id] = new_id
                    moved += 1
            return moved

    # ------------------------------------------------------------------
    # Exclusion pairs
    # ------------------------------------------------------------------

    def list_exclusion_pairs(self) -> set[tuple[str, str]]:
        with self._lock:
            return set(self._state.exclusions)

    def add_exclusion_pair(self, id_a: str, id_b: str) -> None:
        with self._lock:
            self._state.exclusions.add((min(id_a, id_b), max(id_a, id_b)))

    def remove_exclusion_pairs_mentioning(self, album_id: str) -> int:
        with self._lock:
            stale = {p for p in self._state.exclusions if album_id in p}
            self._state.exclusions -= stale
            return len(stale)

    def repoint_exclusion_pairs(self, old_id: str, new_id: str) -> int:
        with self._lock:
            stale = {p for p in self._state.exclusions if old_id in p}
            self._state.exclusions -= stale
            for id_a, id_b in stale:
                other = id_b if id_a == old_id else id_a
                # A pair between the two ids themselves would become a self-pair.
                if other != new_id:
                    self._state.exclusions.add((min(other, new_id), max(other, new_id)))
            return len(stale)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator["InMemoryAlbumStore"]:
        """Hold the store lock and roll back every write on error.

        Other threads cannot observe intermediate state while the block runs.
        """
        with self._lock:
            snapshot = self._state.copy()
            try:
                yield self
            except BaseException:
                self._state = snapshot
                raise
