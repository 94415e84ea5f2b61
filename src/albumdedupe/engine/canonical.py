"""Canonical album workflows against a record store.

- ``upsert_canonical``: insert a new album or smart-merge it into the
  record that already holds its normalized (artist, title) key.
- ``check_similar``: the at-insert fuzzy duplicate check that lets the
  caller choose between insert, merge-now and flag-for-review.
- ``mark_distinct``: record a human decision that two albums differ.
"""

from dataclasses import dataclass, field
from typing import Any

from albumdedupe.audit import AuditLogger
from albumdedupe.candidates import DuplicateCandidate, find_candidates
from albumdedupe.errors import AlbumValidationError
from albumdedupe.merge import changed_fields, merge_records
from albumdedupe.models import AlbumRecord, ExclusionSet
from albumdedupe.normalize import sanitize_for_storage
from albumdedupe.store import AlbumStore
from albumdedupe.utils import calculate_bytes_sha256

from .config import DedupeConfig

__all__ = [
    "UpsertResult",
    "SimilarCheck",
    "upsert_canonical",
    "check_similar",
    "mark_distinct",
]


@dataclass(frozen=True)
class UpsertResult:
    """Outcome of a canonical upsert.

    Attributes
    ----------
    album_id : str
        Canonical id after the upsert (may have been upgraded from an
        internal id to an external one).
    was_inserted : bool
        A new record was created.
    was_merged : bool
        An existing record absorbed the incoming data.
    needs_summary_fetch : bool
        The canonical record has never had its summary fetched.
    fields_changed : tuple[str, ...]
        Fields updated by the smart merge.
    """

    album_id: str
    was_inserted: bool
    was_merged: bool
    needs_summary_fetch: bool
    fields_changed: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SimilarCheck:
    """Outcome of an at-insert similarity check.

    Attributes
    ----------
    has_similar : bool
        At least one candidate was found.
    should_auto_merge : bool
        The best candidate meets the auto-merge bound.
    matches : tuple[DuplicateCandidate, ...]
        Candidates by descending confidence.
    """

    has_similar: bool
    should_auto_merge: bool
    matches: tuple[DuplicateCandidate, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "has_similar": self.has_similar,
            "should_auto_merge": self.should_auto_merge,
            "matches": [m.to_dict() for m in self.matches],
        }


def _require_artist_and_title(artist: str | None, title: str | None) -> tuple[str, str]:
    clean_artist = sanitize_for_storage(artist)
    clean_title = sanitize_for_storage(title)
    if not clean_artist or not clean_title:
        raise AlbumValidationError("artist and title are required")
    return clean_artist, clean_title


def upsert_canonical(
    store: AlbumStore,
    record: AlbumRecord,
    *,
    audit_logger: AuditLogger | None = None,
) -> UpsertResult:
    """Insert ``record`` or merge it into its existing canonical record.

    The existing record is found by normalized (artist, title) key first,
    then by id, which catches the same album stored under a slightly
    different spelling.

    Parameters
    ----------
    store : AlbumStore
        Record store.
    record : AlbumRecord
        Incoming album data.
    audit_logger : AuditLogger | None, optional
        Receives an album_upserted event.

    Returns
    -------
    UpsertResult
        Canonical id and what happened.

    Raises
    ------
    AlbumValidationError
        If artist or title is missing.
    """
    artist, title = _require_artist_and_title(record.artist, record.title)
    incoming = record.with_changes(artist=artist, title=title)

    with store.transaction():
        existing = store.lookup_by_normalized_key(artist, title)
        if existing is None and incoming.album_id:
            existing = store.get(incoming.album_id)

        if existing is None:
            album_id = incoming.album_id or store.generate_internal_id()
            album_id = store.insert(incoming.with_changes(album_id=album_id))
            result = UpsertResult(
                album_id=album_id,
                was_inserted=True,
                was_merged=False,
                needs_summary_fetch=True,
            )
        else:
            merged = merge_records(existing, incoming)
            fields = changed_fields(existing, merged)

            # An id upgrade must not collide with another stored album.
            if "album_id" in fields and store.get(merged.album_id) is not None:
                fields.remove("album_id")
                merged = merged.with_changes(album_id=existing.album_id)

            if fields:
                store.update(existing.album_id, {f: getattr(merged, f) for f in fields})
                if "album_id" in fields:
                    store.repoint_references(existing.album_id, merged.album_id)
                    store.repoint_exclusion_pairs(existing.album_id, merged.album_id)

            result = UpsertResult(
                album_id=merged.album_id,
                was_inserted=False,
                was_merged=True,
                needs_summary_fetch=not existing.summary_fetched_at,
                fields_changed=tuple(fields),
            )

    if audit_logger:
        wrote_cover = incoming.cover_image is not None and (
            result.was_inserted or "cover_image" in result.fields_changed
        )
        audit_logger.album_upserted(
            result.album_id,
            result.was_inserted,
            list(result.fields_changed),
            cover_sha256=(
                calculate_bytes_sha256(incoming.cover_image.data) if wrote_cover else None
            ),
        )

    return result


def check_similar(
    store: AlbumStore,
    artist: str | None,
    title: str | None,
    album_id: str | None = None,
    config: DedupeConfig | None = None,
) -> SimilarCheck:
    """Look for stored albums that may duplicate a new one.

    Parameters
    ----------
    store : AlbumStore
        Record store supplying the corpus and exclusion snapshot.
    artist : str | None
        Artist of the new album.
    title : str | None
        Title of the new album.
    album_id : str | None, optional
        Id of the new album, when it already has one; pairs marked
        distinct from it are skipped.
    config : DedupeConfig | None, optional
        Thresholds; defaults to ``DedupeConfig()``.

    Returns
    -------
    SimilarCheck
        Candidates and whether the best one may be merged without review.

    Raises
    ------
    AlbumValidationError
        If artist or title is missing.
    """
    cfg = config or DedupeConfig()
    clean_artist, clean_title = _require_artist_and_title(artist, title)

    corpus = [
        r
        for r in store.list_albums()
        if sanitize_for_storage(r.artist) and sanitize_for_storage(r.title)
    ]
    exclusions = ExclusionSet.from_pairs(store.list_exclusion_pairs())

    matches = find_candidates(
        AlbumRecord(album_id=album_id, artist=clean_artist, title=clean_title),
        corpus,
        threshold=cfg.insert_threshold,
        max_results=cfg.max_results,
        exclude_pairs=exclusions,
        auto_merge_threshold=cfg.auto_merge_threshold,
    )

    return SimilarCheck(
        has_similar=bool(matches),
        should_auto_merge=bool(matches) and matches[0].should_auto_merge,
        matches=tuple(matches),
    )


def mark_distinct(
    store: AlbumStore,
    album_id_1: str | None,
    album_id_2: str | None,
    *,
    audit_logger: AuditLogger | None = None,
) -> tuple[str, str]:
    """Record that two albums are distinct so they are never suggested again.

    Parameters
    ----------
    store : AlbumStore
        Record store.
    album_id_1 : str | None
        First album id.
    album_id_2 : str | None
        Second album id.
    audit_logger : AuditLogger | None, optional
        Receives an exclusion_added event.

    Returns
    -------
    tuple[str, str]
        The stored pair, sorted.

    Raises
    ------
    AlbumValidationError
        If an id is missing or both ids are equal.
    """
    if not album_id_1 or not album_id_2:
        raise AlbumValidationError("album_id_1 and album_id_2 are required")
    if album_id_1 == album_id_2:
        raise AlbumValidationError("Cannot mark album as distinct from itself")

    first, second = sorted((album_id_1, album_id_2))
    store.add_exclusion_pair(first, second)

    if audit_logger:
        audit_logger.exclusion_added(first, second)

    return first, second
