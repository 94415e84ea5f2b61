"""Field-level merge rules for album records.

``merge_records`` is pure: no I/O, no clock, and ``merge_records(x, x) == x``.
Rules per field:

- album_id: existing wins, unless it is absent or internal and the incoming
  record supplies an external id.
- artist, title, release_date, country, genre_1, genre_2, tracks: existing
  wins when populated; gaps are filled from incoming.
- cover_image: incoming wins only when strictly larger in bytes.
- summary, summary_source, summary_fetched_at, created_at, updated_at:
  always existing.
"""

from typing import Any

from albumdedupe.models import (
    TEXT_FIELDS,
    AlbumRecord,
    CoverImage,
    is_external_id,
    is_internal_id,
)

__all__ = [
    "merge_records",
    "changed_fields",
    "is_better_cover",
    "choose_album_id",
]


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (tuple, list)):
        return len(value) == 0
    return False


def choose_album_id(existing_id: str | None, incoming_id: str | None) -> str | None:
    """Pick the surviving id, upgrading internal ids to external ones.

    Parameters
    ----------
    existing_id : str | None
        Id of the record being kept.
    incoming_id : str | None
        Id of the record being merged in.

    Returns
    -------
    str | None
        The id the merged record carries.
    """
    if (not existing_id or is_internal_id(existing_id)) and is_external_id(incoming_id):
        return incoming_id
    return existing_id or incoming_id


def is_better_cover(incoming: CoverImage | None, existing: CoverImage | None) -> bool:
    """Return True if ``incoming`` should replace ``existing``.

    Larger images are taken as higher quality; ties keep the existing one.
    """
    if incoming is None or incoming.size == 0:
        return False
    if existing is None:
        return True
    return incoming.size > existing.size


def merge_records(existing: AlbumRecord, incoming: AlbumRecord) -> AlbumRecord:
    """Merge ``incoming`` into ``existing`` without losing known-good values.

    Parameters
    ----------
    existing : AlbumRecord
        The canonical record being kept.
    incoming : AlbumRecord
        A second description of the same album.

    Returns
    -------
    AlbumRecord
        The merged record. ``existing`` is returned unchanged (same values)
        when ``incoming`` adds nothing.
    """
    changes: dict[str, Any] = {}

    album_id = choose_album_id(existing.album_id, incoming.album_id)
    if album_id != existing.album_id:
        changes["album_id"] = album_id

    for name in TEXT_FIELDS:
        if _is_empty(getattr(existing, name)) and not _is_empty(getattr(incoming, name)):
            changes[name] = getattr(incoming, name)

    if _is_empty(existing.tracks) and not _is_empty(incoming.tracks):
        changes["tracks"] = incoming.tracks

    if is_better_cover(incoming.cover_image, existing.cover_image):
        changes["cover_image"] = incoming.cover_image

    # SUMMARY_FIELDS are filled asynchronously elsewhere and never merged.

    if not changes:
        return existing
    return existing.with_changes(**changes)


def changed_fields(before: AlbumRecord, after: AlbumRecord) -> list[str]:
    """List field names whose values differ between two records.

    Parameters
    ----------
    before : AlbumRecord
        Record before the merge.
    after : AlbumRecord
        Record after the merge.

    Returns
    -------
    list[str]
        Changed field names in declaration order.
    """
    return [
        name
        for name in AlbumRecord.field_names()
        if getattr(before, name) != getattr(after, name)
    ]
