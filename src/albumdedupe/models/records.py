"""Canonical album record data models for albumdedupe.

This module defines the schema for album records. Every downstream module
(normalization, scoring, merge, reconciliation, store) consumes records in
this format.
"""

import base64
from dataclasses import asdict, dataclass, fields, replace
from typing import Any

SCHEMA_VERSION = "1.0.0"

# Fields that hold plain display text and follow the fill-if-empty merge rule.
TEXT_FIELDS: tuple[str, ...] = (
    "artist",
    "title",
    "release_date",
    "country",
    "genre_1",
    "genre_2",
)

SUMMARY_FIELDS: tuple[str, ...] = ("summary", "summary_source", "summary_fetched_at")


@dataclass(frozen=True, slots=True)
class CoverImage:
    """Cover image payload.

    Attributes
    ----------
    data : bytes
        Encoded image bytes (never decoded by this library).
    format : str
        Format tag (e.g., 'jpeg', 'png').
    """

    data: bytes
    format: str = "jpeg"

    @property
    def size(self) -> int:
        """Image size in bytes, the quality proxy used by merges."""
        return len(self.data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with base64-encoded data."""
        return {
            "data": base64.b64encode(self.data).decode("ascii"),
            "format": self.format,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CoverImage":
        """Create from dictionary produced by ``to_dict``."""
        return cls(
            data=base64.b64decode(data["data"], validate=True),
            format=data.get("format") or "jpeg",
        )


@dataclass(frozen=True, slots=True)
class AlbumRecord:
    """Canonical album record.

    All fields except the identity triple are optional; ``None`` and the
    empty string both mean "not populated".

    Attributes
    ----------
    album_id : str | None
        External catalog id, or an internal id carrying the reserved prefix.
    artist : str | None
        Artist name (display form).
    title : str | None
        Album title (display form).
    release_date : str | None
        Release date as supplied (year or full date).
    country : str | None
        Country of origin.
    genre_1 : str | None
        Primary genre.
    genre_2 : str | None
        Secondary genre.
    tracks : tuple[str, ...] | None
        Track listing.
    cover_image : CoverImage | None
        Cover art.
    summary : str | None
        Free-text summary, fetched asynchronously.
    summary_source : str | None
        Where the summary came from.
    summary_fetched_at : str | None
        ISO8601 timestamp of the summary fetch.
    created_at : str | None
        ISO8601 creation timestamp.
    updated_at : str | None
        ISO8601 last-update timestamp.
    """

    album_id: str | None = None
    artist: str | None = None
    title: str | None = None
    release_date: str | None = None
    country: str | None = None
    genre_1: str | None = None
    genre_2: str | None = None
    tracks: tuple[str, ...] | None = None
    cover_image: CoverImage | None = None
    summary: str | None = None
    summary_source: str | None = None
    summary_fetched_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Return all field names in declaration order."""
        return tuple(f.name for f in fields(cls))

    def with_changes(self, **changes: Any) -> "AlbumRecord":
        """Return a copy with the given fields replaced.

        Raises
        ------
        TypeError
            If an unknown field name is given.
        """
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-safe dictionary.

        Returns
        -------
        dict[str, Any]
            Dictionary with tracks as a list and cover bytes base64-encoded.
        """
        data = asdict(self)
        data["tracks"] = list(self.tracks) if self.tracks is not None else None
        data["cover_image"] = self.cover_image.to_dict() if self.cover_image else None
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AlbumRecord":
        """Create a record from a dictionary.

        Unknown keys are ignored so rows exported by newer schema versions
        still load.

        Parameters
        ----------
        data : dict[str, Any]
            Dictionary as produced by ``to_dict``.

        Returns
        -------
        AlbumRecord
            Reconstructed record.
        """
        known = set(cls.field_names())
        kwargs = {k: v for k, v in data.items() if k in known}

        tracks = kwargs.get("tracks")
        if tracks is not None:
            kwargs["tracks"] = tuple(tracks)

        cover = kwargs.get("cover_image")
        if isinstance(cover, dict):
            kwargs["cover_image"] = CoverImage.from_dict(cover)

        return cls(**kwargs)
