"""Data models for full-corpus duplicate scans."""

from dataclasses import dataclass, field
from typing import Any

from albumdedupe.models import AlbumRecord
from albumdedupe.scoring import SimilarityScore


def _album_summary(album: AlbumRecord) -> dict[str, Any]:
    """Fields a reviewer needs to tell two albums apart."""
    return {
        "album_id": album.album_id,
        "artist": album.artist,
        "title": album.title,
        "release_date": album.release_date or None,
        "genre_1": album.genre_1 or None,
        "genre_2": album.genre_2 or None,
        "track_count": len(album.tracks) if album.tracks else None,
        "has_cover": album.cover_image is not None,
    }


@dataclass(frozen=True, slots=True)
class DuplicatePair:
    """A scored pair of stored albums surfaced for review.

    Attributes
    ----------
    pair_key : str
        Sorted id pair ("id_a::id_b"); unique within a scan.
    album_1 : AlbumRecord
        Earlier album in scan order.
    album_2 : AlbumRecord
        Later album in scan order.
    confidence : float
        Blended confidence (0.0-1.0).
    artist_score : SimilarityScore
        Artist similarity.
    title_score : SimilarityScore
        Title similarity.
    """

    pair_key: str
    album_1: AlbumRecord
    album_2: AlbumRecord
    confidence: float
    artist_score: SimilarityScore
    title_score: SimilarityScore

    def to_dict(self) -> dict[str, Any]:
        """Convert to review dictionary with integer percentages."""
        return {
            "pair_key": self.pair_key,
            "album_1": _album_summary(self.album_1),
            "album_2": _album_summary(self.album_2),
            "confidence": round(self.confidence * 100),
            "artist_score": round(self.artist_score.score * 100),
            "title_score": round(self.title_score.score * 100),
        }


@dataclass(frozen=True)
class ScanReport:
    """Result of a full-corpus duplicate scan.

    Attributes
    ----------
    total_records : int
        Records eligible for scanning.
    potential_duplicates : int
        Total duplicate pairs found (not capped).
    excluded_pairs : int
        Exclusion pairs in the snapshot used.
    pairs : tuple[DuplicatePair, ...]
        Highest-confidence pairs, capped for presentation.
    threshold : float
        Clamped threshold actually used.
    cancelled : bool
        True if the scan stopped early on request; counts cover only the
        rows scanned before that.
    """

    total_records: int
    potential_duplicates: int
    excluded_pairs: int
    pairs: tuple[DuplicatePair, ...] = field(default_factory=tuple)
    threshold: float = 0.15
    cancelled: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_records": self.total_records,
            "potential_duplicates": self.potential_duplicates,
            "excluded_pairs": self.excluded_pairs,
            "threshold": self.threshold,
            "cancelled": self.cancelled,
            "pairs": [p.to_dict() for p in self.pairs],
        }
