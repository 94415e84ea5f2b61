"""Data models for duplicate candidates.

Candidates are transient: they drive a review step or trigger a merge and
are never persisted.
"""

from dataclasses import dataclass
from typing import Any

from albumdedupe.models import AlbumRecord
from albumdedupe.scoring import SimilarityScore

__all__ = ["PairMatch", "DuplicateCandidate"]


@dataclass(frozen=True, slots=True)
class PairMatch:
    """Score of one album against another.

    Attributes
    ----------
    confidence : float
        ``0.4 * artist + 0.6 * title`` (0.0-1.0).
    artist_score : SimilarityScore
        Artist similarity.
    title_score : SimilarityScore
        Title similarity.
    is_potential_match : bool
        Both sub-scores exceed 0.5 and confidence meets the threshold.
    should_auto_merge : bool
        Potential match whose confidence meets the auto-merge bound.
    """

    confidence: float
    artist_score: SimilarityScore
    title_score: SimilarityScore
    is_potential_match: bool
    should_auto_merge: bool


@dataclass(frozen=True, slots=True)
class DuplicateCandidate:
    """A corpus album that may duplicate the album being checked.

    Attributes
    ----------
    candidate : AlbumRecord
        The matching corpus record.
    confidence : float
        Blended confidence (0.0-1.0).
    artist_score : SimilarityScore
        Artist similarity.
    title_score : SimilarityScore
        Title similarity.
    should_auto_merge : bool
        Whether confidence meets the auto-merge bound. Acting on it is the
        caller's policy.
    """

    candidate: AlbumRecord
    confidence: float
    artist_score: SimilarityScore
    title_score: SimilarityScore
    should_auto_merge: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to a review-friendly dictionary (percentages, no cover bytes)."""
        return {
            "album_id": self.candidate.album_id,
            "artist": self.candidate.artist,
            "title": self.candidate.title,
            "has_cover": self.candidate.cover_image is not None,
            "confidence": round(self.confidence * 100),
            "artist_score": round(self.artist_score.score * 100),
            "title_score": round(self.title_score.score * 100),
            "should_auto_merge": self.should_auto_merge,
        }
