"""Duplicate candidate detection."""

from albumdedupe.candidates.finder import (
    DEFAULT_AUTO_MERGE_THRESHOLD,
    find_candidates,
    pair_score,
)
from albumdedupe.candidates.models import DuplicateCandidate, PairMatch

__all__ = [
    "DuplicateCandidate",
    "PairMatch",
    "DEFAULT_AUTO_MERGE_THRESHOLD",
    "pair_score",
    "find_candidates",
]
