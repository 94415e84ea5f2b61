"""Pairwise similarity scoring for album and artist names."""

from albumdedupe.scoring.comparators import (
    blend_weights,
    edit_ratio,
    jaccard_similarity,
    levenshtein_distance,
    similarity,
)
from albumdedupe.scoring.models import SimilarityScore

__all__ = [
    "SimilarityScore",
    "levenshtein_distance",
    "edit_ratio",
    "jaccard_similarity",
    "blend_weights",
    "similarity",
]
