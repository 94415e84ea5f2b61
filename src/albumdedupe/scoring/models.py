"""Data models for pairwise string similarity."""

from dataclasses import asdict, dataclass
from typing import Any

# Reason tags, in the order the thresholds are checked.
REASON_EXACT = "exact_normalized"
REASON_VERY_SIMILAR_SPELLING = "very_similar_spelling"
REASON_SAME_WORDS_REORDERED = "same_words_reordered"
REASON_SIMILAR_SPELLING = "similar_spelling"
REASON_PARTIAL_WORD_MATCH = "partial_word_match"
REASON_FUZZY = "fuzzy_match"


@dataclass(frozen=True, slots=True)
class SimilarityScore:
    """Blended similarity between two strings.

    Attributes
    ----------
    score : float
        Blended score (0.0-1.0).
    reason : str
        Diagnostic tag; never influences ``score``.
    edit_ratio : float
        Levenshtein ratio on the comparison forms.
    token_ratio : float
        Jaccard overlap of the token sets.
    """

    score: float
    reason: str
    edit_ratio: float
    token_ratio: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
