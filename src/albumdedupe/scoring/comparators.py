"""String comparators for duplicate scoring.

This module provides pure, deterministic functions for comparing artist and
album names. Two independent heuristics are blended:

- Levenshtein edit ratio, which catches typos and small spelling changes.
- Jaccard token overlap, which catches reordered words.

All functions are symmetric, locale-independent and never raise.
"""

from rapidfuzz.distance import Levenshtein

from albumdedupe.normalize import normalize_for_comparison

from .models import (
    REASON_EXACT,
    REASON_FUZZY,
    REASON_PARTIAL_WORD_MATCH,
    REASON_SAME_WORDS_REORDERED,
    REASON_SIMILAR_SPELLING,
    REASON_VERY_SIMILAR_SPELLING,
    SimilarityScore,
)

__all__ = [
    "levenshtein_distance",
    "edit_ratio",
    "jaccard_similarity",
    "blend_weights",
    "similarity",
]


def levenshtein_distance(a: str, b: str) -> int:
    """Compute the Levenshtein edit distance between two strings.

    Parameters
    ----------
    a : str
        First string.
    b : str
        Second string.

    Returns
    -------
    int
        Minimum number of single-character insertions, deletions and
        substitutions turning ``a`` into ``b``.
    """
    return Levenshtein.distance(a or "", b or "")


def edit_ratio(a: str, b: str) -> float:
    """Similarity ratio derived from Levenshtein distance.

    Parameters
    ----------
    a : str
        First string.
    b : str
        Second string.

    Returns
    -------
    float
        ``1 - distance / max(len(a), len(b))``.

    Notes
    -----
    Both empty returns 1.0; exactly one empty returns 0.0.
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    return Levenshtein.normalized_similarity(a, b)


def jaccard_similarity(set_a: frozenset[str] | set[str], set_b: frozenset[str] | set[str]) -> float:
    """Calculate Jaccard similarity between two token sets.

    Parameters
    ----------
    set_a : frozenset[str] | set[str]
        First set.
    set_b : frozenset[str] | set[str]
        Second set.

    Returns
    -------
    float
        Jaccard similarity (0.0-1.0).

    Notes
    -----
    Jaccard = |A ∩ B| / |A ∪ B|

    **Edge case**: When both sets are empty, returns 1.0; "both missing" is
    treated as agreement. Callers that must not match empty fields filter
    them out before scoring.
    """
    if not set_a and not set_b:
        return 1.0
    if not set_a or not set_b:
        return 0.0

    return len(set_a & set_b) / len(set_a | set_b)


def blend_weights(min_tokens: int) -> tuple[float, float]:
    """Return (edit_weight, token_weight) for the shorter string's token count.

    Single words lean almost entirely on edit distance since token overlap
    is all-or-nothing there; longer names give word order more say.
    """
    if min_tokens <= 1:
        return 0.95, 0.05
    if min_tokens == 2:
        return 0.7, 0.3
    return 0.6, 0.4


def _reason(edit: float, overlap: float) -> str:
    if edit > 0.9:
        return REASON_VERY_SIMILAR_SPELLING
    if overlap > 0.8:
        return REASON_SAME_WORDS_REORDERED
    if edit > 0.7:
        return REASON_SIMILAR_SPELLING
    if overlap > 0.6:
        return REASON_PARTIAL_WORD_MATCH
    return REASON_FUZZY


def similarity(a: object, b: object) -> SimilarityScore:
    """Score the similarity of two artist or album names.

    Parameters
    ----------
    a : object
        First name (``None`` is treated as empty).
    b : object
        Second name.

    Returns
    -------
    SimilarityScore
        Blended score with diagnostic reason and both component ratios.

    Notes
    -----
    Two names with the same comparison form score exactly 1.0, including
    two empty names. The function is symmetric in its arguments.
    """
    norm_a = normalize_for_comparison(a)
    norm_b = normalize_for_comparison(b)

    if norm_a == norm_b:
        return SimilarityScore(score=1.0, reason=REASON_EXACT, edit_ratio=1.0, token_ratio=1.0)

    tokens_a = frozenset(norm_a.split())
    tokens_b = frozenset(norm_b.split())

    edit = edit_ratio(norm_a, norm_b)
    overlap = jaccard_similarity(tokens_a, tokens_b)

    edit_weight, token_weight = blend_weights(min(len(tokens_a), len(tokens_b)))
    score = edit * edit_weight + overlap * token_weight

    return SimilarityScore(
        score=score,
        reason=_reason(edit, overlap),
        edit_ratio=edit,
        token_ratio=overlap,
    )
