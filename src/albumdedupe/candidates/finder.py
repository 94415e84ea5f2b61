"""Duplicate candidate detection for a single album against a corpus.

Artist and title are scored independently and blended. A low score on
either field vetoes the match, so "same artist, different album" pairs are
never proposed however close the artist names are.
"""

from collections.abc import Iterable

from albumdedupe.models import AlbumRecord, ExclusionSet
from albumdedupe.scoring import similarity

from .models import DuplicateCandidate, PairMatch

__all__ = [
    "ARTIST_WEIGHT",
    "TITLE_WEIGHT",
    "FIELD_VETO",
    "DEFAULT_AUTO_MERGE_THRESHOLD",
    "pair_score",
    "find_candidates",
]

ARTIST_WEIGHT = 0.4
TITLE_WEIGHT = 0.6

# Each sub-score must be strictly above this for a pairing to count.
FIELD_VETO = 0.5

DEFAULT_AUTO_MERGE_THRESHOLD = 0.98

_NO_EXCLUSIONS = ExclusionSet()


def pair_score(
    album_a: AlbumRecord,
    album_b: AlbumRecord,
    *,
    threshold: float = 0.6,
    auto_merge_threshold: float | None = DEFAULT_AUTO_MERGE_THRESHOLD,
) -> PairMatch:
    """Score two albums against each other.

    Parameters
    ----------
    album_a : AlbumRecord
        First album.
    album_b : AlbumRecord
        Second album.
    threshold : float, optional
        Minimum confidence for a potential match, by default 0.6.
    auto_merge_threshold : float | None, optional
        Stricter bound for ``should_auto_merge``; None disables the flag,
        by default 0.98.

    Returns
    -------
    PairMatch
        Confidence, sub-scores and match flags.
    """
    artist_score = similarity(album_a.artist, album_b.artist)
    title_score = similarity(album_a.title, album_b.title)

    confidence = ARTIST_WEIGHT * artist_score.score + TITLE_WEIGHT * title_score.score

    is_potential_match = (
        artist_score.score > FIELD_VETO
        and title_score.score > FIELD_VETO
        and confidence >= threshold
    )
    should_auto_merge = (
        is_potential_match
        and auto_merge_threshold is not None
        and confidence >= auto_merge_threshold
    )

    return PairMatch(
        confidence=confidence,
        artist_score=artist_score,
        title_score=title_score,
        is_potential_match=is_potential_match,
        should_auto_merge=should_auto_merge,
    )


def find_candidates(
    new_album: AlbumRecord,
    corpus: Iterable[AlbumRecord],
    *,
    threshold: float = 0.7,
    max_results: int = 5,
    exclude_pairs: ExclusionSet = _NO_EXCLUSIONS,
    auto_merge_threshold: float | None = DEFAULT_AUTO_MERGE_THRESHOLD,
) -> list[DuplicateCandidate]:
    """Rank corpus albums that may duplicate ``new_album``.

    Parameters
    ----------
    new_album : AlbumRecord
        Album being checked. Its id may be None for a not-yet-stored album.
    corpus : Iterable[AlbumRecord]
        Albums to compare against.
    threshold : float, optional
        Minimum confidence to include, by default 0.7.
    max_results : int, optional
        Maximum number of results, by default 5.
    exclude_pairs : ExclusionSet, optional
        Pairs confirmed distinct; skipped in either id ordering.
    auto_merge_threshold : float | None, optional
        Bound for the ``should_auto_merge`` flag, by default 0.98.

    Returns
    -------
    list[DuplicateCandidate]
        Matches sorted by descending confidence, at most ``max_results``.
        Ties keep corpus order.
    """
    if max_results <= 0:
        return []

    results: list[DuplicateCandidate] = []

    for candidate in corpus:
        if new_album.album_id and candidate.album_id == new_album.album_id:
            continue
        if exclude_pairs.contains(new_album.album_id, candidate.album_id):
            continue

        match = pair_score(
            new_album,
            candidate,
            threshold=threshold,
            auto_merge_threshold=auto_merge_threshold,
        )
        if not match.is_potential_match:
            continue

        results.append(
            DuplicateCandidate(
                candidate=candidate,
                confidence=match.confidence,
                artist_score=match.artist_score,
                title_score=match.title_score,
                should_auto_merge=match.should_auto_merge,
            )
        )

    results.sort(key=lambda c: -c.confidence)
    return results[:max_results]
