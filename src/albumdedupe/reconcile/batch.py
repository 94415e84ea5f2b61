"""Full-corpus duplicate scan for human review.

Every eligible album is compared with every album after it in a stable
order, so each unordered pair is scored once. The scan is O(n²) and meant
for moderate, human-curated catalogs; larger corpora need a blocking
strategy layered on top.
"""

import math
import threading
import time
from collections.abc import Iterable

from albumdedupe.audit import AuditLogger
from albumdedupe.candidates import pair_score
from albumdedupe.models import AlbumRecord, ExclusionSet, pair_key

from .models import DuplicatePair, ScanReport

__all__ = [
    "DEFAULT_SCAN_THRESHOLD",
    "MIN_SCAN_THRESHOLD",
    "MAX_SCAN_THRESHOLD",
    "DEFAULT_TOP_N",
    "clamp_threshold",
    "eligible_records",
    "scan_duplicates",
]

# Looser than the at-insert threshold: every scan result is reviewed by a
# human before anything is merged.
DEFAULT_SCAN_THRESHOLD = 0.15
MIN_SCAN_THRESHOLD = 0.03
MAX_SCAN_THRESHOLD = 0.5

DEFAULT_TOP_N = 100


def clamp_threshold(value: object) -> float:
    """Clamp a user-supplied threshold into the allowed scan range.

    Parameters
    ----------
    value : object
        Threshold as given (number, numeric string or None).

    Returns
    -------
    float
        Value clamped to [0.03, 0.5]; unparseable input yields 0.15.

    Examples
    --------
        >>> clamp_threshold(0.01)
        0.03
        >>> clamp_threshold("0.9")
        0.5
    """
    try:
        threshold = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return DEFAULT_SCAN_THRESHOLD
    if math.isnan(threshold):
        return DEFAULT_SCAN_THRESHOLD
    return max(MIN_SCAN_THRESHOLD, min(MAX_SCAN_THRESHOLD, threshold))


def _populated(value: str | None) -> bool:
    return bool(value and value.strip())


def eligible_records(records: Iterable[AlbumRecord]) -> list[AlbumRecord]:
    """Select scannable records in stable (artist, title, id) order.

    Records without an id signal a separate data-integrity problem and are
    left out rather than merged.
    """
    selected = [
        r
        for r in records
        if _populated(r.artist) and _populated(r.title) and _populated(r.album_id)
    ]
    selected.sort(key=lambda r: (r.artist, r.title, r.album_id))
    return selected


def scan_duplicates(
    records: Iterable[AlbumRecord],
    exclusions: ExclusionSet | None = None,
    threshold: object = DEFAULT_SCAN_THRESHOLD,
    *,
    top_n: int = DEFAULT_TOP_N,
    cancel_event: threading.Event | None = None,
    audit_logger: AuditLogger | None = None,
) -> ScanReport:
    """Scan a corpus for likely duplicate pairs.

    Parameters
    ----------
    records : Iterable[AlbumRecord]
        Full corpus; ineligible records are filtered out.
    exclusions : ExclusionSet | None, optional
        Pairs confirmed distinct; never reported.
    threshold : object, optional
        Similarity threshold, clamped to [0.03, 0.5], by default 0.15.
    top_n : int, optional
        Presentation cap on returned pairs, by default 100. Counts are
        never capped.
    cancel_event : threading.Event | None, optional
        Checked between outer iterations; when set, the scan stops and
        returns what it found so far.
    audit_logger : AuditLogger | None, optional
        Receives scan_started / scan_finished events.

    Returns
    -------
    ScanReport
        Totals and the highest-confidence pairs.
    """
    clamped = clamp_threshold(threshold)
    exclusion_set = exclusions if exclusions is not None else ExclusionSet()
    albums = eligible_records(records)

    if audit_logger:
        audit_logger.scan_started(total_records=len(albums), threshold=clamped)
    started = time.perf_counter()

    found: dict[str, DuplicatePair] = {}
    cancelled = False

    for i, album in enumerate(albums):
        if cancel_event is not None and cancel_event.is_set():
            cancelled = True
            break

        for other in albums[i + 1 :]:
            if album.album_id == other.album_id:
                continue
            if exclusion_set.contains(album.album_id, other.album_id):
                continue

            match = pair_score(album, other, threshold=clamped, auto_merge_threshold=None)
            if not match.is_potential_match:
                continue

            key = pair_key(album.album_id, other.album_id)
            if key in found:
                continue
            found[key] = DuplicatePair(
                pair_key=key,
                album_1=album,
                album_2=other,
                confidence=match.confidence,
                artist_score=match.artist_score,
                title_score=match.title_score,
            )

    ranked = sorted(found.values(), key=lambda p: -p.confidence)

    report = ScanReport(
        total_records=len(albums),
        potential_duplicates=len(ranked),
        excluded_pairs=len(exclusion_set),
        pairs=tuple(ranked[: max(top_n, 0)]),
        threshold=clamped,
        cancelled=cancelled,
    )

    if audit_logger:
        audit_logger.scan_finished(
            duration_seconds=time.perf_counter() - started,
            counters={
                "total_records": report.total_records,
                "potential_duplicates": report.potential_duplicates,
                "excluded_pairs": report.excluded_pairs,
            },
            cancelled=cancelled,
        )

    return report
