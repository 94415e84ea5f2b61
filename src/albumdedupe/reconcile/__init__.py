"""Offline full-corpus duplicate reconciliation."""

from albumdedupe.reconcile.batch import (
    DEFAULT_SCAN_THRESHOLD,
    DEFAULT_TOP_N,
    MAX_SCAN_THRESHOLD,
    MIN_SCAN_THRESHOLD,
    clamp_threshold,
    eligible_records,
    scan_duplicates,
)
from albumdedupe.reconcile.models import DuplicatePair, ScanReport

__all__ = [
    "DuplicatePair",
    "ScanReport",
    "DEFAULT_SCAN_THRESHOLD",
    "DEFAULT_TOP_N",
    "MIN_SCAN_THRESHOLD",
    "MAX_SCAN_THRESHOLD",
    "clamp_threshold",
    "eligible_records",
    "scan_duplicates",
]
