"""Fuzzy duplicate detection and safe merging for album catalogs.

This package provides:
- Data models (albumdedupe.models) — album records, ids, exclusion pairs
- Normalization (albumdedupe.normalize) — text normalization for comparison
- Scoring (albumdedupe.scoring) — blended edit/token similarity
- Candidates (albumdedupe.candidates) — at-insert duplicate candidates
- Merge (albumdedupe.merge) — field arbitration and transactional merges
- Reconcile (albumdedupe.reconcile) — full-corpus duplicate scans
- Store (albumdedupe.store) — record store protocol and in-memory store
- Engine (albumdedupe.engine) — configuration and canonical workflows
- Audit (albumdedupe.audit) — JSONL audit events
- CLI (albumdedupe.cli) — command-line interface
- Public API (albumdedupe.api) — file-based convenience functions
"""

__version__ = "0.1.0"

from albumdedupe.api import (
    check_file,
    load_albums,
    load_exclusions,
    load_store,
    scan_file,
    write_jsonl,
)
from albumdedupe.candidates import find_candidates
from albumdedupe.engine import DedupeConfig, check_similar, mark_distinct, upsert_canonical
from albumdedupe.errors import (
    AlbumValidationError,
    CorpusFormatError,
    DedupeError,
    DuplicateKeyError,
    RecordNotFoundError,
    SelfMergeError,
)
from albumdedupe.merge import MergeExecutor, merge_records
from albumdedupe.models import AlbumRecord, CoverImage, ExclusionSet
from albumdedupe.normalize import normalize_for_comparison
from albumdedupe.reconcile import scan_duplicates
from albumdedupe.scoring import similarity
from albumdedupe.store import InMemoryAlbumStore

__all__ = [
    "__version__",
    "AlbumRecord",
    "CoverImage",
    "ExclusionSet",
    "DedupeConfig",
    "InMemoryAlbumStore",
    "MergeExecutor",
    "normalize_for_comparison",
    "similarity",
    "find_candidates",
    "merge_records",
    "scan_duplicates",
    "upsert_canonical",
    "check_similar",
    "mark_distinct",
    "load_albums",
    "load_exclusions",
    "load_store",
    "write_jsonl",
    "scan_file",
    "check_file",
    "DedupeError",
    "AlbumValidationError",
    "SelfMergeError",
    "RecordNotFoundError",
    "DuplicateKeyError",
    "CorpusFormatError",
]
