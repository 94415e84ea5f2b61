"""Engine configuration and canonical album workflows."""

from albumdedupe.engine.canonical import (
    SimilarCheck,
    UpsertResult,
    check_similar,
    mark_distinct,
    upsert_canonical,
)
from albumdedupe.engine.config import DedupeConfig

__all__ = [
    "DedupeConfig",
    "UpsertResult",
    "SimilarCheck",
    "upsert_canonical",
    "check_similar",
    "mark_distinct",
]
