"""Shared data types for albumdedupe.

This package contains the album record schema, identifier helpers and the
exclusion pair snapshot consumed across the engine.

Domain-specific types live closer to their consumers:
- Scoring types → albumdedupe.scoring.models
- Candidate types → albumdedupe.candidates.models
- Merge results → albumdedupe.merge.models
"""

from albumdedupe.models.identifiers import (
    INTERNAL_ID_PREFIX,
    ExclusionSet,
    IdGenerator,
    SequentialIdGenerator,
    UuidIdGenerator,
    is_external_id,
    is_internal_id,
    pair_key,
)
from albumdedupe.models.records import (
    SCHEMA_VERSION,
    SUMMARY_FIELDS,
    TEXT_FIELDS,
    AlbumRecord,
    CoverImage,
)

__all__ = [
    # Schema version
    "SCHEMA_VERSION",
    # Record models
    "AlbumRecord",
    "CoverImage",
    "TEXT_FIELDS",
    "SUMMARY_FIELDS",
    # Identifiers
    "INTERNAL_ID_PREFIX",
    "IdGenerator",
    "UuidIdGenerator",
    "SequentialIdGenerator",
    "is_internal_id",
    "is_external_id",
    "pair_key",
    "ExclusionSet",
]
