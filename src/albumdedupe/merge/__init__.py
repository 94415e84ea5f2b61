"""Canonical merge: field arbitration and merge execution."""

from albumdedupe.merge.executor import MergeExecutor
from albumdedupe.merge.field_merge import (
    changed_fields,
    choose_album_id,
    is_better_cover,
    merge_records,
)
from albumdedupe.merge.models import MergeResult

__all__ = [
    "merge_records",
    "changed_fields",
    "choose_album_id",
    "is_better_cover",
    "MergeExecutor",
    "MergeResult",
]
