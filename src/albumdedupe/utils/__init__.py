"""Common utility functions for albumdedupe.

Timestamp and hashing helpers shared by the audit logger, the store and
the merge workflows.
"""

from albumdedupe.utils.hashing import calculate_bytes_sha256, format_sha256
from albumdedupe.utils.timestamps import get_iso_timestamp

__all__ = [
    "get_iso_timestamp",
    "calculate_bytes_sha256",
    "format_sha256",
]
