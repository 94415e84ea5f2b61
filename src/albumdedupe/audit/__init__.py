"""Audit logging for albumdedupe.

Main Components
---------------
- AuditLogger: JSONL event logger used by scans, merges and upserts
- generate_run_id: run identifier factory
"""

from albumdedupe.audit.helpers import generate_run_id
from albumdedupe.audit.logger import AuditLogger
from albumdedupe.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
]
