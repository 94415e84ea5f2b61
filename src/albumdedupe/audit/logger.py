"""Structured audit logger for JSONL event logging.

Provides append-only structured event logging to JSONL files with
a persistent file handle. Merges, scans and canonical upserts report
through it so every destructive decision leaves a trail.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from albumdedupe.audit.helpers import generate_run_id
from albumdedupe.audit.models import LogEvent
from albumdedupe.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """JSONL audit logger with persistent file handle.

    Writes structured log events to a JSONL file (one JSON object per line).
    Events are append-only and flushed after each write for durability.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    log_path : Path
        Path to JSONL log file.
    current_stage : str | None
        Current stage name for context.
    """

    def __init__(self, log_path: Path, run_id: str | None = None) -> None:
        """Initialize audit logger and open file handle.

        Parameters
        ----------
        log_path : Path
            Path to JSONL log file.
        run_id : str | None, optional
            Unique run identifier; generated if omitted.
        """
        self.run_id = run_id or generate_run_id()
        self.log_path = Path(log_path)
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def set_stage(self, stage: str | None) -> None:
        """Set current stage context.

        Parameters
        ----------
        stage : str | None
            Stage name or None to clear.
        """
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        rid: str | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "merge_completed").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        stage : str | None, optional
            Stage identifier, uses current_stage if not provided.
        rid : str | None, optional
            Album id if event is record-specific.
        """
        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data or {},
            stage=stage if stage is not None else self.current_stage,
            rid=rid,
        )
        self._write_event(log_event)

    def _write_event(self, event: LogEvent) -> None:
        json.dump(asdict(event), self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def scan_started(self, total_records: int, threshold: float) -> None:
        """Log scan_started event.

        Parameters
        ----------
        total_records : int
            Records eligible for scanning.
        threshold : float
            Clamped similarity threshold in use.
        """
        self.set_stage("scan")
        self.event(
            "scan_started",
            data={"total_records": total_records, "threshold": threshold},
        )

    def scan_finished(
        self,
        duration_seconds: float,
        counters: dict[str, int],
        cancelled: bool = False,
    ) -> None:
        """Log scan_finished (or scan_cancelled) event.

        Parameters
        ----------
        duration_seconds : float
            Scan wall-clock time in seconds.
        counters : dict[str, int]
            Uncapped totals (records, duplicate pairs, exclusions).
        cancelled : bool, optional
            Whether the scan stopped early on request.
        """
        self.event(
            "scan_cancelled" if cancelled else "scan_finished",
            data={"duration_seconds": duration_seconds, "counters": counters},
            level="WARN" if cancelled else "INFO",
        )
        self.set_stage(None)

    def merge_completed(self, keep_id: str, delete_id: str, data: dict[str, Any]) -> None:
        """Log merge_completed event.

        Parameters
        ----------
        keep_id : str
            Surviving album id.
        delete_id : str
            Album id merged away.
        data : dict[str, Any]
            Audit counts (references repointed, records deleted, fields).
        """
        self.event(
            "merge_completed",
            data={"delete_id": delete_id, **data},
            stage="merge",
            rid=keep_id,
        )

    def merge_rejected(self, keep_id: str | None, delete_id: str | None, reason: str) -> None:
        """Log merge_rejected event for a merge refused before any mutation."""
        self.event(
            "merge_rejected",
            data={"delete_id": delete_id, "reason": reason},
            level="WARN",
            stage="merge",
            rid=keep_id,
        )

    def album_upserted(
        self,
        album_id: str,
        was_inserted: bool,
        fields: list[str],
        cover_sha256: str | None = None,
    ) -> None:
        """Log album_upserted event.

        Parameters
        ----------
        album_id : str
            Canonical album id after the upsert.
        was_inserted : bool
            True for a new record, False for a smart merge.
        fields : list[str]
            Fields changed by the smart merge (empty for inserts).
        cover_sha256 : str | None, optional
            Digest of the cover now stored, when the upsert wrote one.
        """
        data: dict[str, Any] = {"was_inserted": was_inserted, "fields_changed": fields}
        if cover_sha256:
            data["cover_sha256"] = cover_sha256
        self.event(
            "album_upserted",
            data=data,
            stage="upsert",
            rid=album_id,
        )

    def exclusion_added(self, id_a: str, id_b: str) -> None:
        """Log exclusion_added event for a pair confirmed distinct."""
        self.event("exclusion_added", data={"album_id_1": id_a, "album_id_2": id_b})

    def error(
        self,
        exception_class: str,
        message: str,
        stage: str | None = None,
        rid: str | None = None,
    ) -> None:
        """Log error event.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        stage : str | None, optional
            Stage where error occurred.
        rid : str | None, optional
            Album id if error is record-specific.
        """
        self.event(
            "error",
            data={"exception_class": exception_class, "message": message},
            stage=stage,
            level="ERROR",
            rid=rid,
        )
