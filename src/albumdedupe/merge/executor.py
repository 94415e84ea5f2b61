"""Execution of confirmed keep/delete album merges.

A merge collapses two canonical records into one:

1. Fetch both records (the kept one must exist; the deleted one may
   already be gone after a retried merge).
2. Smart-merge the deleted record's fields into the kept record.
3. Repoint dependent references to the kept id.
4. Delete the loser.
5. Drop exclusion pairs that mention the deleted id.

All writes run inside a single store transaction, so no reader sees the
loser deleted while references still point at it, or the reverse.
"""

from typing import NoReturn

from albumdedupe.audit import AuditLogger
from albumdedupe.errors import AlbumValidationError, RecordNotFoundError, SelfMergeError
from albumdedupe.store import AlbumStore

from .field_merge import changed_fields, merge_records
from .models import MergeResult

__all__ = ["MergeExecutor"]


class MergeExecutor:
    """Applies human- or policy-confirmed merges against a store.

    Parameters
    ----------
    store : AlbumStore
        Record store providing the transactional boundary.
    audit_logger : AuditLogger | None, optional
        Receives merge_completed / merge_rejected events.
    """

    def __init__(self, store: AlbumStore, audit_logger: AuditLogger | None = None) -> None:
        self.store = store
        self.audit_logger = audit_logger

    def _reject(self, keep_id: str | None, delete_id: str | None, error: Exception) -> NoReturn:
        if self.audit_logger:
            self.audit_logger.merge_rejected(keep_id, delete_id, str(error))
        raise error

    def merge_albums(self, keep_id: str, delete_id: str) -> MergeResult:
        """Merge ``delete_id`` into ``keep_id``.

        Parameters
        ----------
        keep_id : str
            Album id that survives. The surviving record keeps this id.
        delete_id : str
            Album id merged away.

        Returns
        -------
        MergeResult
            Counts of references repointed, records deleted and fields
            changed.

        Raises
        ------
        AlbumValidationError
            If either id is missing.
        SelfMergeError
            If both ids are equal. Nothing is mutated.
        RecordNotFoundError
            If ``keep_id`` does not resolve. Nothing is mutated.
        """
        if not keep_id or not delete_id:
            self._reject(
                keep_id, delete_id, AlbumValidationError("keep_id and delete_id are required")
            )
        if keep_id == delete_id:
            self._reject(keep_id, delete_id, SelfMergeError(keep_id))

        with self.store.transaction():
            keep_record = self.store.get(keep_id)
            if keep_record is None:
                self._reject(keep_id, delete_id, RecordNotFoundError(keep_id))
            delete_record = self.store.get(delete_id)

            fields: list[str] = []
            if delete_record is not None:
                merged = merge_records(keep_record, delete_record)
                # The surviving id is keep_id; references are repointed to it.
                fields = [f for f in changed_fields(keep_record, merged) if f != "album_id"]

            references = self.store.repoint_references(delete_id, keep_id)
            deleted = self.store.delete(delete_id)

            # After the delete, so the loser's normalized key is free.
            if fields:
                self.store.update(keep_id, {f: getattr(merged, f) for f in fields})

            exclusions = self.store.remove_exclusion_pairs_mentioning(delete_id)

        result = MergeResult(
            keep_id=keep_id,
            delete_id=delete_id,
            references_repointed=references,
            records_deleted=deleted,
            fields_changed=tuple(fields),
            exclusions_removed=exclusions,
        )

        if self.audit_logger:
            self.audit_logger.merge_completed(keep_id, delete_id, result.to_dict())

        return result
