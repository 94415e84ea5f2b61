"""Data models for album merges."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class MergeResult:
    """Audit summary of one executed keep/delete merge.

    Attributes
    ----------
    keep_id : str
        Surviving album id.
    delete_id : str
        Album id merged away.
    references_repointed : int
        Dependent references moved from ``delete_id`` to ``keep_id``.
    records_deleted : int
        Records removed (0 when ``delete_id`` was already gone).
    fields_changed : tuple[str, ...]
        Fields of the kept record filled or upgraded by the merge.
    exclusions_removed : int
        Stale exclusion pairs that mentioned ``delete_id``.
    """

    keep_id: str
    delete_id: str
    references_repointed: int = 0
    records_deleted: int = 0
    fields_changed: tuple[str, ...] = field(default_factory=tuple)
    exclusions_removed: int = 0

    @property
    def metadata_merged(self) -> bool:
        """Whether the kept record gained any field."""
        return bool(self.fields_changed)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["fields_changed"] = list(self.fields_changed)
        data["metadata_merged"] = self.metadata_merged
        return data
