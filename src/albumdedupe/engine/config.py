"""Engine configuration dataclass."""

from dataclasses import asdict, dataclass
from typing import Any


def _check_unit(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")


@dataclass
class DedupeConfig:
    """Thresholds for at-insert checks and full-corpus scans.

    Attributes
    ----------
    insert_threshold : float
        Minimum confidence for a similar-album suggestion at insert time
        (default: 0.1).
    auto_merge_threshold : float | None
        Confidence at which a suggestion is flagged safe to merge without
        review (default: 0.98). None never flags.
    max_results : int
        Suggestions returned by an at-insert check (default: 3).
    scan_threshold : float
        Threshold for full-corpus scans before clamping (default: 0.15).
    scan_top_n : int
        Pairs returned by a scan (default: 100).
    """

    insert_threshold: float = 0.1
    auto_merge_threshold: float | None = 0.98
    max_results: int = 3
    scan_threshold: float = 0.15
    scan_top_n: int = 100

    def __post_init__(self) -> None:
        """Validate thresholds and limits."""
        _check_unit("insert_threshold", self.insert_threshold)
        _check_unit("scan_threshold", self.scan_threshold)

        if self.auto_merge_threshold is not None:
            _check_unit("auto_merge_threshold", self.auto_merge_threshold)
            if self.auto_merge_threshold < self.insert_threshold:
                raise ValueError(
                    f"auto_merge_threshold ({self.auto_merge_threshold}) must not be "
                    f"below insert_threshold ({self.insert_threshold})"
                )

        if self.max_results < 1:
            raise ValueError(f"max_results must be >= 1, got {self.max_results}")

        if self.scan_top_n < 1:
            raise ValueError(f"scan_top_n must be >= 1, got {self.scan_top_n}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
