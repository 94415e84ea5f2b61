"""Tests for engine configuration."""

import pytest

from albumdedupe.engine import DedupeConfig


@pytest.mark.unit
def test_defaults() -> None:
    """Defaults match the at-insert and scan policies."""
    config = DedupeConfig()

    assert config.to_dict() == {
        "insert_threshold": 0.1,
        "auto_merge_threshold": 0.98,
        "max_results": 3,
        "scan_threshold": 0.15,
        "scan_top_n": 100,
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"insert_threshold": -0.1}, "insert_threshold"),
        ({"insert_threshold": 1.5}, "insert_threshold"),
        ({"scan_threshold": 2.0}, "scan_threshold"),
        ({"auto_merge_threshold": 1.01}, "auto_merge_threshold"),
        ({"insert_threshold": 0.9, "auto_merge_threshold": 0.8}, "must not be below"),
        ({"max_results": 0}, "max_results"),
        ({"scan_top_n": 0}, "scan_top_n"),
    ],
)
def test_invalid_values_raise(kwargs: dict, message: str) -> None:
    """Out-of-range values raise ValueError naming the field."""
    with pytest.raises(ValueError, match=message):
        DedupeConfig(**kwargs)


@pytest.mark.unit
def test_auto_merge_can_be_disabled() -> None:
    """auto_merge_threshold=None skips its checks."""
    config = DedupeConfig(insert_threshold=0.9, auto_merge_threshold=None)

    assert config.auto_merge_threshold is None
