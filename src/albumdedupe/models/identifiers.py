"""Album identifiers, id generation and exclusion pair snapshots.

Internal ids are generated for albums that arrive without an external
catalog id. They carry a reserved prefix so they can never be confused with
an external id.
"""

import itertools
import threading
import uuid
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Protocol

INTERNAL_ID_PREFIX = "internal-"

# Separator used in sorted pair keys; never occurs in generated ids.
PAIR_KEY_SEPARATOR = "::"


def is_internal_id(album_id: str | None) -> bool:
    """Return True if the id was generated internally."""
    return bool(album_id) and album_id.startswith(INTERNAL_ID_PREFIX)


def is_external_id(album_id: str | None) -> bool:
    """Return True if the id is present and externally sourced."""
    return bool(album_id) and not album_id.startswith(INTERNAL_ID_PREFIX)


class IdGenerator(Protocol):
    """Capability that produces fresh internal album ids."""

    def __call__(self) -> str:
        """Return a new internal id."""
        ...


class UuidIdGenerator:
    """Random internal ids: ``internal-<uuid4>``."""

    def __call__(self) -> str:
        """Return a new random internal id."""
        return f"{INTERNAL_ID_PREFIX}{uuid.uuid4()}"


class SequentialIdGenerator:
    """Deterministic internal ids: ``internal-000001``, ``internal-000002``...

    Thread-safe; intended for tests and reproducible imports.
    """

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        """Return the next internal id in sequence."""
        with self._lock:
            n = next(self._counter)
        return f"{INTERNAL_ID_PREFIX}{n:06d}"


def pair_key(id_a: str, id_b: str) -> str:
    """Build the order-independent key for a pair of ids.

    Parameters
    ----------
    id_a : str
        First album id.
    id_b : str
        Second album id.

    Returns
    -------
    str
        ``"<smaller>::<larger>"``.
    """
    first, second = sorted((id_a, id_b))
    return f"{first}{PAIR_KEY_SEPARATOR}{second}"


@dataclass(frozen=True)
class ExclusionSet:
    """Immutable snapshot of human-confirmed distinct album pairs.

    Pairs are stored as sorted tuples so membership holds in either
    ordering. How fresh the snapshot is belongs to the caller.

    Attributes
    ----------
    pairs : frozenset[tuple[str, str]]
        Sorted id pairs.
    """

    pairs: frozenset[tuple[str, str]] = field(default_factory=frozenset)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "ExclusionSet":
        """Build a snapshot from id pairs given in any order.

        Self-pairs are dropped; an album is never distinct from itself.
        """
        normalized = frozenset(
            (min(a, b), max(a, b)) for a, b in pairs if a and b and a != b
        )
        return cls(pairs=normalized)

    def contains(self, id_a: str | None, id_b: str | None) -> bool:
        """Return True if the pair is excluded, in either ordering."""
        if not id_a or not id_b:
            return False
        return (id_a, id_b) in self.pairs or (id_b, id_a) in self.pairs

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        return self.contains(item[0], item[1])

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(sorted(self.pairs))
