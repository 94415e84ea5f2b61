"""Pytest configuration and fixtures for test suite."""

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from albumdedupe.models import AlbumRecord, CoverImage, SequentialIdGenerator  # noqa: E402
from albumdedupe.store import InMemoryAlbumStore  # noqa: E402


@pytest.fixture
def make_album() -> Callable[..., AlbumRecord]:
    """Factory for album records with minimal boilerplate.

    ``cover_size`` builds a cover of that many bytes; every other keyword
    maps straight onto an ``AlbumRecord`` field.
    """

    def _factory(
        album_id: str | None = "ext-001",
        artist: str | None = "Metallica",
        title: str | None = "Master of Puppets",
        *,
        cover_size: int | None = None,
        **fields: Any,
    ) -> AlbumRecord:
        if cover_size is not None:
            fields["cover_image"] = CoverImage(data=b"\xff" * cover_size)
        if isinstance(fields.get("tracks"), list):
            fields["tracks"] = tuple(fields["tracks"])
        return AlbumRecord(album_id=album_id, artist=artist, title=title, **fields)

    return _factory


@pytest.fixture
def store() -> InMemoryAlbumStore:
    """Empty store with deterministic internal ids."""
    return InMemoryAlbumStore(id_generator=SequentialIdGenerator())


CORPUS_ROWS: list[dict[str, Any]] = [
    {
        "album_id": "ext-1",
        "artist": "Metallica",
        "title": "Master of Puppets",
        "release_date": "1986",
    },
    {"album_id": "internal-2", "artist": "Metalica", "title": "Master of Puppets", "country": "US"},
    {"album_id": "ext-3", "artist": "Metallica", "title": "Ride the Lightning"},
    {"album_id": "ext-4", "artist": "Pink Floyd", "title": "The Wall", "tracks": ["In the Flesh?"]},
    {"album_id": "ext-5", "artist": "Pink Floyd", "title": "Wall (Remastered)"},
    {"album_id": "ext-6", "artist": "Radiohead", "title": "OK Computer", "unknown_key": 1},
]


def _write_rows(path: Path, rows: list[dict[str, Any]]) -> Path:
    """Write dictionaries as JSONL and return the path."""
    path.write_text("".join(json.dumps(row) + "\n" for row in rows), encoding="utf-8")
    return path


@pytest.fixture
def corpus_file(tmp_path: Path) -> Path:
    """JSONL corpus with two duplicate pairs and unrelated albums."""
    return _write_rows(tmp_path / "albums.jsonl", CORPUS_ROWS)


@pytest.fixture
def exclusions_file(tmp_path: Path) -> Path:
    """JSONL exclusions marking the Pink Floyd pair distinct."""
    return _write_rows(
        tmp_path / "distinct.jsonl",
        [{"album_id_1": "ext-5", "album_id_2": "ext-4"}],
    )
