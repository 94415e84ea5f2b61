"""Tests for the public API module."""

import json
from pathlib import Path

import pytest

from albumdedupe import (
    AlbumRecord,
    CorpusFormatError,
    check_file,
    load_albums,
    load_exclusions,
    load_store,
    scan_file,
    write_jsonl,
)
from albumdedupe.engine import DedupeConfig

# ---------------------------------------------------------------------------
# load_albums / load_exclusions
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_load_albums_returns_records(corpus_file: Path) -> None:
    """Rows become AlbumRecords; unknown keys are ignored."""
    albums = load_albums(corpus_file)

    assert len(albums) == 6
    assert all(isinstance(a, AlbumRecord) for a in albums)
    assert albums[0].release_date == "1986"
    assert albums[3].tracks == ("In the Flesh?",)


@pytest.mark.unit
def test_load_albums_skips_blank_lines(tmp_path: Path) -> None:
    """Blank lines are ignored."""
    path = tmp_path / "albums.jsonl"
    path.write_text('\n{"artist": "A", "title": "B"}\n\n', encoding="utf-8")

    assert [a.title for a in load_albums(path)] == ["B"]


@pytest.mark.unit
def test_load_albums_missing_file(tmp_path: Path) -> None:
    """A missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_albums(tmp_path / "missing.jsonl")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("line", "fragment"),
    [
        ("{not json", "invalid JSON"),
        ('{"artist": "A"}', "title"),
        ('{"artist": "A", "title": 5}', "title"),
        ('{"artist": "A", "title": "B", "tracks": "one"}', "tracks"),
        ('["A", "B"]', "object"),
        ('{"artist": "A", "title": "B", "cover_image": {"data": "abc"}}', "base64"),
        ('{"artist": "A", "title": "B", "cover_image": {"data": "a!b?"}}', "base64"),
    ],
)
def test_load_albums_rejects_bad_rows(tmp_path: Path, line: str, fragment: str) -> None:
    """Malformed rows raise CorpusFormatError with file and line."""
    path = tmp_path / "albums.jsonl"
    path.write_text('{"artist": "A", "title": "Fine"}\n' + line + "\n", encoding="utf-8")

    with pytest.raises(CorpusFormatError, match=fragment) as excinfo:
        load_albums(path)

    assert excinfo.value.line == 2
    assert excinfo.value.file == str(path)


@pytest.mark.unit
def test_load_exclusions(exclusions_file: Path, tmp_path: Path) -> None:
    """Exclusion rows load as a symmetric snapshot."""
    exclusions = load_exclusions(exclusions_file)

    assert exclusions.contains("ext-4", "ext-5")
    assert exclusions.contains("ext-5", "ext-4")

    bad = tmp_path / "bad.jsonl"
    bad.write_text('{"album_id_1": "ext-1"}\n', encoding="utf-8")
    with pytest.raises(CorpusFormatError):
        load_exclusions(bad)


@pytest.mark.unit
def test_load_store_collapses_exact_duplicates(tmp_path: Path) -> None:
    """Rows sharing a normalized key become one canonical record."""
    path = tmp_path / "albums.jsonl"
    rows = [
        {"album_id": "internal-1", "artist": "Metallica", "title": "Load"},
        {"album_id": "ext-1", "artist": "METALLICA", "title": "load", "country": "US"},
    ]
    path.write_text("".join(json.dumps(r) + "\n" for r in rows), encoding="utf-8")

    store = load_store(path)

    (album,) = store.list_albums()
    assert album.album_id == "ext-1"
    assert album.country == "US"


# ---------------------------------------------------------------------------
# write_jsonl
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_write_jsonl_roundtrip(corpus_file: Path, tmp_path: Path) -> None:
    """Written records load back unchanged."""
    albums = load_albums(corpus_file)
    out = tmp_path / "out" / "albums.jsonl"

    count = write_jsonl(albums, out)

    assert count == 6
    assert load_albums(out) == albums
    first = out.read_text(encoding="utf-8").splitlines()[0]
    assert list(json.loads(first)) == sorted(json.loads(first))


# ---------------------------------------------------------------------------
# scan_file / check_file
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_scan_file(corpus_file: Path) -> None:
    """Scanning a file reports both duplicate pairs."""
    report = scan_file(corpus_file)

    assert report.total_records == 6
    assert report.threshold == 0.15
    assert {p.pair_key for p in report.pairs} == {"ext-1::internal-2", "ext-4::ext-5"}


@pytest.mark.unit
def test_scan_file_with_exclusions_and_log(
    corpus_file: Path,
    exclusions_file: Path,
    tmp_path: Path,
) -> None:
    """Exclusions are honoured and audit events written."""
    log_path = tmp_path / "logs" / "events.jsonl"

    report = scan_file(corpus_file, exclusions_file, threshold=0.01, log_path=log_path)

    assert [p.pair_key for p in report.pairs] == ["ext-1::internal-2"]
    assert report.excluded_pairs == 1
    assert report.threshold == 0.03
    events = [json.loads(line) for line in log_path.read_text().splitlines()]
    assert [e["event"] for e in events] == ["scan_started", "scan_finished"]


@pytest.mark.unit
def test_scan_file_uses_config_top_n(corpus_file: Path) -> None:
    """top_n falls back to the config value."""
    report = scan_file(corpus_file, config=DedupeConfig(scan_top_n=1))

    assert len(report.pairs) == 1
    assert report.potential_duplicates == 2


@pytest.mark.unit
def test_check_file(corpus_file: Path) -> None:
    """The at-insert check finds the stored near-duplicates."""
    result = check_file(corpus_file, "Metallica", "Master of Puppets (Deluxe Edition)")

    assert result.has_similar
    assert result.should_auto_merge
    assert result.matches[0].candidate.album_id == "ext-1"
