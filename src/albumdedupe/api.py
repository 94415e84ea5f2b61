"""Public API for working with album corpora on disk.

This module provides the main public API for albumdedupe, enabling:
- Loading album and exclusion JSONL files (schema-validated)
- Exporting records and reports to JSONL format
- Running a full-corpus duplicate scan from files
- Running the at-insert similarity check against a corpus file
"""

from __future__ import annotations

import binascii
import json
from functools import cache
from importlib.resources import files
from pathlib import Path
from typing import TYPE_CHECKING, Any

import jsonschema

from albumdedupe.audit import AuditLogger
from albumdedupe.engine import DedupeConfig, check_similar, upsert_canonical
from albumdedupe.errors import CorpusFormatError
from albumdedupe.models import AlbumRecord, ExclusionSet
from albumdedupe.reconcile import scan_duplicates
from albumdedupe.store import InMemoryAlbumStore

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from albumdedupe.engine import SimilarCheck
    from albumdedupe.reconcile import ScanReport

__all__ = [
    "load_schema",
    "load_albums",
    "load_exclusions",
    "load_store",
    "write_jsonl",
    "scan_file",
    "check_file",
]


@cache
def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by name.

    Parameters
    ----------
    name : str
        Schema name without suffix (e.g., 'album_record').

    Returns
    -------
    dict[str, Any]
        Parsed JSON schema.
    """
    resource = files("albumdedupe") / "schemas" / f"{name}.schema.json"
    return json.loads(resource.read_text(encoding="utf-8"))


def _iter_rows(path: str | Path, schema_name: str) -> Iterator[tuple[int, dict[str, Any]]]:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    validator = jsonschema.Draft202012Validator(load_schema(schema_name))

    with file_path.open(encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                row = json.loads(line)
            except json.JSONDecodeError as e:
                raise CorpusFormatError(
                    f"{file_path.name}:{line_no}: invalid JSON: {e.msg}",
                    file=str(file_path),
                    line=line_no,
                ) from e

            error = jsonschema.exceptions.best_match(validator.iter_errors(row))
            if error is not None:
                location = "/".join(str(p) for p in error.absolute_path) or "<row>"
                raise CorpusFormatError(
                    f"{file_path.name}:{line_no}: {location}: {error.message}",
                    file=str(file_path),
                    line=line_no,
                )
            yield line_no, row


def load_albums(path: str | Path) -> list[AlbumRecord]:
    """Load album records from a JSONL file.

    Parameters
    ----------
    path : str | Path
        JSONL file, one album object per line. Blank lines are skipped.

    Returns
    -------
    list[AlbumRecord]
        Records in file order.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    CorpusFormatError
        If a row is not JSON, fails schema validation or carries cover
        data that is not valid base64.

    Examples
    --------
        >>> from albumdedupe import load_albums
        >>> albums = load_albums("corpus.jsonl")
    """
    albums = []
    for line_no, row in _iter_rows(path, "album_record"):
        try:
            albums.append(AlbumRecord.from_dict(row))
        except (binascii.Error, ValueError) as e:
            raise CorpusFormatError(
                f"{Path(path).name}:{line_no}: cover_image/data: invalid base64: {e}",
                file=str(path),
                line=line_no,
            ) from e
    return albums


def load_exclusions(path: str | Path) -> ExclusionSet:
    """Load confirmed-distinct pairs from a JSONL file.

    Rows whose two ids are equal are dropped.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    CorpusFormatError
        If a row is not JSON or fails schema validation.
    """
    return ExclusionSet.from_pairs(
        (row["album_id_1"], row["album_id_2"]) for _, row in _iter_rows(path, "exclusion_pair")
    )


def load_store(
    corpus: str | Path,
    exclusions: str | Path | None = None,
) -> InMemoryAlbumStore:
    """Build an in-memory store from corpus and exclusion files.

    Rows are loaded through the canonical upsert, so rows sharing a
    normalized (artist, title) key collapse into one record.

    Parameters
    ----------
    corpus : str | Path
        Album JSONL file.
    exclusions : str | Path | None, optional
        Exclusion JSONL file.

    Returns
    -------
    InMemoryAlbumStore
        Populated store.
    """
    store = InMemoryAlbumStore()
    for record in load_albums(corpus):
        upsert_canonical(store, record)
    if exclusions is not None:
        for id_a, id_b in load_exclusions(exclusions):
            store.add_exclusion_pair(id_a, id_b)
    return store


def write_jsonl(
    items: Iterable[Any],
    path: str | Path,
    *,
    sort_keys: bool = True,
) -> int:
    """Write objects exposing ``to_dict()`` to a JSONL file.

    Output is deterministic with consistent field ordering and UTF-8 encoding.

    Parameters
    ----------
    items : Iterable[Any]
        Records, pairs or anything with a ``to_dict()`` method.
    path : str | Path
        Output file path.
    sort_keys : bool, optional
        Whether to sort dictionary keys for deterministic output,
        by default True.

    Returns
    -------
    int
        Number of lines written.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        for item in items:
            f.write(json.dumps(item.to_dict(), ensure_ascii=False, sort_keys=sort_keys) + "\n")
            count += 1
    return count


def scan_file(
    corpus: str | Path,
    exclusions: str | Path | None = None,
    *,
    threshold: float | None = None,
    top_n: int | None = None,
    log_path: str | Path | None = None,
    config: DedupeConfig | None = None,
) -> ScanReport:
    """Scan a JSONL corpus for likely duplicate pairs.

    Parameters
    ----------
    corpus : str | Path
        Album JSONL file.
    exclusions : str | Path | None, optional
        Exclusion JSONL file.
    threshold : float | None, optional
        Scan threshold; defaults to ``config.scan_threshold``. Clamped to
        [0.03, 0.5].
    top_n : int | None, optional
        Pairs to return; defaults to ``config.scan_top_n``.
    log_path : str | Path | None, optional
        Audit log file; no events are written when omitted.
    config : DedupeConfig | None, optional
        Defaults for threshold and top_n.

    Returns
    -------
    ScanReport
        Totals and ranked pairs.

    Examples
    --------
        >>> from albumdedupe import scan_file
        >>> report = scan_file("corpus.jsonl", threshold=0.2)
        >>> print(report.potential_duplicates)
    """
    cfg = config or DedupeConfig()
    records = load_albums(corpus)
    exclusion_set = load_exclusions(exclusions) if exclusions is not None else ExclusionSet()

    kwargs: dict[str, Any] = {
        "threshold": cfg.scan_threshold if threshold is None else threshold,
        "top_n": cfg.scan_top_n if top_n is None else top_n,
    }

    if log_path is None:
        return scan_duplicates(records, exclusion_set, **kwargs)

    with AuditLogger(Path(log_path)) as audit_logger:
        try:
            return scan_duplicates(records, exclusion_set, audit_logger=audit_logger, **kwargs)
        except Exception as e:
            audit_logger.error(type(e).__name__, str(e), stage="scan")
            raise


def check_file(
    corpus: str | Path,
    artist: str,
    title: str,
    *,
    album_id: str | None = None,
    exclusions: str | Path | None = None,
    config: DedupeConfig | None = None,
) -> SimilarCheck:
    """Run the at-insert similarity check of one album against a corpus file.

    Raises
    ------
    AlbumValidationError
        If artist or title is missing.
    """
    store = load_store(corpus, exclusions)
    return check_similar(store, artist, title, album_id=album_id, config=config)
