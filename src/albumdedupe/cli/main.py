"""Command-line interface for albumdedupe.

Provides CLI commands for duplicate scans and at-insert similarity checks.
"""

import importlib.metadata
import json
import sys

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("albumdedupe")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development


@click.group()
@click.version_option(version=__version__, prog_name="albumdedupe")
def cli() -> None:
    """Fuzzy duplicate detection and safe merging for album catalogs.

    Use 'albumdedupe COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("corpus", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--exclusions",
    "-x",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSONL file of album pairs confirmed distinct",
)
@click.option(
    "--threshold",
    "-t",
    type=float,
    default=None,
    help="Similarity threshold, clamped to [0.03, 0.5] (default: 0.15)",
)
@click.option(
    "--top-n",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum pairs to report (default: 100)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write reported pairs to this JSONL file",
)
@click.option(
    "--log",
    "log_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append audit events to this JSONL file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def scan(
    corpus: str,
    exclusions: str | None,
    threshold: float | None,
    top_n: int | None,
    output: str | None,
    log_path: str | None,
    verbose: bool,
) -> None:
    """Scan CORPUS for likely duplicate album pairs.

    CORPUS is a JSONL file with one album per line. Pairs listed in the
    exclusions file are never reported.

    Examples
    --------
        albumdedupe scan albums.jsonl
        albumdedupe scan albums.jsonl -x distinct.jsonl -t 0.2 -o pairs.jsonl
    """
    from albumdedupe.api import scan_file, write_jsonl

    if verbose:
        click.echo(f"Scanning: {corpus}", err=True)
        if exclusions:
            click.echo(f"  Exclusions: {exclusions}", err=True)

    try:
        report = scan_file(
            corpus,
            exclusions,
            threshold=threshold,
            top_n=top_n,
            log_path=log_path,
        )

        if verbose:
            click.echo(f"  Threshold: {report.threshold}", err=True)
            click.echo(f"  Eligible records: {report.total_records}", err=True)
            click.echo(f"  Excluded pairs: {report.excluded_pairs}", err=True)

        if output:
            write_jsonl(report.pairs, output)
        else:
            for pair in report.pairs:
                click.echo(
                    f"{round(pair.confidence * 100):3d}%  "
                    f"{pair.album_1.artist} - {pair.album_1.title} [{pair.album_1.album_id}]  <->  "
                    f"{pair.album_2.artist} - {pair.album_2.title} [{pair.album_2.album_id}]"
                )

        click.secho(
            f"✓ Found {report.potential_duplicates} potential duplicate pair(s) "
            f"among {report.total_records} album(s)",
            fg="green",
        )

    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)


@cli.command()
@click.argument("corpus", type=click.Path(exists=True, dir_okay=False))
@click.option("--artist", "-a", required=True, help="Artist of the new album")
@click.option("--title", "-t", required=True, help="Title of the new album")
@click.option("--album-id", default=None, help="Id of the new album, if it has one")
@click.option(
    "--exclusions",
    "-x",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSONL file of album pairs confirmed distinct",
)
@click.option(
    "--threshold",
    type=click.FloatRange(0.0, 1.0),
    default=0.1,
    help="Minimum confidence for a suggestion (default: 0.1)",
)
@click.option(
    "--max-results",
    type=click.IntRange(min=1),
    default=3,
    help="Maximum suggestions (default: 3)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def check(
    corpus: str,
    artist: str,
    title: str,
    album_id: str | None,
    exclusions: str | None,
    threshold: float,
    max_results: int,
    as_json: bool,
) -> None:
    """Check whether an album about to be added already exists in CORPUS.

    Examples
    --------
        albumdedupe check albums.jsonl --artist Metallica --title "Master of Puppets"
        albumdedupe check albums.jsonl -a "Beatles" -t "Abbey Road" --json
    """
    from albumdedupe.api import check_file
    from albumdedupe.engine import DedupeConfig

    try:
        config = DedupeConfig(
            insert_threshold=threshold,
            auto_merge_threshold=max(threshold, 0.98),
            max_results=max_results,
        )
        result = check_file(
            corpus,
            artist,
            title,
            album_id=album_id,
            exclusions=exclusions,
            config=config,
        )
    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, sort_keys=True))
        return

    if not result.has_similar:
        click.secho("✓ No similar albums found", fg="green")
        return

    for match in result.matches:
        flag = "  (auto-merge)" if match.should_auto_merge else ""
        click.echo(
            f"{round(match.confidence * 100):3d}%  "
            f"{match.candidate.artist} - {match.candidate.title} "
            f"[{match.candidate.album_id}]{flag}"
        )


if __name__ == "__main__":
    cli()
