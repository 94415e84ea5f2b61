"""Tests for CLI module."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from albumdedupe.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Provide Click test CLI runner."""
    return CliRunner()


# ---------------------------------------------------------------------------
# Top-level CLI
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_cli_version_flag(runner: CliRunner) -> None:
    """Test --version flag outputs version string."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "albumdedupe" in result.output


@pytest.mark.unit
def test_cli_help(runner: CliRunner) -> None:
    """Test --help output lists commands."""
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "scan" in result.output
    assert "check" in result.output


@pytest.mark.unit
def test_cli_invalid_command(runner: CliRunner) -> None:
    """Test invalid command returns non-zero exit code."""
    result = runner.invoke(cli, ["invalid-command"])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# scan command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_scan_prints_pairs(runner: CliRunner, corpus_file: Path) -> None:
    """Test scan prints each pair and a summary."""
    result = runner.invoke(cli, ["scan", str(corpus_file)])

    assert result.exit_code == 0
    assert "Found 2 potential duplicate pair(s) among 6 album(s)" in result.output
    assert "[ext-4]" in result.output
    assert "[internal-2]" in result.output


@pytest.mark.unit
def test_scan_writes_output_and_log(
    runner: CliRunner,
    corpus_file: Path,
    exclusions_file: Path,
    tmp_path: Path,
) -> None:
    """Test scan writes pairs and audit events to files."""
    output = tmp_path / "pairs.jsonl"
    log_path = tmp_path / "events.jsonl"

    result = runner.invoke(
        cli,
        [
            "scan",
            str(corpus_file),
            "--exclusions",
            str(exclusions_file),
            "--threshold",
            "0.2",
            "--output",
            str(output),
            "--log",
            str(log_path),
        ],
    )

    assert result.exit_code == 0
    pairs = [json.loads(line) for line in output.read_text().splitlines()]
    assert [p["pair_key"] for p in pairs] == ["ext-1::internal-2"]
    assert log_path.exists()


@pytest.mark.unit
def test_scan_verbose(runner: CliRunner, corpus_file: Path) -> None:
    """Test verbose mode reports the clamped threshold."""
    result = runner.invoke(cli, ["scan", str(corpus_file), "-t", "0.9", "-v"])

    assert result.exit_code == 0
    assert "Threshold: 0.5" in result.output


@pytest.mark.unit
def test_scan_bad_corpus_exits_nonzero(runner: CliRunner, tmp_path: Path) -> None:
    """Test a malformed corpus is reported as an error."""
    bad = tmp_path / "bad.jsonl"
    bad.write_text('{"artist": "A"}\n', encoding="utf-8")

    result = runner.invoke(cli, ["scan", str(bad)])

    assert result.exit_code == 1
    assert "Error" in result.output


@pytest.mark.unit
def test_scan_missing_file(runner: CliRunner, tmp_path: Path) -> None:
    """Test a missing corpus is rejected by argument validation."""
    result = runner.invoke(cli, ["scan", str(tmp_path / "missing.jsonl")])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_check_lists_matches(runner: CliRunner, corpus_file: Path) -> None:
    """Test check prints matches with the auto-merge marker."""
    result = runner.invoke(
        cli,
        ["check", str(corpus_file), "--artist", "Metallica", "--title", "Master of Puppets"],
    )

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "[ext-1]" in lines[0]
    assert "(auto-merge)" in lines[0]
    assert any("[internal-2]" in line for line in lines)


@pytest.mark.unit
def test_check_json_output(runner: CliRunner, corpus_file: Path) -> None:
    """Test --json prints the result as a JSON object."""
    result = runner.invoke(
        cli,
        ["check", str(corpus_file), "-a", "Pink Floyd", "-t", "The Wall", "--json"],
    )

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["has_similar"] is True
    assert {m["album_id"] for m in data["matches"]} == {"ext-4", "ext-5"}


@pytest.mark.unit
def test_check_no_match(runner: CliRunner, corpus_file: Path) -> None:
    """Test check reports when nothing is similar."""
    result = runner.invoke(cli, ["check", str(corpus_file), "-a", "Björk", "-t", "Homogenic"])

    assert result.exit_code == 0
    assert "No similar albums found" in result.output


@pytest.mark.unit
def test_check_requires_artist(runner: CliRunner, corpus_file: Path) -> None:
    """Test missing --artist is a usage error."""
    result = runner.invoke(cli, ["check", str(corpus_file), "--title", "X"])

    assert result.exit_code == 2
