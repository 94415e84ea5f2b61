"""Tests for field-level album merge rules."""

from collections.abc import Callable

import pytest

from albumdedupe.merge import changed_fields, choose_album_id, is_better_cover, merge_records
from albumdedupe.models import TEXT_FIELDS, AlbumRecord, CoverImage

# ---------------------------------------------------------------------------
# choose_album_id
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("existing", "incoming", "expected"),
    [
        ("ext-1", "ext-2", "ext-1"),
        ("ext-1", "internal-abc", "ext-1"),
        ("internal-abc", "ext-2", "ext-2"),
        ("internal-abc", "internal-def", "internal-abc"),
        (None, "ext-2", "ext-2"),
        (None, "internal-def", "internal-def"),
        ("ext-1", None, "ext-1"),
        (None, None, None),
    ],
)
def test_choose_album_id(existing: str | None, incoming: str | None, expected: str | None) -> None:
    """External ids win over internal or missing ones; otherwise existing wins."""
    assert choose_album_id(existing, incoming) == expected


# ---------------------------------------------------------------------------
# is_better_cover
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_cover_only_upgrades_when_strictly_larger() -> None:
    """Larger replaces, equal or smaller keeps existing."""
    small = CoverImage(data=b"x" * 10)
    large = CoverImage(data=b"x" * 20)
    same = CoverImage(data=b"y" * 10, format="png")

    assert is_better_cover(large, small)
    assert not is_better_cover(small, large)
    assert not is_better_cover(same, small)
    assert is_better_cover(small, None)
    assert not is_better_cover(None, small)
    assert not is_better_cover(CoverImage(data=b""), None)


# ---------------------------------------------------------------------------
# merge_records
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_merge_fills_gaps_without_overwriting(make_album: Callable[..., AlbumRecord]) -> None:
    """Populated fields survive; empty ones are filled from incoming."""
    existing = make_album(
        "ext-1",
        release_date="1986",
        country="",
        genre_1="Thrash Metal",
        genre_2=None,
    )
    incoming = make_album(
        "ext-2",
        artist="METALLICA",
        title="Master Of Puppets (Remastered)",
        release_date="1986-03-03",
        country="United States",
        genre_1="Heavy Metal",
        genre_2="Speed Metal",
    )

    merged = merge_records(existing, incoming)

    assert merged.album_id == "ext-1"
    assert merged.artist == "Metallica"
    assert merged.title == "Master of Puppets"
    assert merged.release_date == "1986"
    assert merged.country == "United States"
    assert merged.genre_1 == "Thrash Metal"
    assert merged.genre_2 == "Speed Metal"


@pytest.mark.unit
def test_merge_tracks_fill_only_when_empty(make_album: Callable[..., AlbumRecord]) -> None:
    """Existing track listings are kept; empty listings are filled."""
    with_tracks = make_album(tracks=["Battery", "Master of Puppets"])
    more_tracks = make_album("ext-2", tracks=["Battery", "Master of Puppets", "Orion"])
    no_tracks = make_album(tracks=[])

    assert merge_records(with_tracks, more_tracks).tracks == ("Battery", "Master of Puppets")
    assert merge_records(no_tracks, more_tracks).tracks == more_tracks.tracks


@pytest.mark.unit
def test_merge_cover_upgrade(make_album: Callable[..., AlbumRecord]) -> None:
    """Cover is taken from incoming only when strictly larger."""
    existing = make_album(cover_size=100)

    assert merge_records(existing, make_album("ext-2", cover_size=200)).cover_image.size == 200
    assert merge_records(existing, make_album("ext-2", cover_size=50)).cover_image.size == 100
    assert merge_records(existing, make_album("ext-2")).cover_image.size == 100


@pytest.mark.unit
def test_merge_never_touches_summary_or_timestamps(
    make_album: Callable[..., AlbumRecord],
) -> None:
    """Summary and timestamp fields always come from existing."""
    existing = make_album(created_at="2020-01-01T00:00:00Z")
    incoming = make_album(
        "ext-2",
        summary="A thrash classic.",
        summary_source="wiki",
        summary_fetched_at="2024-01-01T00:00:00Z",
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-01T00:00:00Z",
    )

    merged = merge_records(existing, incoming)

    assert merged.summary is None
    assert merged.summary_source is None
    assert merged.summary_fetched_at is None
    assert merged.created_at == "2020-01-01T00:00:00Z"
    assert merged.updated_at is None


@pytest.mark.unit
def test_merge_external_id_upgrade_adopts_cover(
    make_album: Callable[..., AlbumRecord],
) -> None:
    """Keeping an external record absorbs the internal record's cover."""
    keep = make_album("ext-77")
    loser = make_album("internal-abc", cover_size=64)

    merged = merge_records(keep, loser)

    assert merged.album_id == "ext-77"
    assert merged.cover_image == loser.cover_image


@pytest.mark.unit
def test_merge_upgrades_internal_id(make_album: Callable[..., AlbumRecord]) -> None:
    """An internal id is replaced by an incoming external id."""
    merged = merge_records(make_album("internal-abc"), make_album("ext-5"))

    assert merged.album_id == "ext-5"


@pytest.mark.unit
def test_merge_with_itself_is_identity(make_album: Callable[..., AlbumRecord]) -> None:
    """merge(x, x) == x and returns the same object when nothing changes."""
    record = make_album(release_date="1986", tracks=["Battery"], cover_size=10)

    merged = merge_records(record, record)

    assert merged == record
    assert merged is record
    assert changed_fields(record, merged) == []


@pytest.mark.unit
@pytest.mark.parametrize("field_name", TEXT_FIELDS)
def test_merge_never_empties_a_text_field(
    make_album: Callable[..., AlbumRecord],
    field_name: str,
) -> None:
    """A populated text field is never replaced by an empty value."""
    existing = make_album(**{"album_id": "ext-1", field_name: "Known"})
    for empty in (None, "", "   "):
        incoming = make_album(**{"album_id": "ext-2", field_name: empty})
        assert getattr(merge_records(existing, incoming), field_name) == "Known"


@pytest.mark.unit
def test_changed_fields_lists_differences(make_album: Callable[..., AlbumRecord]) -> None:
    """changed_fields reports fields in declaration order."""
    before = make_album("internal-1")
    after = merge_records(before, make_album("ext-1", country="US", cover_size=5))

    assert changed_fields(before, after) == ["album_id", "country", "cover_image"]
