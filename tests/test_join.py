from __future__ import annotations

import logging

import pytest

from join import JoinMisaligned, join_records
from models import ArtistRecord, DateSet, LocationSet, RelationSet, freeze_relation


def _artist(artist_id: int) -> ArtistRecord:
    return ArtistRecord(
        id=artist_id,
        name=f"Band {artist_id}",
        image=f"https://example.test/{artist_id}.jpeg",
        members=(f"Member {artist_id}",),
        creation_date=1990 + artist_id,
        first_album="01-01-2000",
    )


def _sources(ids: list[int]):
    return (
        [_artist(i) for i in ids],
        [LocationSet(id=i, locations=(f"city-{i}",)) for i in ids],
        [DateSet(id=i, dates=(f"date-{i}",)) for i in ids],
        [RelationSet(id=i, dates_locations=freeze_relation({f"city-{i}": [f"date-{i}"]})) for i in ids],
    )


def test_join_matches_positions() -> None:
    records = join_records(*_sources([1, 2, 3]))

    assert len(records) == 3
    for position, record in enumerate(records, start=1):
        assert record.id == position
        assert record.name == f"Band {position}"
        assert record.locations == (f"city-{position}",)
        assert record.dates == (f"date-{position}",)
        assert record.relation[f"city-{position}"] == (f"date-{position}",)


def test_join_keeps_declared_ids_and_artist_order() -> None:
    records = join_records(*_sources([7, 3, 42]))
    assert [record.id for record in records] == [7, 3, 42]


def test_join_of_empty_collections_is_empty() -> None:
    assert join_records([], [], [], []) == []


@pytest.mark.parametrize("short", ["artists", "locations", "dates", "relations"])
def test_join_rejects_unequal_lengths(short: str) -> None:
    names = ("artists", "locations", "dates", "relations")
    sources = list(_sources([1, 2, 3]))
    sources[names.index(short)] = sources[names.index(short)][:2]

    with pytest.raises(JoinMisaligned) as excinfo:
        join_records(*sources)

    assert excinfo.value.lengths[short] == 2
    assert f"{short}=2" in str(excinfo.value)


def test_join_warns_when_declared_ids_drift(caplog: pytest.LogCaptureFixture) -> None:
    artists, locations, dates, relations = _sources([1, 2])
    locations = [LocationSet(id=9, locations=("elsewhere",)), locations[1]]

    with caplog.at_level(logging.WARNING, logger="join"):
        records = join_records(artists, locations, dates, relations)

    assert records[0].locations == ("elsewhere",)
    assert "artist id=1" in caplog.text
