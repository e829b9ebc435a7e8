"""Positional join of the four source collections into composite records."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from models import ArtistRecord, CompositeRecord, DateSet, LocationSet, RelationSet

LOGGER = logging.getLogger(__name__)


class JoinMisaligned(RuntimeError):
    """The source collections disagree in length and cannot be joined by position."""

    def __init__(self, lengths: dict[str, int]) -> None:
        detail = ", ".join(f"{name}={count}" for name, count in lengths.items())
        super().__init__(f"cannot join collections of unequal length: {detail}")
        self.lengths = lengths


def join_records(
    artists: Sequence[ArtistRecord],
    locations: Sequence[LocationSet],
    dates: Sequence[DateSet],
    relations: Sequence[RelationSet],
) -> list[CompositeRecord]:
    """Merge element i of every collection into one record, in artist order.

    Raises:
        JoinMisaligned: the four collections do not all have the same length.
    """
    lengths = {
        "artists": len(artists),
        "locations": len(locations),
        "dates": len(dates),
        "relations": len(relations),
    }
    if len(set(lengths.values())) != 1:
        raise JoinMisaligned(lengths)

    records: list[CompositeRecord] = []
    for artist, location_set, date_set, relation_set in zip(artists, locations, dates, relations):
        _warn_on_id_drift(artist, location_set, date_set, relation_set)
        records.append(
            CompositeRecord(
                id=artist.id,
                name=artist.name,
                image=artist.image,
                members=artist.members,
                creation_date=artist.creation_date,
                first_album=artist.first_album,
                locations=location_set.locations,
                dates=date_set.dates,
                relation=relation_set.dates_locations,
            )
        )

    LOGGER.info("Joined %s composite records", len(records))
    return records


def _warn_on_id_drift(
    artist: ArtistRecord,
    location_set: LocationSet,
    date_set: DateSet,
    relation_set: RelationSet,
) -> None:
    # Correlation is positional; declared ids are only a cross-check.
    drifted = {
        name: entry.id
        for name, entry in (("locations", location_set), ("dates", date_set), ("relations", relation_set))
        if entry.id != artist.id
    }
    if drifted:
        LOGGER.warning(
            "Declared ids disagree with artist id=%s at the same position: %s",
            artist.id,
            drifted,
        )
