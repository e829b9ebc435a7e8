"""Case-insensitive substring search over the aggregate store."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from models import CompositeRecord, HitKind, SearchHit


def search(records: Iterable[CompositeRecord], query: str) -> list[SearchHit]:
    """Return one hit per field containing ``query``, ignoring case.

    Records are scanned in store order. Within a record fields are checked as:
    name, each member, each location, first album, creation year. There is no
    dedupe or ranking, and an empty query matches every field.
    """
    needle = query.lower()
    hits: list[SearchHit] = []
    for record in records:
        for kind, value in _searchable_fields(record):
            if needle in value.lower():
                hits.append(SearchHit(kind=kind, value=value, record_id=record.id))
    return hits


def _searchable_fields(record: CompositeRecord) -> Iterator[tuple[HitKind, str]]:
    yield HitKind.ARTIST, record.name
    for member in record.members:
        yield HitKind.MEMBER, member
    for location in record.locations:
        yield HitKind.LOCATION, location
    yield HitKind.FIRST_ALBUM, record.first_album
    yield HitKind.CREATION_DATE, str(record.creation_date)
