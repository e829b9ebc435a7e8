"""Shared typed models for the aggregate pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class RootManifest:
    """Sub-resource URLs advertised by the API root document."""

    artists: str
    locations: str
    dates: str
    relation: str


@dataclass(frozen=True, slots=True)
class ArtistRecord:
    id: int
    name: str
    image: str
    members: tuple[str, ...]
    creation_date: int
    first_album: str


@dataclass(frozen=True, slots=True)
class LocationSet:
    id: int
    locations: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DateSet:
    id: int
    dates: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class RelationSet:
    id: int
    dates_locations: Mapping[str, tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class CompositeRecord:
    """One artist joined with its locations, dates and relation entries.

    Sequences are tuples and ``relation`` is a read-only mapping, so a record
    handed out by the store cannot be changed by its readers.
    """

    id: int
    name: str
    image: str
    members: tuple[str, ...]
    creation_date: int
    first_album: str
    locations: tuple[str, ...]
    dates: tuple[str, ...]
    relation: Mapping[str, tuple[str, ...]]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict keyed the way the remote API names fields."""
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "members": list(self.members),
            "creationDate": self.creation_date,
            "firstAlbum": self.first_album,
            "locations": list(self.locations),
            "dates": list(self.dates),
            "relation": {date: list(places) for date, places in self.relation.items()},
        }


class HitKind(str, Enum):
    """Field family a search hit was found in."""

    ARTIST = "artist"
    MEMBER = "member"
    LOCATION = "location"
    FIRST_ALBUM = "first-album"
    CREATION_DATE = "creation-date"


@dataclass(frozen=True, slots=True)
class SearchHit:
    kind: HitKind
    value: str
    record_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "value": self.value, "id": self.record_id}


def freeze_relation(raw: Mapping[str, Any]) -> Mapping[str, tuple[str, ...]]:
    """Copy a date -> locations mapping into a read-only view with tuple values."""
    return MappingProxyType({date: tuple(places) for date, places in raw.items()})
