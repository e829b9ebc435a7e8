"""HTTP+JSON source client and payload parsers for the Groupie Trackers API."""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, TypeVar

import requests

from models import (
    ArtistRecord,
    DateSet,
    LocationSet,
    RelationSet,
    RootManifest,
    freeze_relation,
)

DEFAULT_API_URL = "https://groupietrackers.herokuapp.com/api"

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class PayloadShapeError(ValueError):
    """Decoded JSON does not have the shape the parser expects."""


class FetchFailed(RuntimeError):
    """Network or decode failure while retrieving one URL."""

    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"fetch failed for {url}: {cause}")
        self.url = url
        self.cause = cause


def api_url() -> str:
    """Root manifest URL; GROUPIE_API_URL overrides the public endpoint."""
    return os.getenv("GROUPIE_API_URL") or DEFAULT_API_URL


def request_timeout() -> float | None:
    """Per-request timeout from GROUPIE_REQUEST_TIMEOUT, or None for the transport default."""
    raw = os.getenv("GROUPIE_REQUEST_TIMEOUT")
    if not raw:
        return None
    return float(raw)


def fetch_json(url: str, parse: Callable[[Any], T]) -> T:
    """GET ``url``, decode the JSON body and hand it to ``parse``.

    One attempt only. Transport errors, HTTP error statuses, invalid JSON and
    payloads ``parse`` rejects all surface as ``FetchFailed``.
    """
    if not url:
        raise ValueError("url must be a non-empty string")

    LOGGER.debug("Fetching %s", url)
    try:
        response = requests.get(url, timeout=request_timeout())
        response.raise_for_status()
        return parse(response.json())
    except (requests.RequestException, ValueError) as exc:
        # requests' JSONDecodeError and PayloadShapeError are both ValueErrors.
        raise FetchFailed(url, exc) from exc


def parse_manifest(payload: Any) -> RootManifest:
    body = _require_dict(payload, "root document")
    return RootManifest(
        artists=_require_url(body, "artists"),
        locations=_require_url(body, "locations"),
        dates=_require_url(body, "dates"),
        relation=_require_url(body, "relation"),
    )


def parse_artists(payload: Any) -> list[ArtistRecord]:
    """Parse the artists array into records, keeping wire order."""
    if not isinstance(payload, list):
        raise PayloadShapeError("artists payload: expected a list")

    parsed: list[ArtistRecord] = []
    for item in payload:
        entry = _require_dict(item, "artist")
        parsed.append(
            ArtistRecord(
                id=_require_int(entry, "id"),
                name=_require_str(entry, "name"),
                image=_require_str(entry, "image"),
                members=_require_str_list(entry, "members"),
                creation_date=_require_int(entry, "creationDate"),
                first_album=_require_str(entry, "firstAlbum"),
            )
        )
    return parsed


def parse_locations(payload: Any) -> list[LocationSet]:
    return [
        LocationSet(id=_require_int(entry, "id"), locations=_require_str_list(entry, "locations"))
        for entry in _index_entries(payload, "locations")
    ]


def parse_dates(payload: Any) -> list[DateSet]:
    return [
        DateSet(id=_require_int(entry, "id"), dates=_require_str_list(entry, "dates"))
        for entry in _index_entries(payload, "dates")
    ]


def parse_relations(payload: Any) -> list[RelationSet]:
    parsed: list[RelationSet] = []
    for entry in _index_entries(payload, "relation"):
        raw = _require_dict(entry.get("datesLocations"), "relation.datesLocations")
        for date, places in raw.items():
            if not _is_str_list(places):
                raise PayloadShapeError(f"relation.datesLocations[{date!r}]: expected a list of strings")
        parsed.append(RelationSet(id=_require_int(entry, "id"), dates_locations=freeze_relation(raw)))
    return parsed


def _index_entries(payload: Any, label: str) -> list[dict[str, Any]]:
    """Return the elements of the ``index`` array wrapping a bulk sub-resource."""
    body = _require_dict(payload, f"{label} payload")
    index = body.get("index")
    if not isinstance(index, list):
        raise PayloadShapeError(f"{label} payload: expected an 'index' list")
    return [_require_dict(item, f"{label} entry") for item in index]


def _require_dict(value: Any, label: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise PayloadShapeError(f"{label}: expected a JSON object")
    return value


def _require_url(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    if not isinstance(value, str) or not value.strip():
        raise PayloadShapeError(f"root document: '{key}' must be a non-empty string")
    return value.strip()


def _require_str(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    if not isinstance(value, str):
        raise PayloadShapeError(f"'{key}': expected a string")
    return value


def _require_int(body: dict[str, Any], key: str) -> int:
    value = body.get(key)
    # bool is an int subclass; JSON true/false is not an id.
    if not isinstance(value, int) or isinstance(value, bool):
        raise PayloadShapeError(f"'{key}': expected an integer")
    return value


def _require_str_list(body: dict[str, Any], key: str) -> tuple[str, ...]:
    value = body.get(key)
    if not _is_str_list(value):
        raise PayloadShapeError(f"'{key}': expected a list of strings")
    return tuple(value)


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)
