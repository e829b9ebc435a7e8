"""Fan-out fetch of the four Groupie Trackers sub-resources and aggregate build."""

from __future__ import annotations

import logging
from concurrent import futures
from typing import Any, Callable, NamedTuple

from join import join_records
from models import ArtistRecord, DateSet, LocationSet, RelationSet, RootManifest
from source_client import (
    api_url,
    fetch_json,
    parse_artists,
    parse_dates,
    parse_locations,
    parse_manifest,
    parse_relations,
)
from store import AggregateStore

LOGGER = logging.getLogger(__name__)

# Error reporting order; independent of which fetch finishes first.
SOURCE_ORDER = ("artists", "locations", "dates", "relations")


class SourceCollections(NamedTuple):
    artists: list[ArtistRecord]
    locations: list[LocationSet]
    dates: list[DateSet]
    relations: list[RelationSet]


def fetch_manifest(root_url: str | None = None) -> RootManifest:
    """Fetch the root document listing the four sub-resource URLs."""
    return fetch_json(root_url or api_url(), parse_manifest)


def fetch_sources(manifest: RootManifest) -> SourceCollections:
    """Fetch all four sub-resources concurrently and wait for every one of them.

    Each fetch runs on its own worker and returns its own collection; nothing
    is shared between workers. Once all four have finished, the first failure
    in ``SOURCE_ORDER`` is raised. Other failures are logged.
    """
    jobs: dict[str, tuple[str, Callable[[Any], Any]]] = {
        "artists": (manifest.artists, parse_artists),
        "locations": (manifest.locations, parse_locations),
        "dates": (manifest.dates, parse_dates),
        "relations": (manifest.relation, parse_relations),
    }

    with futures.ThreadPoolExecutor(max_workers=len(jobs), thread_name_prefix="groupie-fetch") as executor:
        pending = {name: executor.submit(fetch_json, url, parse) for name, (url, parse) in jobs.items()}
        futures.wait(pending.values(), return_when=futures.ALL_COMPLETED)

    errors = {name: pending[name].exception() for name in SOURCE_ORDER}
    failed = [name for name in SOURCE_ORDER if errors[name] is not None]
    if failed:
        for name in failed:
            LOGGER.warning("Fetch of %s failed: %s", name, errors[name])
        raise errors[failed[0]]

    collections = SourceCollections(**{name: pending[name].result() for name in SOURCE_ORDER})
    LOGGER.info(
        "Fetched sources: artists=%s locations=%s dates=%s relations=%s",
        len(collections.artists),
        len(collections.locations),
        len(collections.dates),
        len(collections.relations),
    )
    return collections


def gather(root_url: str | None = None) -> AggregateStore:
    """Build the aggregate store from the remote API.

    Fails fast if the root document cannot be fetched. Any sub-resource
    failure or a length mismatch between the collections raises before a
    store exists, so callers never see a partial aggregate.

    Raises:
        FetchFailed: the root document or one of the sub-resources failed.
        JoinMisaligned: the sub-resources disagree in length.
    """
    manifest = fetch_manifest(root_url)
    LOGGER.info("Fetched root manifest from %s", root_url or api_url())

    collections = fetch_sources(manifest)
    store = AggregateStore(
        join_records(collections.artists, collections.locations, collections.dates, collections.relations)
    )
    LOGGER.info("Aggregate store ready with %s records", len(store))
    return store
