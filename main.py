"""CLI entrypoint: gather the Groupie Trackers aggregate and query it."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any

from dotenv import load_dotenv

from fetcher import gather
from search import search
from store import AggregateStore, RecordNotFound

EXIT_GATHER_FAILED = 1
EXIT_INVALID_ID = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Fetch, join and query Groupie Trackers artist data")
    parser.add_argument("--api-url", default=None, help="Root manifest URL (defaults to GROUPIE_API_URL or the public API)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="Print every joined artist record")

    show = subparsers.add_parser("show", help="Print one artist record by id")
    show.add_argument("id", help="Artist id (1-based)")

    find = subparsers.add_parser("search", help="Case-insensitive substring search")
    find.add_argument("query", nargs="?", default="", help="Text to look for; empty matches everything")

    return parser.parse_args(argv)


def _emit(payload: Any) -> None:
    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def run(args: argparse.Namespace, store: AggregateStore) -> int:
    """Answer one command against an already built store and return the exit code."""
    if args.command == "list":
        _emit([record.to_dict() for record in store.all()])
        return 0

    if args.command == "show":
        try:
            record = store.lookup_by_id(int(args.id))
        except (ValueError, RecordNotFound):
            print(f"invalid artist id: {args.id}", file=sys.stderr)
            return EXIT_INVALID_ID
        _emit(record.to_dict())
        return 0

    hits = search(store, args.query)
    logging.info("Search query=%r hits=%s", args.query, len(hits))
    _emit([hit.to_dict() for hit in hits])
    return 0


def main(argv: list[str] | None = None) -> int:
    """Initialize config, build the store, and answer the command."""
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    args = parse_args(argv)

    try:
        store = gather(args.api_url)
    except Exception as exc:  # any startup failure means there is nothing to serve
        logging.exception("Failed to gather data: %s", exc)
        return EXIT_GATHER_FAILED

    return run(args, store)


if __name__ == "__main__":
    sys.exit(main())
