"""Read-only in-memory store of composite records."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from models import CompositeRecord


class RecordNotFound(LookupError):
    """No record carries the requested id."""

    def __init__(self, record_id: Any) -> None:
        super().__init__(f"no record with id {record_id!r}")
        self.record_id = record_id


class AggregateStore:
    """Ordered, frozen sequence of composite records addressed by declared id.

    Records keep the order they were joined in. Lookups go through an
    id -> position index, so for the usual dense 1..N ids id ``k`` is the
    record at position ``k - 1``. The store has no mutators and rejects
    attribute assignment once built, so it can be shared between threads
    without locking.
    """

    __slots__ = ("_records", "_positions")

    def __init__(self, records: Iterable[CompositeRecord] = ()) -> None:
        frozen = tuple(records)
        positions: dict[int, int] = {}
        for position, record in enumerate(frozen):
            if record.id in positions:
                raise ValueError(f"duplicate record id {record.id} at positions {positions[record.id]} and {position}")
            positions[record.id] = position
        object.__setattr__(self, "_records", frozen)
        object.__setattr__(self, "_positions", positions)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CompositeRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"AggregateStore(records={len(self._records)})"

    def lookup_by_id(self, record_id: Any) -> CompositeRecord:
        """Return the record with ``record_id`` or raise ``RecordNotFound``."""
        if not isinstance(record_id, int) or isinstance(record_id, bool):
            raise RecordNotFound(record_id)
        position = self._positions.get(record_id)
        if position is None:
            raise RecordNotFound(record_id)
        return self._records[position]

    def all(self) -> tuple[CompositeRecord, ...]:
        return self._records
