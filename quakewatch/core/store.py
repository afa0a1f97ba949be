"""Event store - In-memory record of every event seen so far.

The store maps event ID to the last-known EventRecord. It only grows:
entries are overwritten by newer snapshots but never removed, and it
lives for the lifetime of the process.
"""

from typing import Iterable, Iterator

from quakewatch.core.event import EventRecord


class EventStore:
    """Mapping of event ID -> last-known EventRecord."""

    def __init__(self) -> None:
        self._records: dict[str, EventRecord] = {}

    def put(self, record: EventRecord) -> None:
        """Store a record, replacing any previous one with the same ID.

        The overwrite is unconditional, even if no field changed.
        """
        self._records[record.id] = record

    def get(self, event_id: str) -> EventRecord | None:
        return self._records.get(event_id)

    def unseen(self, records: Iterable[EventRecord]) -> list[EventRecord]:
        """Return the records whose IDs are not stored yet."""
        return [r for r in records if r.id not in self._records]

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)
