"""Reconciliation - Merge a fresh snapshot into the event store.

The store is updated as a side effect; everything else is pure.
"""

from datetime import tzinfo

from quakewatch.core.event import FeedSnapshot
from quakewatch.core.formatter import DisplayRow, to_display_row
from quakewatch.core.store import EventStore


def reconcile(
    snapshot: FeedSnapshot,
    store: EventStore,
    tz: tzinfo | None = None,
) -> list[DisplayRow]:
    """Merge a snapshot into the store and build the rows to upsert.

    The feed lists events newest first. Processing runs oldest to newest
    so that, when the rows are applied in the returned order, the newest
    event is applied last and lands nearest the top of the table.

    Every event overwrites its store entry, known or not.

    Args:
        snapshot: Freshly fetched feed snapshot
        store: Event store, mutated in place
        tz: Display timezone (None for local time)

    Returns:
        DisplayRows in oldest-to-newest order
    """
    rows = []
    for event in reversed(snapshot.events):
        store.put(event)
        rows.append(to_display_row(event, tz))
    return rows
