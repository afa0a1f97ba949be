"""Functional Core - Pure functions with no side effects.

This module contains all business logic:
- Feed parsing into event records
- The in-memory event store
- Display formatting and severity colours
- Reconciliation of snapshots against the store
- The ordered table and its upsert algorithm

Apart from the store and table state they mutate, nothing here does I/O.
"""

from quakewatch.core.event import EventRecord, FeedSnapshot, parse_snapshot
from quakewatch.core.store import EventStore
from quakewatch.core.formatter import DisplayRow, get_severity, to_display_row
from quakewatch.core.reconcile import reconcile
from quakewatch.core.table import TableState, UpsertResult

__all__ = [
    # Event
    "EventRecord",
    "FeedSnapshot",
    "parse_snapshot",
    # Store
    "EventStore",
    # Formatter
    "DisplayRow",
    "get_severity",
    "to_display_row",
    # Reconcile
    "reconcile",
    # Table
    "TableState",
    "UpsertResult",
]
