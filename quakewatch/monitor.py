"""Monitor - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components: the feed client, the event
store, reconciliation and the live table.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import tzinfo

from quakewatch.core.config import Config, load_timezone
from quakewatch.core.event import FeedSnapshot
from quakewatch.core.formatter import format_time
from quakewatch.core.reconcile import reconcile
from quakewatch.core.store import EventStore
from quakewatch.scheduler import Scheduler
from quakewatch.shell.display import TableDisplay
from quakewatch.shell.feed_client import FeedClient
from quakewatch.shell.table_sync import TableSync


logger = logging.getLogger(__name__)


# How long to wait for the worker thread on shutdown (seconds)
SHUTDOWN_TIMEOUT = 5.0


@dataclass
class CycleResult:
    """Result of one reconciliation cycle.

    Attributes:
        events_fetched: Events in the snapshot
        events_new: Events not seen in earlier cycles
        events_updated: Events already known, overwritten this cycle
        events_known: Store size after the cycle
    """
    events_fetched: int
    events_new: int
    events_updated: int
    events_known: int

    @property
    def summary(self) -> str:
        """Human-readable summary of the cycle."""
        return (
            f"Fetched {self.events_fetched} events, "
            f"{self.events_new} new, "
            f"{self.events_updated} updated, "
            f"{self.events_known} known"
        )


def format_caption(snapshot: FeedSnapshot, events_known: int, tz: tzinfo | None = None) -> str:
    """Build the table caption for a snapshot. Pure function."""
    caption = f"{events_known} events"
    if snapshot.metadata.generated_ms is not None:
        caption += f" | feed generated {format_time(snapshot.metadata.generated_ms, tz)}"
    return caption


class Monitor:
    """Runs the fetch/reconcile cycle against a live table.

    This class wires together:
    - Feed client (fetches snapshots)
    - Event store and reconciliation (core)
    - Table sync (serialised upserts onto the display)
    - Scheduler (redraw and fetch ticks on a worker thread)
    """

    def __init__(
        self,
        config: Config,
        display: TableDisplay | None = None,
        feed_client: FeedClient | None = None,
        store: EventStore | None = None,
    ) -> None:
        """Initialize monitor with configuration.

        Args:
            config: Application configuration
            display: Live table (created if not provided)
            feed_client: Feed client (created if not provided)
            store: Event store (a new empty one if not provided)
        """
        self.config = config
        self.tz = load_timezone(config.display_timezone)
        self.display = display or TableDisplay()
        self.feed_client = feed_client or FeedClient(
            url=config.resolved_feed_url,
            timeout=config.request_timeout_seconds,
        )
        self.store = store if store is not None else EventStore()
        self.table_sync = TableSync(self.display)
        self.scheduler = Scheduler(
            redraw_interval=config.redraw_interval_seconds,
            fetch_interval=config.fetch_interval_seconds,
            on_redraw=self.display.queue_draw,
            on_fetch=self.run_cycle,
        )

    def run_cycle(self) -> CycleResult:
        """Run one fetch -> reconcile -> upsert cycle.

        Raises:
            FeedError: If the fetch fails (fatal)
        """
        snapshot = self.feed_client.fetch_snapshot()

        new_count = len({e.id for e in self.store.unseen(snapshot.events)})
        rows = reconcile(snapshot, self.store, self.tz)
        self.table_sync.upsert_rows(rows)

        title = snapshot.metadata.title
        caption = format_caption(snapshot, len(self.store), self.tz)

        def update_labels() -> None:
            if title:
                self.display.title = title
            self.display.set_caption(caption)

        self.display.queue_update_draw(update_labels)

        result = CycleResult(
            events_fetched=len(snapshot.events),
            events_new=new_count,
            events_updated=len({r.event_id for r in rows}) - new_count,
            events_known=len(self.store),
        )
        logger.info("Cycle complete: %s", result.summary)
        return result

    def _work(self) -> None:
        try:
            self.scheduler.run()
        except Exception as e:
            logger.error("Stopping after fatal error: %s", e)
            self.display.stop(e)

    def run(self) -> None:
        """Run until interrupted or a fatal error occurs.

        The display loop runs on the calling thread; fetching and the
        timers run on a background worker.

        Raises:
            FeedError: If a fetch fails
        """
        worker = threading.Thread(target=self._work, name="quakewatch-worker", daemon=True)
        worker.start()
        try:
            self.display.run()
        finally:
            self.scheduler.stop()
            worker.join(SHUTDOWN_TIMEOUT)
            self.feed_client.close()
