"""Table Sync - Imperative Shell.

Applies DisplayRows to the live table through the display's update
queue, so upserts never run concurrently with a repaint.
"""

import logging

from quakewatch.core.formatter import DisplayRow
from quakewatch.shell.display import TableDisplay


logger = logging.getLogger(__name__)


class TableSync:
    """Serialised insert-or-update of rows on a TableDisplay."""

    def __init__(self, display: TableDisplay) -> None:
        self.display = display

    def upsert_row(self, row: DisplayRow) -> None:
        """Queue an insert-or-update of row and a repaint.

        The upsert itself runs later on the display thread.
        """
        def update() -> None:
            result = self.display.state.upsert(row)
            if result.inserted:
                logger.debug("Inserted %s at row %d", row.event_id, result.row)
            elif result.moved:
                logger.debug("Moved %s to row %d", row.event_id, result.row)

        self.display.queue_update_draw(update)

    def upsert_rows(self, rows: list[DisplayRow]) -> None:
        """Queue upserts for rows, preserving their order."""
        for row in rows:
            self.upsert_row(row)
