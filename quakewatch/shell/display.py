"""Terminal Display - Imperative Shell.

Renders the event table with rich and serialises every change to it.

The display owns the TableState. Other threads never touch it directly:
they queue a mutation (``queue_update_draw``) or a repaint
(``queue_draw``), and the thread running ``TableDisplay.run`` applies the
commands one at a time, in order, repainting after each.
"""

import logging
import queue
from typing import Callable

from rich import box
from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.text import Text

from quakewatch.core.formatter import Cell
from quakewatch.core.table import TableState


logger = logging.getLogger(__name__)


# How long the run loop blocks before re-checking for Ctrl-C (seconds)
POLL_SECONDS = 0.5

_UPDATE = "update"
_DRAW = "draw"
_STOP = "stop"


def _cell_text(cell: Cell) -> Text:
    return Text(cell.text, style=cell.color, justify=cell.align)


class TableDisplay:
    """Live terminal table fed through a single command queue."""

    def __init__(
        self,
        state: TableState | None = None,
        console: Console | None = None,
        title: str = "Recent earthquakes",
        screen: bool = False,
    ) -> None:
        """Initialize the display.

        Args:
            state: Table to show (a new empty one if not provided)
            console: rich Console to render to
            title: Table title
            screen: Use the terminal's alternate screen
        """
        self.state = state or TableState()
        self.console = console or Console()
        self.title = title
        self.caption = ""
        self.screen = screen
        self._queue: queue.Queue = queue.Queue()

    def queue_update_draw(self, update: Callable[[], None]) -> None:
        """Queue a state mutation followed by a repaint. Thread-safe."""
        self._queue.put((_UPDATE, update))

    def queue_draw(self) -> None:
        """Queue a plain repaint. Thread-safe."""
        self._queue.put((_DRAW, None))

    def stop(self, error: BaseException | None = None) -> None:
        """Ask the run loop to exit, re-raising error if one is given."""
        self._queue.put((_STOP, error))

    def set_caption(self, caption: str) -> None:
        """Set the caption. Call only from queued updates."""
        self.caption = caption

    def render(self) -> Table:
        """Build a rich Table from the current state."""
        table = Table(
            title=self.title,
            caption=self.caption or None,
            box=box.SQUARE,
            show_lines=True,
            expand=True,
        )

        for cell in self.state.header:
            table.add_column(_cell_text(cell))

        for row in range(1, self.state.row_count()):
            table.add_row(*(_cell_text(c) for c in self.state.get_cells(row)))

        return table

    def _handle(self, kind: str, payload) -> bool:
        """Apply one command. Returns False for a stop command."""
        if kind == _STOP:
            if payload is not None:
                raise payload
            return False
        if kind == _UPDATE:
            payload()
        return True

    def process_pending(self) -> int:
        """Apply queued commands on the calling thread without rendering.

        Stops at the first stop command.

        Returns:
            Number of update and draw commands applied

        Raises:
            BaseException: The error passed to stop(), if any
        """
        applied = 0
        while True:
            try:
                kind, payload = self._queue.get_nowait()
            except queue.Empty:
                return applied
            if not self._handle(kind, payload):
                return applied
            applied += 1

    def run(self) -> None:
        """Run the display loop on the calling thread until stopped.

        Raises:
            BaseException: The error passed to stop(), if any
        """
        with Live(
            self.render(),
            console=self.console,
            screen=self.screen,
            auto_refresh=False,
        ) as live:
            while True:
                try:
                    kind, payload = self._queue.get(timeout=POLL_SECONDS)
                except queue.Empty:
                    continue

                if not self._handle(kind, payload):
                    logger.debug("Display stopped")
                    return
                live.update(self.render(), refresh=True)
