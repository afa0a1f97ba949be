"""Table state - The ordered on-screen event table.

Row 0 is the fixed header; rows 1..N hold one row per event ID, ordered
newest first by occurrence time. ``TableState.upsert`` keeps both
properties after every call. The class itself does no locking; callers
serialise access (see ``quakewatch.shell.display``).
"""

from dataclasses import dataclass

from quakewatch.core.formatter import Cell, DisplayRow, build_header_cells, build_row_cells


@dataclass(frozen=True)
class UpsertResult:
    """Outcome of a single upsert.

    Attributes:
        row: Table row index (1-based, header is row 0) the row ended at
        inserted: True for a new event ID, False for an update
        moved: True if an update had to change the row's position
    """
    row: int
    inserted: bool
    moved: bool = False


class TableState:
    """Ordered table of DisplayRows below a fixed header."""

    def __init__(self) -> None:
        self.header: list[Cell] = build_header_cells()
        self._rows: list[DisplayRow] = []

    @property
    def rows(self) -> tuple[DisplayRow, ...]:
        """Data rows, top to bottom."""
        return tuple(self._rows)

    def row_count(self) -> int:
        """Number of table rows, header included."""
        return len(self._rows) + 1

    def get_cells(self, row: int) -> list[Cell]:
        if row == 0:
            return list(self.header)
        return build_row_cells(self._rows[row - 1])

    def get_cell_text(self, row: int, column: int) -> str:
        return self.get_cells(row)[column].text

    def find_row(self, event_id: str) -> int | None:
        """Return the table row holding event_id, or None."""
        for index, existing in enumerate(self._rows):
            if existing.event_id == event_id:
                return index + 1
        return None

    def insertion_row(self, time_ms: int) -> int:
        """Return where a row with this timestamp belongs.

        That is the first data row strictly older than time_ms, or just
        past the bottom when there is none. Rows with an equal timestamp
        stay above the new one.
        """
        for index, existing in enumerate(self._rows):
            if existing.time_ms < time_ms:
                return index + 1
        return len(self._rows) + 1

    def insert_row(self, row: int, display_row: DisplayRow) -> None:
        """Insert at a table row index, shifting later rows down."""
        if row < 1:
            raise IndexError("Row 0 is reserved for the header")
        self._rows.insert(row - 1, display_row)

    def _fits_at(self, position: int, time_ms: int) -> bool:
        if position > 0 and self._rows[position - 1].time_ms < time_ms:
            return False
        if position + 1 < len(self._rows) and time_ms < self._rows[position + 1].time_ms:
            return False
        return True

    def upsert(self, display_row: DisplayRow) -> UpsertResult:
        """Insert a new event row or update the existing one.

        An existing row is overwritten in place. If its new timestamp no
        longer fits between its neighbours it is moved to the position
        an insert would use.

        Args:
            display_row: Row to apply

        Returns:
            UpsertResult describing where the row ended up
        """
        found = self.find_row(display_row.event_id)

        if found is not None:
            position = found - 1
            if self._fits_at(position, display_row.time_ms):
                self._rows[position] = display_row
                return UpsertResult(row=found, inserted=False)

            del self._rows[position]
            target = self.insertion_row(display_row.time_ms)
            self.insert_row(target, display_row)
            return UpsertResult(row=target, inserted=False, moved=True)

        target = self.insertion_row(display_row.time_ms)
        self.insert_row(target, display_row)
        return UpsertResult(row=target, inserted=True)
