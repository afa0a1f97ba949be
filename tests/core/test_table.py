"""Unit tests for the ordered table.

Covers the upsert algorithm and the table invariants: newest-first
ordering and at most one row per event ID.
"""

import random

import pytest

from quakewatch.core.formatter import COLUMNS, SEVERITY_COLORS, DisplayRow
from quakewatch.core.table import TableState


def make_row(event_id, time_ms, magnitude="1.00", severity="default"):
    """Create a minimal DisplayRow."""
    return DisplayRow(
        event_id=event_id,
        time=f"t{time_ms}",
        magnitude=magnitude,
        place=f"place {event_id}",
        coordinates="",
        ids="",
        time_ms=time_ms,
        severity=severity,
    )


def order(table):
    return [r.event_id for r in table.rows]


def assert_invariants(table):
    """Rows are newest first and IDs are unique."""
    times = [r.time_ms for r in table.rows]
    assert times == sorted(times, reverse=True)
    ids = [r.event_id for r in table.rows]
    assert len(ids) == len(set(ids))


class TestTableBasics:
    """Tests for TableState accessors."""

    def test_new_table_has_only_header(self):
        table = TableState()

        assert table.row_count() == 1
        assert [table.get_cell_text(0, c) for c in range(len(COLUMNS))] == list(COLUMNS)

    def test_get_cell_text(self):
        table = TableState()
        table.upsert(make_row("a", 1000, magnitude="2.50"))

        assert table.get_cell_text(1, 0) == "t1000"
        assert table.get_cell_text(1, 1) == "2.50"
        assert table.get_cell_text(1, 2) == "place a"

    def test_find_row(self):
        table = TableState()
        table.upsert(make_row("a", 1000))
        table.upsert(make_row("b", 2000))

        assert table.find_row("b") == 1
        assert table.find_row("a") == 2
        assert table.find_row("zzz") is None

    def test_insert_row_rejects_header_position(self):
        with pytest.raises(IndexError):
            TableState().insert_row(0, make_row("a", 1000))


class TestInsertionRow:
    """Tests for insertion_row()."""

    def test_empty_table(self):
        assert TableState().insertion_row(1000) == 1

    def test_before_first_older_row(self):
        table = TableState()
        for event_id, time_ms in (("c", 3000), ("a", 1000)):
            table.upsert(make_row(event_id, time_ms))

        assert table.insertion_row(4000) == 1
        assert table.insertion_row(2000) == 2
        assert table.insertion_row(500) == 3

    def test_equal_timestamp_goes_below_existing(self):
        """First encountered wins ties."""
        table = TableState()
        table.upsert(make_row("a", 1000))

        assert table.insertion_row(1000) == 2


class TestUpsert:
    """Tests for upsert()."""

    def test_newer_first(self):
        """b at 2000 and a at 1000 -> ["b", "a"], whatever the arrival order."""
        table = TableState()
        table.upsert(make_row("a", 1000))
        table.upsert(make_row("b", 2000))

        assert order(table) == ["b", "a"]

        table = TableState()
        table.upsert(make_row("b", 2000))
        table.upsert(make_row("a", 1000))

        assert order(table) == ["b", "a"]

    def test_insert_result(self):
        table = TableState()
        table.upsert(make_row("b", 2000))

        result = table.upsert(make_row("a", 1000))

        assert result.inserted is True
        assert result.row == 2

    def test_update_in_place(self):
        """A known ID is overwritten, not duplicated."""
        table = TableState()
        table.upsert(make_row("a", 1000, magnitude="5.50", severity="elevated"))
        table.upsert(make_row("b", 500))

        result = table.upsert(make_row("a", 1000, magnitude="5.90", severity="elevated"))

        assert result.inserted is False
        assert result.moved is False
        assert result.row == 1
        assert order(table) == ["a", "b"]
        assert table.get_cell_text(1, 1) == "5.90"
        assert table.get_cells(1)[1].color == SEVERITY_COLORS["elevated"]

    def test_update_with_new_time_moves_row(self):
        """A revised origin time that breaks the order relocates the row."""
        table = TableState()
        for event_id, time_ms in (("a", 1000), ("b", 2000), ("c", 3000)):
            table.upsert(make_row(event_id, time_ms))

        result = table.upsert(make_row("a", 2500))

        assert result.moved is True
        assert result.row == 2
        assert order(table) == ["c", "a", "b"]
        assert_invariants(table)

    def test_update_with_small_time_change_stays(self):
        table = TableState()
        for event_id, time_ms in (("a", 1000), ("b", 2000), ("c", 3000)):
            table.upsert(make_row(event_id, time_ms))

        result = table.upsert(make_row("b", 2100))

        assert result.moved is False
        assert order(table) == ["c", "b", "a"]

    def test_missing_time_sinks_to_bottom(self):
        table = TableState()
        table.upsert(make_row("unknown", 0))
        table.upsert(make_row("a", 1000))

        assert order(table) == ["a", "unknown"]

    def test_idempotent(self):
        """Applying the same rows twice equals applying them once."""
        rows = [make_row(f"e{i}", (i * 7919) % 13 * 100) for i in range(20)]

        once = TableState()
        for row in rows:
            once.upsert(row)

        twice = TableState()
        for row in rows + rows:
            twice.upsert(row)

        assert twice.rows == once.rows

    @pytest.mark.parametrize("seed", range(10))
    def test_invariants_hold_for_random_sequences(self, seed):
        """Ordering and uniqueness hold after every upsert."""
        rng = random.Random(seed)
        table = TableState()
        latest = {}

        for _ in range(200):
            event_id = f"e{rng.randrange(30)}"
            row = make_row(event_id, rng.randrange(10) * 1000, magnitude=f"{rng.random():.2f}")
            latest[event_id] = row
            table.upsert(row)
            assert_invariants(table)

        assert set(table.rows) == set(latest.values())
