"""Tests for the two-tick Scheduler.

Uses short real intervals; callbacks stop the scheduler so every test
ends on its own.
"""

import threading

import pytest

from quakewatch.scheduler import Scheduler


class TestScheduler:
    """Tests for Scheduler.run()."""

    def test_fetches_immediately(self):
        """The first fetch runs before any interval elapses."""
        calls = []
        scheduler = Scheduler(
            redraw_interval=10,
            fetch_interval=60,
            on_redraw=lambda: calls.append("redraw"),
            on_fetch=lambda: (calls.append("fetch"), scheduler.stop()),
        )

        scheduler.run()

        assert calls == ["fetch"]

    def test_redraws_between_fetches(self):
        calls = []

        def on_redraw():
            calls.append("redraw")
            if calls.count("redraw") == 3:
                scheduler.stop()

        scheduler = Scheduler(
            redraw_interval=0.01,
            fetch_interval=60,
            on_redraw=on_redraw,
            on_fetch=lambda: calls.append("fetch"),
        )

        scheduler.run()

        assert calls == ["fetch", "redraw", "redraw", "redraw"]

    def test_fetch_ticks_repeat(self):
        fetches = []

        def on_fetch():
            fetches.append(1)
            if len(fetches) == 3:
                scheduler.stop()

        scheduler = Scheduler(
            redraw_interval=0.005,
            fetch_interval=0.02,
            on_redraw=lambda: None,
            on_fetch=on_fetch,
        )

        scheduler.run()

        assert len(fetches) == 3

    def test_fetch_error_propagates(self):
        def on_fetch():
            raise RuntimeError("feed down")

        scheduler = Scheduler(1, 60, on_redraw=lambda: None, on_fetch=on_fetch)

        with pytest.raises(RuntimeError, match="feed down"):
            scheduler.run()

    def test_stop_from_another_thread(self):
        started = threading.Event()
        scheduler = Scheduler(
            redraw_interval=60,
            fetch_interval=60,
            on_redraw=lambda: None,
            on_fetch=started.set,
        )
        worker = threading.Thread(target=scheduler.run)
        worker.start()

        assert started.wait(5)
        scheduler.stop()
        worker.join(5)

        assert not worker.is_alive()

    def test_stopped_before_run_does_nothing(self):
        calls = []
        scheduler = Scheduler(1, 60, on_redraw=lambda: None, on_fetch=lambda: calls.append(1))
        scheduler.stop()

        scheduler.run()

        assert calls == []

    def test_rejects_non_positive_intervals(self):
        with pytest.raises(ValueError):
            Scheduler(0, 60, on_redraw=lambda: None, on_fetch=lambda: None)


class TestAdvance:
    """Tests for deadline rescheduling."""

    def test_next_tick(self):
        assert Scheduler._advance(10.0, 1.0, 10.2) == 11.0

    def test_missed_ticks_are_dropped(self):
        assert Scheduler._advance(10.0, 1.0, 13.5) == 14.0

    def test_future_deadline_unchanged(self):
        assert Scheduler._advance(10.0, 1.0, 9.0) == 10.0
