"""
Unit tests for run_py_cli/tui/events.py

Uses a scripted KeyReader, so no terminal is needed.

Coverage plan
─────────────
EventSource → 5 tests (key order, ticks without input, stop joins thread,
                       reader failure → StopEvent, bad tick rate)
"""

import queue
import threading
import time

import pytest


class _ScriptedReader:
    """Returns queued keys one per poll, then sleeps out the timeout."""

    def __init__(self, keys=()):
        self._keys = list(keys)
        self._lock = threading.Lock()

    def poll(self, timeout):
        with self._lock:
            if self._keys:
                return self._keys.pop(0)
        time.sleep(timeout)
        return None


class _BrokenReader:
    def poll(self, timeout):
        raise OSError("tty went away")


def _drain_inputs(source, count, deadline=2.0):
    from run_py_cli.tui.events import InputEvent
    keys = []
    end = time.monotonic() + deadline
    while len(keys) < count and time.monotonic() < end:
        try:
            event = source.get(timeout=0.1)
        except queue.Empty:
            continue
        if isinstance(event, InputEvent):
            keys.append(event.key)
    return keys


class TestEventSource:

    def test_keys_arrive_in_order(self):
        from run_py_cli.tui.events import EventSource
        with EventSource(_ScriptedReader("abc"), tick_rate=0.05) as source:
            assert _drain_inputs(source, 3) == ["a", "b", "c"]

    def test_ticks_emitted_without_input(self):
        from run_py_cli.tui.events import EventSource, TickEvent
        with EventSource(_ScriptedReader(), tick_rate=0.02) as source:
            event = source.get(timeout=1.0)
        assert isinstance(event, TickEvent)

    def test_stop_ends_the_thread(self):
        from run_py_cli.tui.events import EventSource
        source = EventSource(_ScriptedReader(), tick_rate=0.02)
        source.start()
        assert source.running
        source.stop()
        assert not source.running

    def test_reader_failure_queues_stop_event(self):
        from run_py_cli.tui.events import EventSource, StopEvent
        with EventSource(_BrokenReader(), tick_rate=0.05) as source:
            event = source.get(timeout=1.0)
        assert isinstance(event, StopEvent)
        assert "tty went away" in event.reason

    def test_non_positive_tick_rate_rejected(self):
        from run_py_cli.tui.events import EventSource
        with pytest.raises(ValueError):
            EventSource(_ScriptedReader(), tick_rate=0)
