"""
EventSource — background producer of key and tick events.

One daemon thread polls a KeyReader for at most the time left until the next
tick, forwards any key as an InputEvent, and emits a TickEvent whenever the
tick interval has elapsed.  Events land in an unbounded FIFO queue so the
producer never blocks on a slow consumer.

Usage::

    with EventSource(reader, tick_rate=0.25) as source:
        while True:
            event = source.get()
            if isinstance(event, InputEvent):
                ...
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import Optional, Protocol, Union

__all__ = ["InputEvent", "TickEvent", "StopEvent", "Event", "KeyReader", "EventSource"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InputEvent:
    """A key was pressed; ``key`` is a single character or a readchar key code."""
    key: str


@dataclass(frozen=True)
class TickEvent:
    """The tick interval elapsed."""


@dataclass(frozen=True)
class StopEvent:
    """The producer ended on its own (reader failure); ``reason`` says why."""
    reason: str = ""


Event = Union[InputEvent, TickEvent, StopEvent]


class KeyReader(Protocol):
    def poll(self, timeout: float) -> Optional[str]:
        """Return the next key pressed within *timeout* seconds, else None."""


class EventSource:
    """Owns the producer thread and the event channel."""

    def __init__(self, reader: KeyReader, tick_rate: float = 0.25) -> None:
        if tick_rate <= 0:
            raise ValueError("tick_rate must be positive")
        self._reader    = reader
        self._tick_rate = tick_rate
        self._queue: "queue.Queue[Event]" = queue.Queue()
        self._stop      = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ── Lifecycle ─────────────────────────────────────────────────────────

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._produce, name="event-source", daemon=True)
        self._thread.start()
        logger.debug("Event source started (tick %.3fs)", self._tick_rate)

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        """Signal the producer to finish and wait for it."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Event source thread did not stop within %ss", timeout)
            self._thread = None
        logger.debug("Event source stopped")

    def __enter__(self) -> "EventSource":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()

    # ── Consumer side ─────────────────────────────────────────────────────

    def get(self, timeout: Optional[float] = None) -> Event:
        """
        Block for the next event.

        Raises:
            queue.Empty: *timeout* elapsed with no event.
        """
        return self._queue.get(timeout=timeout)

    # ── Producer loop ─────────────────────────────────────────────────────

    def _produce(self) -> None:
        last_tick = time.monotonic()
        while not self._stop.is_set():
            timeout = max(self._tick_rate - (time.monotonic() - last_tick), 0.0)
            try:
                key = self._reader.poll(timeout)
            except Exception as exc:  # noqa: BLE001
                logger.exception("Key reader failed, stopping event source")
                self._queue.put(StopEvent(reason=str(exc)))
                return
            if key is not None:
                self._queue.put(InputEvent(key))

            if time.monotonic() - last_tick >= self._tick_rate:
                self._queue.put(TickEvent())
                last_tick = time.monotonic()
