"""Periodic clock ticks for a running game."""

import logging
from threading import Event, Thread
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class Ticker(Protocol):
    """Just the parts the Game needs: start calling back, stop calling back."""

    def start(self, callback: TickCallback) -> None: ...
    def stop(self) -> None: ...


TickerFactory = Callable[[float], Ticker]


class ClockTicker:
    """
    Calls the callback every `interval` seconds on a background (daemon) thread, until stopped.

    `stop()` does not wait for the thread: it may be called from within the callback itself (the game stops its
    ticker when a flag falls), and a tick that is already running finishes on its own.
    """

    def __init__(self, interval: float = 1.0) -> None:
        self.interval = interval
        self._stop_event = Event()
        self._thread: Optional[Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    def start(self, callback: TickCallback) -> None:
        self.stop()
        self._stop_event = Event()
        self._thread = Thread(
            target=self._tick_loop, args=(callback, self._stop_event), daemon=True
        )
        self._thread.start()
        logger.debug("Clock ticker started (interval %.2fs)", self.interval)

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread = None
        logger.debug("Clock ticker stopped")

    def _tick_loop(self, callback: TickCallback, stop_event: Event) -> None:
        # wait() returns True once stop is requested, so a stopped ticker never starts another tick
        while not stop_event.wait(self.interval):
            callback()
