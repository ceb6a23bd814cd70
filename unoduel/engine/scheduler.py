"""Clocks and deferred callbacks for the UNO window deadline."""

import heapq
import itertools
import threading
import time
from typing import Callable, List, Protocol, Tuple


class Scheduler(Protocol):
    """Source of time for the engine."""

    def now(self) -> float:
        """Monotonic time in seconds."""
        ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Run ``callback`` once, ``delay`` seconds from now."""
        ...

    def sleep(self, seconds: float) -> None:
        """Let ``seconds`` pass, running any callbacks that fall due."""
        ...


class ThreadingScheduler:
    """Wall-clock scheduler backed by daemon ``threading.Timer`` threads."""

    def __init__(self) -> None:
        self._timers: List[threading.Timer] = []
        self._lock = threading.Lock()

    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        timer = threading.Timer(max(0.0, delay), callback)
        timer.daemon = True
        with self._lock:
            self._timers = [t for t in self._timers if t.is_alive()]
            self._timers.append(timer)
        timer.start()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)

    def shutdown(self) -> None:
        """Cancel every timer that has not fired yet."""
        with self._lock:
            timers, self._timers = self._timers, []
        for timer in timers:
            timer.cancel()


class ManualScheduler:
    """Virtual clock. Callbacks only run when time is advanced explicitly."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: List[Tuple[float, int, Callable[[], None]]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        heapq.heappush(self._queue, (self._now + max(0.0, delay), next(self._counter), callback))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due callbacks in deadline order."""
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, callback = heapq.heappop(self._queue)
            self._now = due
            callback()
            fired += 1
        self._now = target
        return fired

    def run_all(self) -> int:
        """Fire every pending callback, jumping the clock as needed."""
        fired = 0
        while self._queue:
            fired += self.advance(self._queue[0][0] - self._now)
        return fired

    sleep = advance
