from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], object]


class Scheduler(Protocol):
    def schedule(self, interval: float, callback: Callback) -> int: ...

    def cancel(self, handle: int) -> None: ...


class Countdown:
    """
    The session's one-second clock, modelled as a cancellable scheduled task.

    Without a scheduler the countdown only records whether it is running and
    the caller is expected to invoke ``GameSession.tick`` itself.
    """

    def __init__(self, scheduler: Optional[Scheduler] = None, interval: float = 1.0) -> None:
        self.scheduler = scheduler
        self.interval = interval
        self._running = False
        self._handle: Optional[int] = None

    @property
    def running(self) -> bool:
        return self._running

    def start(self, callback: Callback) -> None:
        if self._running:
            return
        self._running = True
        if self.scheduler is not None:
            self._handle = self.scheduler.schedule(self.interval, callback)
        logger.debug("countdown started")

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self.scheduler is not None and self._handle is not None:
            self.scheduler.cancel(self._handle)
        self._handle = None
        logger.debug("countdown stopped")


@dataclass
class _Job:
    interval: float
    callback: Callback
    due: float


class PollingScheduler:
    """Single-threaded scheduler: due callbacks run only inside ``run_pending``."""

    def __init__(self, now: Callable[[], float] = time.monotonic) -> None:
        self._now = now
        self._jobs: Dict[int, _Job] = {}
        self._ids = itertools.count(1)

    def schedule(self, interval: float, callback: Callback) -> int:
        if interval <= 0:
            raise ValueError("interval must be positive")
        handle = next(self._ids)
        self._jobs[handle] = _Job(interval, callback, self._now() + interval)
        return handle

    def cancel(self, handle: int) -> None:
        self._jobs.pop(handle, None)

    def pending(self) -> int:
        return len(self._jobs)

    def run_pending(self) -> int:
        """Fires each job once per interval elapsed since it was last due. Returns the fire count."""
        fired = 0
        now = self._now()
        for handle in list(self._jobs):
            while True:
                # A callback may cancel its own or another job.
                job = self._jobs.get(handle)
                if job is None or job.due > now:
                    break
                job.due += job.interval
                job.callback()
                fired += 1
        return fired
