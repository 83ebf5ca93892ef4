"""
Game clock
Cancellable one-second ticker driven by a tkinter-style scheduler
"""

import itertools
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple


logger = logging.getLogger(__name__)


class ManualScheduler:
    """
    Deterministic scheduler with the same after/after_cancel interface as a tk root

    Time only moves when advance() is called, which runs every callback that
    falls due in order.
    """

    def __init__(self):
        self.now_ms = 0
        self._jobs: Dict[str, Tuple[int, int, Callable, tuple]] = {}
        self._sequence = itertools.count(1)

    def after(self, ms: int, func: Callable, *args: Any) -> str:
        seq = next(self._sequence)
        job_id = f"after#{seq}"
        self._jobs[job_id] = (self.now_ms + int(ms), seq, func, args)
        return job_id

    def after_cancel(self, job_id: str):
        self._jobs.pop(job_id, None)

    @property
    def pending(self) -> int:
        return len(self._jobs)

    def advance(self, seconds: float):
        """Move time forward, firing due callbacks one at a time"""
        target = self.now_ms + int(round(seconds * 1000))
        while True:
            due = [(when, seq, job_id) for job_id, (when, seq, _, _) in self._jobs.items()
                   if when <= target]
            if not due:
                break
            when, _, job_id = min(due)
            _, _, func, args = self._jobs.pop(job_id)
            self.now_ms = when
            func(*args)
        self.now_ms = target


class GameClock:
    """Counts elapsed seconds while a game is in progress"""

    TICK_MS = 1000

    def __init__(self, scheduler=None):
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.elapsed_seconds = 0
        self._job: Optional[str] = None
        # Bumped on every stop so a tick scheduled before it is ignored
        self._generation = 0
        self._listeners: List[Callable[[int], None]] = []

    @property
    def running(self) -> bool:
        return self._job is not None

    def on_tick(self, callback: Callable[[int], None]):
        """Register a callback receiving the elapsed seconds after each tick"""
        self._listeners.append(callback)

    def start(self):
        """Start ticking, does nothing if already running"""
        if self._job is not None:
            return
        self._schedule(self._generation)
        logger.debug("Clock started at %ds", self.elapsed_seconds)

    def stop(self):
        """Stop ticking and cancel the pending tick, safe to call repeatedly"""
        self._generation += 1
        if self._job is not None:
            self.scheduler.after_cancel(self._job)
            self._job = None
            logger.debug("Clock stopped at %ds", self.elapsed_seconds)

    def reset(self):
        self.stop()
        self.elapsed_seconds = 0

    def _schedule(self, generation: int):
        self._job = self.scheduler.after(self.TICK_MS, self._tick, generation)

    def _tick(self, generation: int):
        if generation != self._generation:
            return
        self.elapsed_seconds += 1
        # Queued before listeners, which may stop the clock or raise
        self._schedule(generation)

        for callback in list(self._listeners):
            callback(self.elapsed_seconds)
