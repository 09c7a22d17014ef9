"""Cooperative pumping of the UI thread's work queue.

The barrier never sleeps on its own: it hands control to a pump that drains
pending work either until nothing is due ("until idle") or for a minimum
amount of time, then returns.
"""

import heapq
import itertools
import logging
import threading
import time
from collections.abc import Callable
from typing import Protocol

from root_barrier.errors import PreconditionError

logger = logging.getLogger(__name__)


class UiController(Protocol):
    def loop_until_idle(self) -> None: ...

    def loop_for_at_least(self, millis: int) -> None: ...

    def is_owner_thread(self) -> bool: ...


class TaskQueuePump:
    """A single-threaded task queue that satisfies :class:`UiController`.

    The thread that creates the pump owns it. Tasks may be posted from any
    thread but only run while the owner pumps. Exceptions raised by a task
    propagate out of the pump call that ran it.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._owner = threading.get_ident()
        self._clock = clock
        self._sleep = sleep
        self._tasks: list[tuple[float, int, Callable[[], None]]] = []
        self._sequence = itertools.count()
        self._lock = threading.Lock()

    def post(self, task: Callable[[], None], delay_ms: int = 0) -> None:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        due = self._clock() + delay_ms / 1000
        with self._lock:
            heapq.heappush(self._tasks, (due, next(self._sequence), task))

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._tasks)

    def is_owner_thread(self) -> bool:
        return threading.get_ident() == self._owner

    def _check_owner(self) -> None:
        if not self.is_owner_thread():
            raise PreconditionError("The task queue can only be pumped from its owner thread.")

    def _next_due(self) -> float | None:
        with self._lock:
            return self._tasks[0][0] if self._tasks else None

    def _run_next_due(self) -> bool:
        with self._lock:
            if not self._tasks or self._tasks[0][0] > self._clock():
                return False
            _, _, task = heapq.heappop(self._tasks)
        task()
        return True

    def loop_until_idle(self) -> None:
        """Run tasks until none is due, including tasks posted while draining."""
        self._check_owner()
        ran = 0
        while self._run_next_due():
            ran += 1
        logger.debug("Pumped %d task(s) until idle", ran)

    def loop_for_at_least(self, millis: int) -> None:
        """Keep running due tasks, sleeping in between, until ``millis`` have elapsed."""
        self._check_owner()
        deadline = self._clock() + millis / 1000
        while True:
            while self._run_next_due():
                pass
            now = self._clock()
            if now >= deadline:
                return
            next_due = self._next_due()
            wake_at = deadline if next_due is None else min(next_due, deadline)
            self._sleep(max(0.0, wake_at - now))
