"""In-memory activity lifecycle tracking.

The application under test (or its instrumentation) reports every lifecycle
transition through :meth:`ActivityLifecycleMonitor.signal_lifecycle_change`;
the barrier only ever reads from it.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from root_barrier.lifecycle.views import Stage

logger = logging.getLogger(__name__)

LifecycleCallback = Callable[[Any, Stage], None]


class ActivityLifecycleMonitor:
    """Records the latest stage of each activity and notifies registered callbacks."""

    def __init__(self):
        # Keyed by id() so activities do not need to be hashable.
        self._stages: dict[int, tuple[Any, Stage]] = {}
        self._callbacks: list[LifecycleCallback] = []
        self._lock = threading.Lock()

    def add_lifecycle_callback(self, callback: LifecycleCallback) -> None:
        with self._lock:
            if callback not in self._callbacks:
                self._callbacks.append(callback)

    def remove_lifecycle_callback(self, callback: LifecycleCallback) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def signal_lifecycle_change(self, activity: Any, stage: Stage) -> None:
        with self._lock:
            self._stages[id(activity)] = (activity, stage)
            callbacks = list(self._callbacks)

        for callback in callbacks:
            try:
                callback(activity, stage)
            except Exception:
                logger.warning(
                    "Lifecycle callback %r failed for stage %s", callback, stage, exc_info=True
                )

        if stage is Stage.DESTROYED:
            with self._lock:
                entry = self._stages.get(id(activity))
                if entry is not None and entry[1] is Stage.DESTROYED:
                    del self._stages[id(activity)]

    def get_lifecycle_stage_of(self, activity: Any) -> Stage:
        with self._lock:
            entry = self._stages.get(id(activity))
        if entry is None or entry[0] is not activity:
            raise ValueError(f"Unknown activity: {activity!r}")
        return entry[1]

    def get_activities_in_stage(self, stage: Stage) -> list[Any]:
        with self._lock:
            return [activity for activity, current in self._stages.values() if current is stage]
