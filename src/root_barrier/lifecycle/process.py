"""Lifecycle stages inferred from operating-system processes.

A process is treated as an activity: it is RESUMED once it is running and
shows an interactive window, STARTED while it runs without one, STOPPED
while suspended and DESTROYED once gone.
"""

import logging
from collections.abc import Callable, Collection, Iterable

import psutil

from root_barrier.lifecycle.views import Stage

logger = logging.getLogger(__name__)

_STOPPED_STATUSES = {psutil.STATUS_STOPPED, psutil.STATUS_TRACING_STOP}
_DEAD_STATUSES = {psutil.STATUS_ZOMBIE, psutil.STATUS_DEAD}


class ProcessLifecycleMonitor:
    """``window_pids`` returns the PIDs that currently own an interactive window.

    It is called at most once per query. Without it every running process
    counts as RESUMED.
    """

    def __init__(
        self,
        pids: Iterable[int],
        window_pids: Callable[[], Collection[int]] | None = None,
    ):
        self._pids = list(dict.fromkeys(pids))
        self._window_pids = window_pids

    @property
    def pids(self) -> list[int]:
        return list(self._pids)

    def _status(self, pid: int) -> str | None:
        try:
            return psutil.Process(pid).status()
        except (psutil.NoSuchProcess, psutil.ZombieProcess):
            return None
        except psutil.AccessDenied:
            logger.debug("Access denied reading status of PID %d, assuming running", pid)
            return psutil.STATUS_RUNNING

    def get_stage(self, pid: int, window_pids: Collection[int] | None = None) -> Stage:
        status = self._status(pid)
        if status is None or status in _DEAD_STATUSES:
            return Stage.DESTROYED
        if status in _STOPPED_STATUSES:
            return Stage.STOPPED
        if window_pids is None and self._window_pids is not None:
            window_pids = self._window_pids()
        if window_pids is not None and pid not in window_pids:
            return Stage.STARTED
        return Stage.RESUMED

    def get_activities_in_stage(self, stage: Stage) -> list[int]:
        window_pids = self._window_pids() if self._window_pids is not None else None
        return [pid for pid in self._pids if self.get_stage(pid, window_pids) is stage]
