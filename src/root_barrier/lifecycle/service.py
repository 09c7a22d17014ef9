"""Waits for an activity to reach the RESUMED stage before roots are looked up."""

import logging
from collections.abc import Collection, Sequence
from typing import Any, Protocol

from root_barrier.config import RESUME_BACKOFF_MS
from root_barrier.errors import NoActivitiesFoundError, NoActivityResumedError
from root_barrier.lifecycle.views import LIVE_STAGES, Stage
from root_barrier.pump.service import UiController

logger = logging.getLogger(__name__)


class LifecycleMonitor(Protocol):
    def get_activities_in_stage(self, stage: Stage) -> Collection[Any]: ...


class ActivityResumeWaiter:
    """Pumps the UI queue on a fixed backoff schedule until some activity is resumed."""

    def __init__(
        self,
        lifecycle_monitor: LifecycleMonitor,
        controller: UiController,
        backoff_ms: Sequence[int] = RESUME_BACKOFF_MS,
    ):
        self._monitor = lifecycle_monitor
        self._controller = controller
        self._backoff_ms = tuple(backoff_ms)

    def _has_resumed(self) -> bool:
        return bool(self._monitor.get_activities_in_stage(Stage.RESUMED))

    def wait_for_resumed_activity(self) -> None:
        if self._has_resumed():
            return
        self._controller.loop_until_idle()
        if self._has_resumed():
            return

        pending = [
            activity
            for stage in LIVE_STAGES
            for activity in self._monitor.get_activities_in_stage(stage)
        ]
        if not pending:
            raise NoActivitiesFoundError()

        # Some activities are still on their way; give them a chance to resume.
        for wait_ms in self._backoff_ms:
            logger.warning(
                "No activity currently resumed - waiting: %dms for one to appear.", wait_ms
            )
            self._controller.loop_for_at_least(wait_ms)
            if self._has_resumed():
                return
        raise NoActivityResumedError()
