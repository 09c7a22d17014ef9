"""Stable-root barrier.

Hands out the decor views of the window(s) a user would interact with right
now, but only once they are quiescent: no layout pass pending and, unless
several roots were asked for, window focus held by every focusable root.

Must be called on the thread that owns the UI. Waiting never blocks that
thread: between checks the barrier pumps its queue, first until idle and
then in short timed slices, up to a fixed number of attempts.
"""

import logging
from typing import Any

from root_barrier.config import BarrierConfig
from root_barrier.errors import PreconditionError, StabilizationTimeoutError
from root_barrier.lifecycle.service import ActivityResumeWaiter, LifecycleMonitor
from root_barrier.pump.service import UiController
from root_barrier.roots.matchers import DEFAULT_ROOT_MATCHER
from root_barrier.roots.readiness import is_ready
from root_barrier.roots.service import RootSelector, RootsOracle
from root_barrier.roots.views import RootMatcher, RootSelection

logger = logging.getLogger(__name__)


class StabilizationBarrier:
    def __init__(
        self,
        roots_oracle: RootsOracle,
        controller: UiController,
        lifecycle_monitor: LifecycleMonitor,
        default_matcher: RootMatcher = DEFAULT_ROOT_MATCHER,
        config: BarrierConfig | None = None,
    ):
        self.config = config or BarrierConfig()
        self.default_matcher = default_matcher
        self._controller = controller
        self._selector = RootSelector(
            roots_oracle,
            ActivityResumeWaiter(lifecycle_monitor, controller, self.config.resume_backoff_ms),
        )

    def get_stable_selection(self, matcher: RootMatcher | None = None) -> RootSelection:
        """Wait until the selected roots are ready and return the snapshot that passed."""
        if not self._controller.is_owner_thread():
            raise PreconditionError("get_stable_roots() must be called on the UI owner thread.")

        if matcher is None:
            matcher = self.default_matcher
        ignore_focus = matcher.is_multi_select
        selection = self._selector.find_roots(matcher)

        loops = 0
        while not is_ready(selection.selected, ignore_focus):
            if loops < self.config.idle_loops:
                self._controller.loop_until_idle()
            elif loops < self.config.max_loops:
                # Idle pumping spins when nothing is queued; an update is
                # likely close, so wait for it in short slices instead.
                self._controller.loop_for_at_least(self.config.loop_interval_ms)
            else:
                raise StabilizationTimeoutError(selection.selected, selection.all_roots)

            selection = self._selector.find_roots(matcher)
            loops += 1

        if loops:
            logger.debug("Roots became ready after %d loop(s)", loops)
        return selection

    def get_stable_roots(self, matcher: RootMatcher | None = None) -> list[Any]:
        """Return the decor views of the selected roots once they are ready."""
        return [root.decor_view for root in self.get_stable_selection(matcher).selected]

    def get_stable_root(self, matcher: RootMatcher | None = None) -> Any:
        """Return the single stable decor view for a single-select matcher."""
        if matcher is None:
            matcher = self.default_matcher
        if matcher.is_multi_select:
            raise ValueError(f"get_stable_root() needs a single-select matcher, got '{matcher}'")
        (view,) = self.get_stable_roots(matcher)
        return view
