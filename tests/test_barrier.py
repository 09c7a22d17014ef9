"""Unit tests for StabilizationBarrier.get_stable_roots().

Scenarios drive the barrier with scripted root snapshots and a recording
controller, so every pump the barrier performs can be counted exactly.
"""

import threading

import pytest

from root_barrier.barrier.service import StabilizationBarrier
from root_barrier.config import BarrierConfig
from root_barrier.errors import (
    NoActivitiesFoundError,
    NoMatchingRootError,
    NoRootsDiscoveredError,
    PreconditionError,
    StabilizationTimeoutError,
)
from root_barrier.lifecycle.monitor import ActivityLifecycleMonitor
from root_barrier.lifecycle.views import Stage
from root_barrier.pump.service import TaskQueuePump
from root_barrier.roots import matchers
from root_barrier.roots.views import Root
from tests.fakes import (
    FakeController,
    FakeLifecycleMonitor,
    ScriptedRootsOracle,
    make_root,
    resumed_monitor,
)


def _barrier(*snapshots, controller=None, monitor=None, **kwargs):
    oracle = ScriptedRootsOracle(*snapshots)
    controller = controller or FakeController()
    barrier = StabilizationBarrier(oracle, controller, monitor or resumed_monitor(), **kwargs)
    return barrier, oracle, controller


# ===========================================================================
# Barrier scenarios
# ===========================================================================


class TestScenarios:
    def test_empty_enumeration_raises_no_roots_discovered(self):
        barrier, _, controller = _barrier([])
        with pytest.raises(NoRootsDiscoveredError):
            barrier.get_stable_roots(matchers.any_root())
        assert controller.calls == []

    def test_ready_root_returned_without_pumping(self):
        barrier, oracle, controller = _barrier([make_root("main", focused=True)])
        assert barrier.get_stable_roots(matchers.any_root()) == ["main-view"]
        assert controller.calls == []
        assert oracle.calls == 1

    def test_pending_layout_settles_after_one_idle_pump(self):
        barrier, oracle, controller = _barrier(
            [make_root("main", layout_requested=True)],
            [make_root("main", layout_requested=False, focused=True)],
        )
        assert barrier.get_stable_roots(matchers.any_root()) == ["main-view"]
        assert controller.calls == [("idle", None)]
        assert oracle.calls == 2

    def test_unfocused_dialog_is_picked_and_waited_for(self):
        dialog = make_root("dialog", dialog=True, focused=False)
        app = make_root("app", focused=True)
        focused_dialog = make_root("dialog", dialog=True, focused=True)
        barrier, oracle, controller = _barrier(
            [dialog, app], [dialog, app], [focused_dialog, make_root("app", focused=False)]
        )
        assert barrier.get_stable_roots(matchers.any_root()) == ["dialog-view"]
        assert controller.calls == [("idle", None), ("idle", None)]
        assert oracle.calls == 3

    def test_non_focusable_dialog_is_ready_without_focus(self):
        dialog = make_root("dialog", dialog=True, focused=False, focusable=False)
        barrier, _, controller = _barrier([dialog, make_root("app", focused=True)])
        assert barrier.get_stable_roots(matchers.any_root()) == ["dialog-view"]
        assert controller.calls == []

    def test_no_activities_raises_no_activities_found(self):
        barrier, oracle, _ = _barrier([make_root()], monitor=FakeLifecycleMonitor())
        with pytest.raises(NoActivitiesFoundError):
            barrier.get_stable_roots(matchers.any_root())
        assert oracle.calls == 0

    def test_never_ready_raises_timeout_with_both_root_lists(self):
        unfocused = make_root("main", focused=False)
        other = make_root("other", focusable=False)
        barrier, oracle, controller = _barrier([unfocused, other])
        with pytest.raises(StabilizationTimeoutError) as exc_info:
            barrier.get_stable_roots(matchers.is_focusable())
        err = exc_info.value
        assert err.selected_roots == [unfocused]
        assert err.all_roots == [unfocused, other]
        assert "Selected Roots" in str(err)
        assert controller.idle_calls == 3
        assert controller.timed_calls == [10] * 998
        assert oracle.calls == 1002


# ===========================================================================
# Escalation and precondition
# ===========================================================================


class TestEscalation:
    def test_switches_to_timed_pumps_after_idle_loops(self):
        pending = make_root("main", layout_requested=True)
        barrier, _, controller = _barrier(*([[pending]] * 6), [make_root("main")])
        barrier.get_stable_roots(matchers.any_root())
        assert controller.calls == [
            ("idle", None),
            ("idle", None),
            ("idle", None),
            ("timed", 10),
            ("timed", 10),
            ("timed", 10),
        ]

    def test_config_overrides_budget(self):
        config = BarrierConfig(idle_loops=1, max_loops=2, loop_interval_ms=25)
        barrier, oracle, controller = _barrier(
            [make_root(focused=False)], config=config
        )
        with pytest.raises(StabilizationTimeoutError):
            barrier.get_stable_roots(matchers.any_root())
        assert controller.calls == [("idle", None), ("timed", 25)]
        assert oracle.calls == 3

    def test_no_match_during_retry_propagates(self):
        barrier, _, _ = _barrier(
            [make_root("main", layout_requested=True)], [make_root("main", focusable=False)]
        )
        with pytest.raises(NoMatchingRootError):
            barrier.get_stable_roots(matchers.is_focusable())

    def test_off_thread_call_raises_precondition_error(self):
        barrier, oracle, controller = _barrier(
            [make_root()], controller=FakeController(owner=False)
        )
        with pytest.raises(PreconditionError):
            barrier.get_stable_roots(matchers.any_root())
        assert oracle.calls == 0
        assert controller.calls == []


# ===========================================================================
# Matcher handling
# ===========================================================================


class TestMatcherHandling:
    def test_uses_default_matcher_when_none_given(self):
        dialog = make_root("dialog", dialog=True, focused=False)
        app = make_root("app", focused=True)
        barrier, _, _ = _barrier([dialog, app])
        # The default matcher skips a dialog until it holds focus.
        assert barrier.get_stable_roots() == ["app-view"]

    def test_constructor_default_matcher(self):
        barrier, _, _ = _barrier(
            [make_root("app"), make_root("dialog", dialog=True)],
            default_matcher=matchers.is_not(matchers.is_dialog()),
        )
        assert barrier.get_stable_roots() == ["app-view"]

    def test_multi_select_returns_all_and_ignores_focus(self):
        roots = [
            make_root("a", focused=False),
            make_root("b", focused=False, dialog=True),
            make_root("c", focused=True),
        ]
        barrier, _, controller = _barrier(roots)
        views = barrier.get_stable_roots(matchers.multi(matchers.any_root()))
        assert views == ["a-view", "b-view", "c-view"]
        assert controller.calls == []

    def test_multi_select_still_waits_for_layout(self):
        barrier, _, controller = _barrier(
            [make_root("a"), make_root("b", layout_requested=True)],
            [make_root("a"), make_root("b")],
        )
        views = barrier.get_stable_roots(matchers.multi(matchers.any_root()))
        assert views == ["a-view", "b-view"]
        assert controller.calls == [("idle", None)]

    def test_default_changed_mid_call_is_not_observed(self):
        """The matcher is captured once on entry."""
        barrier, _, controller = _barrier(
            [make_root("main", layout_requested=True)],
            [make_root("main", focused=True)],
            default_matcher=matchers.any_root(),
        )
        controller.on_pump.append(
            lambda: setattr(barrier, "default_matcher", matchers.is_dialog())
        )
        assert barrier.get_stable_roots() == ["main-view"]

    def test_stable_selection_is_the_snapshot_that_passed(self):
        pending = make_root("main", layout_requested=True)
        settled = make_root("main", focused=True)
        other = make_root("other", dialog=True, focusable=False)
        barrier, oracle, _ = _barrier([pending, other], [settled, other])
        selection = barrier.get_stable_selection(matchers.is_focusable())
        assert selection.selected == [settled]
        assert selection.all_roots == [settled, other]
        assert oracle.calls == 2

    def test_get_stable_root_returns_single_view(self):
        barrier, _, _ = _barrier([make_root("main")])
        assert barrier.get_stable_root(matchers.any_root()) == "main-view"

    def test_get_stable_root_rejects_multi_matcher(self):
        barrier, oracle, _ = _barrier([make_root("main")])
        with pytest.raises(ValueError):
            barrier.get_stable_root(matchers.multi(matchers.any_root()))
        assert oracle.calls == 0


# ===========================================================================
# End to end with the in-memory collaborators
# ===========================================================================


class _LiveRootsOracle:
    def __init__(self):
        self.roots: list[Root] = []

    def get_roots(self) -> list[Root]:
        return list(self.roots)


class TestWithTaskQueuePump:
    def test_activity_resume_and_focus_arrive_through_queue(self):
        pump = TaskQueuePump()
        monitor = ActivityLifecycleMonitor()
        oracle = _LiveRootsOracle()
        activity = object()
        monitor.signal_lifecycle_change(activity, Stage.STARTED)

        def resume():
            monitor.signal_lifecycle_change(activity, Stage.RESUMED)
            oracle.roots = [make_root("main", layout_requested=True, focused=False)]
            pump.post(lambda: setattr(oracle, "roots", [make_root("main", focused=True)]))

        pump.post(resume)
        barrier = StabilizationBarrier(oracle, pump, monitor)
        assert barrier.get_stable_roots(matchers.any_root()) == ["main-view"]
        assert pump.pending == 0

    def test_call_from_other_thread_is_rejected(self):
        pump = TaskQueuePump()
        monitor = ActivityLifecycleMonitor()
        barrier = StabilizationBarrier(_LiveRootsOracle(), pump, monitor)
        errors = []

        def worker():
            try:
                barrier.get_stable_roots(matchers.any_root())
            except Exception as e:
                errors.append(e)

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join(timeout=5)
        assert len(errors) == 1
        assert isinstance(errors[0], PreconditionError)
