from root_barrier.barrier import StabilizationBarrier
from root_barrier.config import BarrierConfig
from root_barrier.errors import (
    NoActivitiesFoundError,
    NoActivityResumedError,
    NoMatchingRootError,
    NoRootsDiscoveredError,
    PreconditionError,
    RootBarrierError,
    StabilizationTimeoutError,
)
from root_barrier.lifecycle import ActivityLifecycleMonitor, ActivityResumeWaiter, Stage
from root_barrier.pump import TaskQueuePump
from root_barrier.roots import (
    DEFAULT_ROOT_MATCHER,
    Root,
    RootMatcher,
    RootSelection,
    RootSelector,
    SelectMode,
    WindowType,
    is_ready,
    pick_best_root,
)

__all__ = [
    "DEFAULT_ROOT_MATCHER",
    "ActivityLifecycleMonitor",
    "ActivityResumeWaiter",
    "BarrierConfig",
    "NoActivitiesFoundError",
    "NoActivityResumedError",
    "NoMatchingRootError",
    "NoRootsDiscoveredError",
    "PreconditionError",
    "Root",
    "RootBarrierError",
    "RootMatcher",
    "RootSelection",
    "RootSelector",
    "SelectMode",
    "StabilizationBarrier",
    "StabilizationTimeoutError",
    "Stage",
    "TaskQueuePump",
    "WindowType",
    "is_ready",
    "pick_best_root",
]
