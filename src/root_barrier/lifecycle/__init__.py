from root_barrier.lifecycle.monitor import ActivityLifecycleMonitor
from root_barrier.lifecycle.process import ProcessLifecycleMonitor
from root_barrier.lifecycle.service import ActivityResumeWaiter, LifecycleMonitor
from root_barrier.lifecycle.views import LIVE_STAGES, Stage

__all__ = [
    "ActivityLifecycleMonitor",
    "ActivityResumeWaiter",
    "LIVE_STAGES",
    "LifecycleMonitor",
    "ProcessLifecycleMonitor",
    "Stage",
]
