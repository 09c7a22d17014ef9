from root_barrier.pump.service import TaskQueuePump, UiController

__all__ = ["TaskQueuePump", "UiController"]
