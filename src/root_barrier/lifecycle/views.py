from enum import Enum


class Stage(Enum):
    """Activity lifecycle stages, in the order an activity passes through them."""

    PRE_ON_CREATE = "pre_on_create"
    CREATED = "created"
    STARTED = "started"
    RESUMED = "resumed"
    PAUSED = "paused"
    STOPPED = "stopped"
    RESTARTED = "restarted"
    DESTROYED = "destroyed"

    def __str__(self):
        return self.value

    @classmethod
    def range(cls, first: "Stage", last: "Stage") -> tuple["Stage", ...]:
        """Stages from ``first`` through ``last`` inclusive, in declaration order."""
        members = list(cls)
        return tuple(members[members.index(first) : members.index(last) + 1])


# Every stage an activity can be in before it is destroyed.
LIVE_STAGES = Stage.range(Stage.PRE_ON_CREATE, Stage.RESTARTED)
