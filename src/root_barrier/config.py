"""Wait budgets for the stabilization barrier and the activity-resume waiter.

Defaults may be overridden through the environment::

    ROOT_BARRIER_IDLE_LOOPS=3
    ROOT_BARRIER_MAX_LOOPS=1001
    ROOT_BARRIER_LOOP_INTERVAL_MS=10
    ROOT_BARRIER_RESUME_BACKOFF_MS=10,50,100,500,2000,30000

Malformed values are skipped with a warning and the default is kept.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Loops that only drain the queue until idle before switching to timed pumps.
IDLE_LOOPS = 3
# Hard cap on readiness re-checks; with 10ms pumps this is roughly 10 seconds.
MAX_LOOPS = 1001
LOOP_INTERVAL_MS = 10
RESUME_BACKOFF_MS: tuple[int, ...] = (10, 50, 100, 500, 2_000, 30_000)

_ENV_PREFIX = "ROOT_BARRIER_"


@dataclass(frozen=True)
class BarrierConfig:
    idle_loops: int = IDLE_LOOPS
    max_loops: int = MAX_LOOPS
    loop_interval_ms: int = LOOP_INTERVAL_MS
    resume_backoff_ms: tuple[int, ...] = RESUME_BACKOFF_MS

    def __post_init__(self):
        if self.idle_loops < 0:
            raise ValueError(f"idle_loops must be >= 0, got {self.idle_loops}")
        if self.max_loops < self.idle_loops:
            raise ValueError(
                f"max_loops ({self.max_loops}) must be >= idle_loops ({self.idle_loops})"
            )
        if self.loop_interval_ms <= 0:
            raise ValueError(f"loop_interval_ms must be > 0, got {self.loop_interval_ms}")
        if not self.resume_backoff_ms:
            raise ValueError("resume_backoff_ms must contain at least one wait")
        if any(wait <= 0 for wait in self.resume_backoff_ms):
            raise ValueError(f"resume_backoff_ms must be positive, got {self.resume_backoff_ms}")

    @property
    def max_resume_wait_ms(self) -> int:
        return sum(self.resume_backoff_ms)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "BarrierConfig":
        """Build a config from ``ROOT_BARRIER_*`` variables, keeping defaults for the rest."""
        env = os.environ if environ is None else environ
        idle_loops = _int_env(env, "IDLE_LOOPS", IDLE_LOOPS)
        max_loops = _int_env(env, "MAX_LOOPS", MAX_LOOPS)
        if max_loops < idle_loops:
            logger.warning(
                "Ignoring %sIDLE_LOOPS=%d and %sMAX_LOOPS=%d: max loops must be >= idle loops",
                _ENV_PREFIX,
                idle_loops,
                _ENV_PREFIX,
                max_loops,
            )
            idle_loops, max_loops = IDLE_LOOPS, MAX_LOOPS
        return cls(
            idle_loops=idle_loops,
            max_loops=max_loops,
            loop_interval_ms=_int_env(env, "LOOP_INTERVAL_MS", LOOP_INTERVAL_MS, minimum=1),
            resume_backoff_ms=_schedule_env(env, "RESUME_BACKOFF_MS", RESUME_BACKOFF_MS),
        )


def _int_env(env, name: str, default: int, minimum: int = 0) -> int:
    raw = env.get(_ENV_PREFIX + name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s%s=%r: not an integer", _ENV_PREFIX, name, raw)
        return default
    if value < minimum:
        logger.warning("Ignoring %s%s=%r: must be >= %d", _ENV_PREFIX, name, raw, minimum)
        return default
    return value


def _schedule_env(env, name: str, default: tuple[int, ...]) -> tuple[int, ...]:
    raw = env.get(_ENV_PREFIX + name, "").strip()
    if not raw:
        return default
    try:
        schedule = tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError:
        logger.warning(
            "Ignoring %s%s=%r: expected comma-separated integers", _ENV_PREFIX, name, raw
        )
        return default
    if not schedule or any(wait <= 0 for wait in schedule):
        logger.warning("Ignoring %s%s=%r: waits must be positive", _ENV_PREFIX, name, raw)
        return default
    return schedule
