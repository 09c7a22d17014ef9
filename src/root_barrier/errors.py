"""Exceptions raised while waiting for stable roots.

Every error carries its diagnostic payload as attributes so callers can
render their own report without querying the UI again.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from root_barrier.roots.views import Root, RootMatcher


def _join(roots: Sequence[Root]) -> str:
    return "\n".join(str(root) for root in roots)


class RootBarrierError(Exception):
    """Base class for all root-barrier failures."""


class PreconditionError(RootBarrierError):
    """Raised when the barrier is entered from a thread that does not own the UI."""


class NoActivitiesFoundError(RootBarrierError):
    """Raised when no activity exists in any live lifecycle stage."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "No activities found. Did you forget to launch the activity "
            "under test before asking for its windows?"
        )


class NoActivityResumedError(RootBarrierError):
    """Raised when the resume backoff schedule runs out."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "No activities in stage RESUMED. Did you forget to launch the activity "
            "under test?"
        )


class NoRootsDiscoveredError(RootBarrierError):
    """Raised when the enumeration provider returns no roots at all."""

    def __init__(self, message: str | None = None):
        super().__init__(message or "No root window were discovered.")


class NoMatchingRootError(RootBarrierError):
    """Raised when roots exist but none of them satisfies the matcher."""

    def __init__(self, matcher: RootMatcher, all_roots: Sequence[Root]):
        self.matcher = matcher
        self.all_roots = list(all_roots)
        super().__init__(
            f"Matcher '{matcher.description}' did not match any of the following roots:\n"
            f"{_join(self.all_roots)}"
        )


class StabilizationTimeoutError(RootBarrierError):
    """Raised when the selected roots never become ready within the loop budget."""

    def __init__(self, selected_roots: Sequence[Root], all_roots: Sequence[Root]):
        self.selected_roots = list(selected_roots)
        self.all_roots = list(all_roots)
        super().__init__(
            "Waited for the selected roots of the view hierarchy to have window focus "
            "and not be requesting layout for too long. If you specified a non default "
            "root matcher, it may be picking roots that never take focus. Otherwise, "
            f"something is seriously wrong. Selected Roots:\n{_join(self.selected_roots)}\n"
            f". All Roots:\n{_join(self.all_roots)}"
        )
