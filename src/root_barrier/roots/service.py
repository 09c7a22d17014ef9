"""Root enumeration, matching and tie-breaking.

The selector never stores the enumeration it worked from: the full root list
travels back to the caller inside :class:`RootSelection` (or inside the
raised error) so diagnostics always describe the same snapshot.
"""

import logging
from collections.abc import Sequence
from typing import Protocol

from root_barrier.errors import NoMatchingRootError, NoRootsDiscoveredError
from root_barrier.roots.views import Root, RootMatcher, RootSelection

logger = logging.getLogger(__name__)


class RootsOracle(Protocol):
    def get_roots(self) -> list[Root]: ...


class ResumeWaiter(Protocol):
    def wait_for_resumed_activity(self) -> None: ...


def pick_best_root(roots: Sequence[Root]) -> Root:
    """Pick the root a user would interact with: the first dialog, else the topmost layer.

    Layer ties keep the earlier root in enumeration order.
    """
    if not roots:
        raise ValueError("pick_best_root() requires at least one root")
    best = roots[0]
    for root in roots:
        if root.is_dialog:
            return root
        if root.window_type > best.window_type:
            best = root
    return best


class RootSelector:
    """Enumerates the current roots and narrows them down with a matcher."""

    def __init__(self, roots_oracle: RootsOracle, resume_waiter: ResumeWaiter):
        self._roots_oracle = roots_oracle
        self._resume_waiter = resume_waiter

    def find_roots(self, matcher: RootMatcher) -> RootSelection:
        self._resume_waiter.wait_for_resumed_activity()

        all_roots = list(self._roots_oracle.get_roots())
        if not all_roots:
            raise NoRootsDiscoveredError()

        # Several roots show up with popups, dialogs, or activities that are not
        # yet torn down. Only worth noting when a single root is wanted.
        if len(all_roots) > 1 and not matcher.is_multi_select:
            logger.debug("Multiple windows detected: %s", [str(root) for root in all_roots])

        selected = [root for root in all_roots if matcher.matches(root)]
        if not selected:
            raise NoMatchingRootError(matcher, all_roots)

        if matcher.is_multi_select:
            return RootSelection(selected=selected, all_roots=all_roots)
        return RootSelection(selected=[pick_best_root(selected)], all_roots=all_roots)
