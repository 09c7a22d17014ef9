from collections.abc import Iterable

from root_barrier.roots.views import Root


def is_ready(roots: Iterable[Root], ignore_focus: bool) -> bool:
    """Return True when no root is mid-layout and every focusable root holds focus.

    A pending layout on any root vetoes the whole batch at once; the focus
    requirement is accumulated over all roots. An empty batch is ready.
    """
    ready = True
    for root in roots:
        if root.is_layout_requested:
            return False
        ready &= ignore_focus or root.has_window_focus or not root.is_focusable
    return ready
