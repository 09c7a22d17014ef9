from root_barrier.roots.matchers import DEFAULT_ROOT_MATCHER
from root_barrier.roots.readiness import is_ready
from root_barrier.roots.service import RootSelector, RootsOracle, pick_best_root
from root_barrier.roots.views import Root, RootMatcher, RootSelection, SelectMode, WindowType

__all__ = [
    "DEFAULT_ROOT_MATCHER",
    "Root",
    "RootMatcher",
    "RootSelection",
    "RootSelector",
    "RootsOracle",
    "SelectMode",
    "WindowType",
    "is_ready",
    "pick_best_root",
]
