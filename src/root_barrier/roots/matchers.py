"""Composable root matchers.

Each matcher carries a human-readable description used in error messages,
and a select mode: single-select matchers resolve to the best matching root,
multi-select matchers (see :func:`multi`) resolve to all of them.
"""

from root_barrier.roots.views import Root, RootMatcher, SelectMode, WindowType


def any_root() -> RootMatcher:
    return RootMatcher(lambda root: True, "any root")


def is_dialog() -> RootMatcher:
    return RootMatcher(lambda root: root.is_dialog, "is dialog")


def is_focusable() -> RootMatcher:
    return RootMatcher(lambda root: root.is_focusable, "is focusable")


def has_window_focus() -> RootMatcher:
    return RootMatcher(lambda root: root.has_window_focus, "has window focus")


def with_window_type(window_type: int) -> RootMatcher:
    return RootMatcher(
        lambda root: root.window_type == window_type,
        f"with window type {int(window_type)}",
    )


def is_platform_popup() -> RootMatcher:
    """Match popup layers (panels, sub panels, attached dialogs)."""
    return RootMatcher(lambda root: WindowType.is_panel(root.window_type), "is platform popup")


def with_process_name(name: str) -> RootMatcher:
    """Match roots owned by a process, compared case-insensitively."""
    wanted = name.lower()
    return RootMatcher(
        lambda root: (root.process_name or "").lower() == wanted,
        f"with process name '{name}'",
    )


def all_of(*matchers: RootMatcher) -> RootMatcher:
    if not matchers:
        raise ValueError("all_of() requires at least one matcher")

    def predicate(root: Root) -> bool:
        return all(m.matches(root) for m in matchers)

    return RootMatcher(predicate, "(" + " and ".join(m.description for m in matchers) + ")")


def any_of(*matchers: RootMatcher) -> RootMatcher:
    if not matchers:
        raise ValueError("any_of() requires at least one matcher")

    def predicate(root: Root) -> bool:
        return any(m.matches(root) for m in matchers)

    return RootMatcher(predicate, "(" + " or ".join(m.description for m in matchers) + ")")


def is_not(matcher: RootMatcher) -> RootMatcher:
    return RootMatcher(lambda root: not matcher.matches(root), f"not {matcher.description}")


def multi(matcher: RootMatcher) -> RootMatcher:
    """Select every root ``matcher`` accepts; readiness then ignores window focus."""
    if matcher.mode is SelectMode.MULTI:
        return matcher
    return RootMatcher(matcher.predicate, f"multi {matcher.description}", SelectMode.MULTI)


# Focusable roots, where a dialog only qualifies once it holds window focus.
DEFAULT_ROOT_MATCHER = all_of(
    is_focusable(),
    any_of(all_of(is_dialog(), has_window_focus()), is_not(is_dialog())),
)
