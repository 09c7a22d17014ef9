from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


class WindowType(IntEnum):
    """Well-known window layer ordinals. Higher values are drawn above lower ones."""

    BASE_APPLICATION = 1
    APPLICATION = 2
    APPLICATION_STARTING = 3
    APPLICATION_PANEL = 1000
    APPLICATION_MEDIA = 1001
    APPLICATION_SUB_PANEL = 1002
    APPLICATION_ATTACHED_DIALOG = 1003
    STATUS_BAR = 2000
    SEARCH_BAR = 2001
    PHONE = 2002
    SYSTEM_ALERT = 2003
    TOAST = 2005
    SYSTEM_OVERLAY = 2006
    SYSTEM_DIALOG = 2008
    INPUT_METHOD = 2011

    @classmethod
    def is_panel(cls, window_type: int) -> bool:
        return cls.APPLICATION_PANEL <= window_type <= cls.APPLICATION_ATTACHED_DIALOG


@dataclass(frozen=True)
class Root:
    """Snapshot of one top-level window as reported by a roots oracle."""

    decor_view: Any
    window_type: int = WindowType.APPLICATION
    is_layout_requested: bool = False
    has_window_focus: bool = False
    is_dialog: bool = False
    is_focusable: bool = True
    name: str = ""
    handle: int | None = None
    process_id: int | None = None
    process_name: str = field(default="", compare=False)

    def __str__(self) -> str:
        flags = []
        if self.is_dialog:
            flags.append("dialog")
        if self.has_window_focus:
            flags.append("focused")
        if not self.is_focusable:
            flags.append("not-focusable")
        if self.is_layout_requested:
            flags.append("layout-requested")
        owner = f" {self.process_name}({self.process_id})" if self.process_name else ""
        return (
            f"Root{{name={self.name!r}, handle={self.handle}, type={int(self.window_type)},"
            f" flags=[{', '.join(flags)}]{owner}}}"
        )


class SelectMode(Enum):
    SINGLE = "single"
    MULTI = "multi"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class RootMatcher:
    """A predicate over roots plus how many of the matching roots to hand back."""

    predicate: Callable[[Root], bool]
    description: str
    mode: SelectMode = SelectMode.SINGLE

    def matches(self, root: Root) -> bool:
        return bool(self.predicate(root))

    @property
    def is_multi_select(self) -> bool:
        return self.mode is SelectMode.MULTI

    def __str__(self) -> str:
        return self.description


@dataclass(frozen=True)
class RootSelection:
    """Roots picked by a matcher, along with the enumeration they were picked from."""

    selected: list[Root]
    all_roots: list[Root]
