"""Top-level window enumeration for the stable-root barrier on Windows.

Each visible, non-minimised top-level window becomes a :class:`Root`
snapshot, in z-order (topmost first).
"""

import ctypes
import logging
import threading
from collections.abc import Iterable

import win32gui
import win32process
from psutil import Process

from root_barrier.roots.views import Root, WindowType
from root_barrier.windows.config import (
    DIALOG_CLASS_NAME,
    GW_OWNER,
    GWL_EXSTYLE,
    GWL_STYLE,
    WS_DISABLED,
    WS_EX_DLGMODALFRAME,
    WS_EX_NOACTIVATE,
    WS_EX_TOOLWINDOW,
    WS_EX_TOPMOST,
    WS_POPUP,
)

logger = logging.getLogger(__name__)

_PROCESS_CACHE_MAX = 512


def window_type_of(style: int, ex_style: int, is_dialog: bool, is_owned: bool) -> int:
    """Map Win32 window styles onto a layer ordinal."""
    if ex_style & WS_EX_TOPMOST:
        return WindowType.SYSTEM_ALERT
    if is_dialog:
        return WindowType.APPLICATION_ATTACHED_DIALOG
    if ex_style & WS_EX_TOOLWINDOW or style & WS_POPUP:
        return WindowType.APPLICATION_PANEL
    if is_owned:
        return WindowType.APPLICATION_SUB_PANEL
    return WindowType.APPLICATION


class Win32RootsOracle:
    """Enumerates top-level windows, optionally restricted to a set of processes."""

    def __init__(self, pids: Iterable[int] | None = None):
        self._pids = set(pids) if pids is not None else None
        self._process_name_cache: dict[int, str] = {}
        self._process_cache_lock = threading.Lock()

    def get_process_name(self, pid: int) -> str:
        with self._process_cache_lock:
            name = self._process_name_cache.get(pid)
        if name is not None:
            return name
        try:
            name = Process(pid).name()
        except Exception:
            logger.debug("Failed to resolve process name for PID %d", pid, exc_info=True)
            return ""
        with self._process_cache_lock:
            if len(self._process_name_cache) >= _PROCESS_CACHE_MAX:
                self._process_name_cache.clear()
            self._process_name_cache[pid] = name
        return name

    def get_handles(self) -> list[int]:
        """Visible, non-minimised top-level window handles, topmost first."""
        handles: list[int] = []

        def callback(hwnd, _):
            if win32gui.IsWindowVisible(hwnd) and not win32gui.IsIconic(hwnd):
                handles.append(hwnd)
            return True

        win32gui.EnumWindows(callback, None)
        return handles

    def is_layout_requested(self, hwnd: int) -> bool:
        """True while the window has an unpainted update region or has stopped responding."""
        user32 = ctypes.windll.user32
        return bool(user32.GetUpdateRect(hwnd, None, False)) or bool(user32.IsHungAppWindow(hwnd))

    def get_root(self, hwnd: int, foreground: int) -> Root | None:
        if not win32gui.IsWindow(hwnd):
            return None
        _, pid = win32process.GetWindowThreadProcessId(hwnd)
        if self._pids is not None and pid not in self._pids:
            return None

        style = win32gui.GetWindowLong(hwnd, GWL_STYLE)
        ex_style = win32gui.GetWindowLong(hwnd, GWL_EXSTYLE)
        is_dialog = (
            win32gui.GetClassName(hwnd) == DIALOG_CLASS_NAME
            or bool(ex_style & WS_EX_DLGMODALFRAME)
        )
        is_owned = bool(win32gui.GetWindow(hwnd, GW_OWNER))
        return Root(
            decor_view=hwnd,
            window_type=window_type_of(style, ex_style, is_dialog, is_owned),
            is_layout_requested=self.is_layout_requested(hwnd),
            has_window_focus=hwnd == foreground,
            is_dialog=is_dialog,
            is_focusable=not (ex_style & WS_EX_NOACTIVATE or style & WS_DISABLED),
            name=win32gui.GetWindowText(hwnd),
            handle=hwnd,
            process_id=pid,
            process_name=self.get_process_name(pid),
        )

    def get_roots(self) -> list[Root]:
        foreground = win32gui.GetForegroundWindow()
        roots = []
        for hwnd in self.get_handles():
            try:
                root = self.get_root(hwnd, foreground)
            except win32gui.error:
                # The window went away between enumeration and inspection.
                logger.debug("Skipping window %s that vanished during enumeration", hwnd)
                continue
            if root is not None:
                roots.append(root)
        return roots

    def get_window_pids(self) -> set[int]:
        """PIDs owning at least one visible, enabled top-level window, from one enumeration."""
        return {root.process_id for root in self.get_roots() if root.is_focusable}
