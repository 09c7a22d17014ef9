"""Win32 message pump used as the barrier's UI controller."""

import logging
import threading
import time

import comtypes
import comtypes.client
import win32gui

from root_barrier.errors import PreconditionError

logger = logging.getLogger(__name__)


class Win32MessagePump:
    """Pumps the calling thread's window messages and COM events.

    The creating thread owns the pump. Use it as a context manager so COM
    is initialised for that thread while pumping.
    """

    def __init__(self):
        self._owner = threading.get_ident()
        self._com_initialized = False

    def __enter__(self):
        self._check_owner()
        comtypes.CoInitialize()
        self._com_initialized = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._com_initialized:
            comtypes.CoUninitialize()
            self._com_initialized = False

    def is_owner_thread(self) -> bool:
        return threading.get_ident() == self._owner

    def _check_owner(self) -> None:
        if not self.is_owner_thread():
            raise PreconditionError("The message pump can only be used from its owner thread.")

    def loop_until_idle(self) -> None:
        self._check_owner()
        win32gui.PumpWaitingMessages()

    def loop_for_at_least(self, millis: int) -> None:
        self._check_owner()
        deadline = time.monotonic() + millis / 1000
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            comtypes.client.PumpEvents(remaining)
        win32gui.PumpWaitingMessages()
