"""Win32 implementations of the roots oracle and UI controller.

``root_barrier.windows.service`` and ``root_barrier.windows.pump`` require
pywin32 and comtypes, so they are not imported here.
"""
