"""
Clock and scheduler helpers.

Components that need wall time or a deferred callback take these as
injectable callables so state machines can be driven without an event loop.
"""

import time
from typing import Callable

from PyQt6.QtCore import QTimer

Clock = Callable[[], int]
Scheduler = Callable[[int, Callable[[], None]], None]


def system_clock_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


def qt_scheduler(delay_ms: int, callback: Callable[[], None]) -> None:
    """Run ``callback`` on the Qt event loop after ``delay_ms``."""
    QTimer.singleShot(max(0, int(delay_ms)), callback)
