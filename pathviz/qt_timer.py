"""
Qt Animation Timer - QTimer backed one-shot timer for the Qt event loop.
"""

import logging
from typing import Callable, Optional

from PyQt5.QtCore import QObject, QTimer

from .timers import AnimationTimer

logger = logging.getLogger(__name__)


class QtAnimationTimer(AnimationTimer):
    """
    Single-shot QTimer with one replaceable callback.

    The QTimer is created once and reused; start() stops it before
    re-arming so at most one timeout is ever pending.
    """

    def __init__(self, parent: Optional[QObject] = None):
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timeout)
        self._callback: Optional[Callable[[], None]] = None

    def start(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._timer.stop()
        self._callback = callback
        self._timer.start(max(0, int(delay_ms)))

    def cancel(self) -> None:
        self._timer.stop()
        self._callback = None

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def _on_timeout(self):
        callback = self._callback
        self._callback = None
        if callback is not None:
            callback()
