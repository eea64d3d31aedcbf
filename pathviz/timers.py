"""
Animation Timer Module - Single cancellable one-shot timer handle.

The scheduler only ever holds one pending callback. Implementations:
    - ManualTimer: headless, fired explicitly (tests, tools)
    - QtAnimationTimer: QTimer backed, see pathviz.qt_timer
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class AnimationTimer(ABC):
    """
    Abstract one-shot timer.

    start() replaces any pending callback; cancel() drops it.
    """

    @abstractmethod
    def start(self, delay_ms: int, callback: Callable[[], None]) -> None:
        """Schedule callback once after delay_ms, replacing any pending one."""
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Drop the pending callback, if any."""
        pass

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """True while a callback is pending."""
        pass


class ManualTimer(AnimationTimer):
    """
    Timer that only fires when told to.

    Keeps the pending delay so callers can check what was scheduled.

    Example:
        timer = ManualTimer()
        scheduler = AnimationScheduler(timer)
        scheduler.play()
        while timer.is_active:
            timer.fire()
    """

    def __init__(self):
        self._callback: Optional[Callable[[], None]] = None
        self._delay_ms: Optional[int] = None
        self.fired_count = 0
        self.elapsed_ms = 0

    def start(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._delay_ms = delay_ms

    def cancel(self) -> None:
        self._callback = None
        self._delay_ms = None

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    @property
    def pending_delay_ms(self) -> Optional[int]:
        """Delay of the pending callback, or None."""
        return self._delay_ms

    def fire(self) -> bool:
        """
        Run the pending callback.

        Returns:
            True if a callback ran
        """
        if self._callback is None:
            return False
        callback = self._callback
        self.elapsed_ms += self._delay_ms or 0
        self._callback = None
        self._delay_ms = None
        self.fired_count += 1
        callback()
        return True

    def run_until_idle(self, max_fires: int = 100000) -> int:
        """
        Fire until nothing is pending.

        Returns:
            Number of callbacks run
        """
        fired = 0
        while self.is_active and fired < max_fires:
            self.fire()
            fired += 1
        if self.is_active:
            logger.warning(f"Timer still active after {max_fires} fires")
        return fired
