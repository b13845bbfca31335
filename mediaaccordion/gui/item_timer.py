# mediaaccordion/gui/item_timer.py
import logging
import time
from PySide6.QtCore import QObject, QTimer, Signal

logger = logging.getLogger(__name__)


class ItemTimer(QObject):
    """
    A single-shot timer for one pending callback (an auto-advance or a
    debounced resize). Listeners connect to fired; stopping the timer
    guarantees fired will not be emitted.
    """
    fired = Signal()

    def __init__(self, parent=None):
        """
        Initializes the ItemTimer.

        Args:
            parent (QObject, optional): Parent object. Defaults to None.
        """
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._handle_timeout)

    def _handle_timeout(self):
        """Internal handler for QTimer's timeout signal."""
        logger.debug("ItemTimer fired.")
        self.fired.emit()

    def start(self, duration_ms):
        """
        Starts (or restarts) the timer.

        Args:
            duration_ms (float): Delay in milliseconds. Zero fires on the next
                event loop iteration.
        """
        delay = max(0, int(round(duration_ms)))
        logger.debug(f"ItemTimer: starting for {delay} ms.")
        self._timer.start(delay)

    def stop(self):
        """Stops the timer if it is active."""
        if self._timer.isActive():
            logger.debug("ItemTimer: stopping.")
            self._timer.stop()

    def is_active(self):
        """
        Checks if the timer is currently active.

        Returns:
            bool: True if the timer is active, False otherwise.
        """
        return self._timer.isActive()


class QtScheduler:
    """Schedules callbacks on the Qt event loop and reads a monotonic clock."""

    def __init__(self):
        # Callers may drop the handle; the timer must still fire.
        self._live_timers = set()

    def now_ms(self):
        return time.monotonic() * 1000.0

    def call_later(self, delay_ms, callback):
        """Runs callback once after delay_ms; returns the ItemTimer handle."""
        self._live_timers = {t for t in self._live_timers if t.is_active()}

        def run():
            self._live_timers.discard(timer)
            callback()

        timer = ItemTimer()
        timer.fired.connect(run)
        timer.start(delay_ms)
        self._live_timers.add(timer)
        return timer
