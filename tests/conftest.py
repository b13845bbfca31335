# tests/conftest.py
import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


class FakeTimer:
    """A pending callback on the FakeScheduler's clock."""

    def __init__(self, due_ms, callback):
        self.due_ms = due_ms
        self.callback = callback
        self._active = True

    def stop(self):
        self._active = False

    def is_active(self):
        return self._active


class FakeScheduler:
    """Deterministic stand-in for QtScheduler: time only moves in advance()."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def now_ms(self):
        return self.now

    def call_later(self, delay_ms, callback):
        timer = FakeTimer(self.now + max(0.0, float(delay_ms)), callback)
        self.timers.append(timer)
        return timer

    def pending(self):
        return [t for t in self.timers if t.is_active()]

    def advance(self, ms):
        """Moves the clock forward, firing due callbacks in order, including ones they schedule."""
        target = self.now + ms
        while True:
            due = [t for t in self.pending() if t.due_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due_ms)
            self.now = timer.due_ms
            timer.stop()
            timer.callback()
        self.now = target


@pytest.fixture(scope="session")
def qapp():
    """Session-scoped QApplication instance for all tests that need it."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    return app


@pytest.fixture
def fake_scheduler():
    return FakeScheduler()
