"""
Shared fixtures for WebCalc tests
"""
import pytest


class FakeTimer:
    def __init__(self, delay_ms, callback):
        self.delay_ms = delay_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled and not self.fired:
            self.fired = True
            self.callback()


class FakeScheduler:
    """Collects scheduled callbacks so tests decide when they run"""

    def __init__(self):
        self.timers = []

    def __call__(self, delay_ms, callback):
        timer = FakeTimer(delay_ms, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def run_pending(self):
        for timer in list(self.pending):
            timer.fire()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def rendered():
    return []
