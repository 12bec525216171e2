"""
Tests for browser session handling
"""
import threading

import pytest

from session_manager import SessionManager


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def manager(scheduler, clock):
    return SessionManager(scheduler=scheduler, idle_timeout=60, clock=clock)


def test_unknown_id_creates_session(manager):
    session = manager.get_session("missing")
    assert session.session_id != "missing"
    assert session.session_id in manager.sessions


def test_no_id_creates_session(manager):
    session = manager.get_session(None)
    assert manager.sessions == {session.session_id: session}


def test_known_id_returns_same_session(manager):
    session = manager.create_session()
    assert manager.get_session(session.session_id) is session


def test_sessions_are_independent(manager):
    first = manager.create_session()
    second = manager.create_session()
    first.calculator.press("1")
    second.calculator.press("2")
    assert first.display == "1"
    assert second.display == "2"


def test_render_updates_display_and_revision(manager):
    session = manager.create_session()
    assert session.snapshot() == {
        'display': "0",
        'state': "editing",
        'revision': 0,
        'auto_clear_ms': None,
    }
    session.calculator.press("4")
    session.calculator.press("2")
    session.calculator.evaluate()
    snapshot = session.snapshot()
    assert snapshot['display'] == "42"
    assert snapshot['state'] == "evaluated"
    assert snapshot['revision'] == 3


def test_snapshot_reports_pending_clear(manager, scheduler):
    session = manager.create_session()
    for token in "1/0":
        session.calculator.press(token)
    session.calculator.evaluate()
    assert session.snapshot()['display'] == "Error"
    assert session.snapshot()['auto_clear_ms'] == 900

    scheduler.run_pending()
    assert session.snapshot()['display'] == "0"
    assert session.snapshot()['auto_clear_ms'] is None


def test_idle_sessions_are_pruned(manager, clock):
    old = manager.create_session()
    clock.now += 30
    fresh = manager.create_session()
    clock.now += 45
    assert manager.prune_idle_sessions() == 1
    assert old.session_id not in manager.sessions
    assert fresh.session_id in manager.sessions


def test_access_keeps_session_alive(manager, clock):
    session = manager.create_session()
    clock.now += 50
    manager.get_session(session.session_id)
    clock.now += 50
    assert manager.get_session(session.session_id) is session


def test_remove_session(manager):
    session = manager.create_session()
    assert manager.remove_session(session.session_id) is True
    assert manager.remove_session(session.session_id) is False


class RecordingLock:
    def __init__(self):
        self.inner = threading.RLock()
        self.entered = 0

    def __enter__(self):
        self.inner.acquire()
        self.entered += 1
        return self

    def __exit__(self, *exc):
        self.inner.release()
        return False


def test_snapshot_reads_under_calculator_lock(manager):
    session = manager.create_session()
    lock = RecordingLock()
    session.calculator.lock = lock
    session.snapshot()
    assert lock.entered == 1
