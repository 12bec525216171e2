"""
Session Manager for WebCalc
Keeps one calculator per browser session
"""
import threading
import time
import uuid

import structlog

import config
from calculator import Calculator

logger = structlog.get_logger()


class CalculatorSession:
    def __init__(self, session_id, scheduler=None, clock=time.monotonic):
        self.session_id = session_id
        self.clock = clock
        self.display = config.EMPTY_DISPLAY
        self.revision = 0
        self.last_seen = clock()
        self.calculator = Calculator(render=self.render, scheduler=scheduler)

    def render(self, text):
        """Display sink for the calculator"""
        self.display = text
        self.revision += 1

    def touch(self):
        self.last_seen = self.clock()

    def snapshot(self):
        """Current display state as a JSON-ready dict"""
        calculator = self.calculator
        with calculator.lock:
            return {
                'display': self.display,
                'state': calculator.state,
                'revision': self.revision,
                'auto_clear_ms': calculator.auto_clear_delay_ms if calculator.has_pending_clear else None,
            }


class SessionManager:
    def __init__(self, scheduler=None, idle_timeout=None, clock=time.monotonic):
        self.scheduler = scheduler
        self.idle_timeout = config.SESSION_IDLE_TIMEOUT if idle_timeout is None else idle_timeout
        self.clock = clock
        self.sessions = {}
        self._lock = threading.Lock()

    def create_session(self):
        """Create a session with a fresh calculator"""
        session_id = uuid.uuid4().hex
        session = CalculatorSession(session_id, scheduler=self.scheduler, clock=self.clock)
        with self._lock:
            self.sessions[session_id] = session
        logger.info("Session created", session_id=session_id, active=len(self.sessions))
        return session

    def get_session(self, session_id):
        """Get the session for an id, creating a new one if it is unknown"""
        self.prune_idle_sessions()
        with self._lock:
            session = self.sessions.get(session_id) if session_id else None
        if session is None:
            return self.create_session()
        session.touch()
        return session

    def remove_session(self, session_id):
        with self._lock:
            return self.sessions.pop(session_id, None) is not None

    def prune_idle_sessions(self):
        """Drop sessions not seen for idle_timeout seconds"""
        cutoff = self.clock() - self.idle_timeout
        with self._lock:
            stale = [sid for sid, s in self.sessions.items() if s.last_seen < cutoff]
            for sid in stale:
                del self.sessions[sid]
        if stale:
            logger.info("Pruned idle sessions", count=len(stale), active=len(self.sessions))
        return len(stale)
