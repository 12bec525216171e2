"""
Calculator Engine for WebCalc
Holds the expression buffer and drives evaluation and error recovery
"""
import threading

import structlog

import config
from evaluator import ExpressionError, format_result, safe_evaluate

logger = structlog.get_logger()

EDITING = "editing"
EVALUATED = "evaluated"


class InvalidTokenError(ValueError):
    """Raised when a token is not one of the calculator's display tokens."""


def schedule_timer(delay_ms, callback):
    """Run callback once after delay_ms on a daemon timer thread"""
    timer = threading.Timer(delay_ms / 1000.0, callback)
    timer.daemon = True
    timer.start()
    return timer


class Calculator:
    """Expression engine behind the calculator display.

    Every state change is pushed to the `render` callable with the text the
    display should show. `scheduler(delay_ms, callback)` runs the post-error
    auto-clear and must return an object with a `cancel()` method.
    """

    def __init__(self, render=None, scheduler=None,
                 auto_clear_delay_ms=None, flush_pending_clear=None):
        self.current_expression = ""
        self.last_evaluated = False
        self.render = render
        self.scheduler = scheduler or schedule_timer
        self.auto_clear_delay_ms = (config.AUTO_CLEAR_DELAY_MS
                                    if auto_clear_delay_ms is None else auto_clear_delay_ms)
        self.flush_pending_clear = (config.FLUSH_PENDING_CLEAR_ON_INPUT
                                    if flush_pending_clear is None else flush_pending_clear)
        self._pending_clears = []
        self.lock = threading.RLock()

    @property
    def state(self):
        return EVALUATED if self.last_evaluated else EDITING

    @property
    def has_pending_clear(self):
        return bool(self._pending_clears)

    def get_display(self):
        """Get the text the display should show"""
        return self.current_expression if self.current_expression else config.EMPTY_DISPLAY

    def press(self, token):
        """Append a button or key token after checking it is a display token"""
        if not isinstance(token, str) or len(token) != 1 or token not in config.DISPLAY_TOKENS:
            raise InvalidTokenError(f"Unknown token: {token!r}")
        return self.append_token(token)

    def append_token(self, token):
        """Append a digit, decimal point, operator or parenthesis"""
        with self.lock:
            self._flush_pending_clear()
            if self.last_evaluated and token in config.DIGIT_TOKENS:
                # A new number after a result starts a fresh expression
                self.current_expression = ""
            self.last_evaluated = False
            self.current_expression += token
            return self._update_display()

    def clear(self):
        """Clear the whole expression"""
        with self.lock:
            self._flush_pending_clear()
            self.current_expression = ""
            self.last_evaluated = False
            return self._update_display()

    def backspace(self):
        """Delete the last character, or everything after a result"""
        with self.lock:
            self._flush_pending_clear()
            if self.last_evaluated:
                self.current_expression = ""
                self.last_evaluated = False
            else:
                self.current_expression = self.current_expression[:-1]
            return self._update_display()

    def evaluate(self):
        """Evaluate the current expression"""
        with self.lock:
            self._flush_pending_clear()
            if not self.current_expression.strip():
                return self.get_display()

            expression = self.current_expression
            try:
                result = format_result(safe_evaluate(expression))
            except ExpressionError as e:
                logger.info("Expression rejected", error=type(e).__name__, detail=str(e))
                logger.debug("Rejected expression", expression=expression)
                self.current_expression = config.ERROR_TEXT
                self.last_evaluated = True
                display = self._update_display()
                self._schedule_auto_clear()
                return display

            logger.debug("Expression evaluated", expression=expression, result=result)
            self.current_expression = result
            self.last_evaluated = True
            return self._update_display()

    def _schedule_auto_clear(self):
        handle = None

        def fire():
            # Wait until evaluate() has stored the handle
            with self.lock:
                self._auto_clear(handle)

        handle = self.scheduler(self.auto_clear_delay_ms, fire)
        self._pending_clears.append(handle)

    def _auto_clear(self, handle=None):
        with self.lock:
            if handle is not None:
                if handle not in self._pending_clears:
                    # Already flushed
                    return
                self._pending_clears.remove(handle)
            self.current_expression = ""
            self.last_evaluated = False
            self._update_display()

    def _flush_pending_clear(self):
        """Apply a pending auto-clear now instead of letting it fire later"""
        if not self.flush_pending_clear or not self._pending_clears:
            return
        for handle in self._pending_clears:
            handle.cancel()
        self._pending_clears = []
        self._auto_clear()

    def _update_display(self):
        display = self.get_display()
        if self.render is not None:
            self.render(display)
        return display
