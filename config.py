"""
WebCalc Configuration Settings
"""
import os

# Application Settings
APP_NAME = "WebCalc Browser Calculator"
VERSION = "1.0.0"

# Display Settings
EMPTY_DISPLAY = "0"
ERROR_TEXT = "Error"
DISPLAY_PRECISION = 12          # significant digits kept in results

# Tokens a button or key may append to the expression
DIGIT_TOKENS = "0123456789."
OPERATOR_TOKENS = "+-*/()%"
DISPLAY_TOKENS = DIGIT_TOKENS + OPERATOR_TOKENS

# Error recovery
AUTO_CLEAR_DELAY_MS = int(os.environ.get("WEBCALC_AUTO_CLEAR_DELAY_MS", 900))

# True: new input while an auto-clear is pending applies the clear right away.
# False: the timer is left running and wipes whatever was typed meanwhile.
FLUSH_PENDING_CLEAR_ON_INPUT = os.environ.get(
    "WEBCALC_FLUSH_PENDING_CLEAR", "1"
).lower() not in ("0", "false", "no")

# Browser session settings
SESSION_COOKIE_NAME = "webcalc_session"
SESSION_IDLE_TIMEOUT = int(os.environ.get("WEBCALC_SESSION_IDLE_TIMEOUT", 3600))

# Logging
LOG_LEVEL = os.environ.get("WEBCALC_LOG_LEVEL", "INFO").upper()

# Web Portal settings
WEB_HOST = os.environ.get("WEBCALC_HOST", "0.0.0.0")
WEB_PORT = int(os.environ.get("WEBCALC_PORT", 8888))
WEB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "web")
