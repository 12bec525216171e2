"""
Logging setup for WebCalc
"""
import logging

import structlog

import config


def configure_logging(level=None):
    """Configure structlog with a console renderer at the given level"""
    level_name = (level or config.LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )
    return numeric_level
