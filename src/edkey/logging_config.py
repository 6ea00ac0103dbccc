"""Structured logging configuration for edkey."""

import structlog
import logging
import sys

def configure_logging(log_level: str = "INFO", enable_json: bool = False):
    """
    Configure structured logging for edkey.

    Log output goes to stderr; stdout is reserved for keys written with ``-o -``.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_json: Whether to use JSON formatting
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {log_level!r}")

    # Configure standard library logging
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )

    # Configure structlog
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if enable_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


class EdkeyLogger:
    """Structured logger for edkey with context."""

    def __init__(self, logger):
        self.logger = logger

    def bind_context(self, **kwargs) -> 'EdkeyLogger':
        """Bind context variables to logger."""
        return EdkeyLogger(self.logger.bind(**kwargs))

    def debug(self, message: str, **kwargs):
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(message, **kwargs)


def get_logger(name: str) -> EdkeyLogger:
    """Get a structured logger instance."""
    return EdkeyLogger(structlog.get_logger(name))
