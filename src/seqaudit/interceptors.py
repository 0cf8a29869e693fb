"""
Interceptors for capturing standard library logs.
"""

import logging

from .core import get_logger

# Loggers whose records would feed back into the sink that produced them
_SKIPPED_PREFIXES = ("structlog", "httpx", "httpcore")


class AuditStdLibHandler(logging.Handler):
    """
    Redirect standard library logging events to structlog.

    Unlike a regular handler, failures are not routed to ``handleError``:
    a delivery failure surfaces at the stdlib logging call site.
    """

    def emit(self, record: logging.LogRecord) -> None:
        if record.name.startswith(_SKIPPED_PREFIXES):
            return

        msg = record.getMessage()
        logger = get_logger(record.name or "stdlib")

        extra = {}
        if record.exc_info:
            extra["exc_info"] = record.exc_info
        if record.stack_info:
            extra["stack"] = record.stack_info

        logger.log(getattr(logging, record.levelname, logging.INFO), msg, **extra)


def install_stdlib_handler(level: str = "INFO") -> AuditStdLibHandler:
    """Replace all root handlers with an :class:`AuditStdLibHandler`."""
    handler = AuditStdLibHandler()
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)
    return handler
