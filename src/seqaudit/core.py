"""
Core logging configuration and initialization logic.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx
import structlog
from structlog.typing import EventDict, WrappedLogger

from .sinks import BaseSink, SeqAuditSink

# =============================================================================
# Global State
# =============================================================================

_sinks: list[BaseSink] = []


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(_name=name or "root")


def get_sinks() -> tuple[BaseSink, ...]:
    """Currently configured sinks."""
    return tuple(_sinks)


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log event."""
    event_dict["logger"] = event_dict.pop("_name", None) or event_dict.get("logger") or "root"
    return event_dict


def audit_renderer(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Render log to all configured sinks.

    Any sink failure propagates to the logging call site; an audit trail
    must never drop an event silently. Returns empty to suppress default output.
    """
    for sink in _sinks:
        sink.emit(event_dict)
    return ""


# =============================================================================
# Configuration Logic
# =============================================================================


class _NopFile:
    def write(self, s: str) -> None:
        pass

    def flush(self) -> None:
        pass


_NOP_FILE = _NopFile()


class SilentPrintLoggerFactory:
    """Logger factory that returns a logger writing to nowhere."""

    def __call__(self, *args: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=_NOP_FILE)


def shutdown_logging() -> None:
    """Close and forget every configured sink."""
    for sink in _sinks:
        sink.close()
    _sinks.clear()


def _configure_structlog(level: str) -> None:
    """Configure structlog processors and factory."""
    shared_processors = [
        structlog.stdlib.add_log_level,
        add_timestamp,
        add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [audit_renderer],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.INFO)),
        context_class=dict,
        logger_factory=SilentPrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(
    *,
    server_url: str,
    api_key: str | None = None,
    use_compact_format: bool = True,
    level: str = "INFO",
    transport: httpx.BaseTransport | None = None,
    intercept_stdlib: bool = False,
) -> SeqAuditSink:
    """
    Configure structlog to audit every event to Seq.

    Args:
        server_url: Seq server base address
        api_key: Optional Seq API key
        use_compact_format: CLEF payloads when True, raw JSON envelope otherwise
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        transport: Optional httpx transport override
        intercept_stdlib: Route standard library logging through the sink as well

    Returns:
        The configured sink.
    """
    # Create the sink first so a bad URL leaves the previous setup intact
    sink = SeqAuditSink(
        server_url,
        api_key,
        transport=transport,
        use_compact_format=use_compact_format,
    )

    shutdown_logging()
    _sinks.append(sink)

    _configure_structlog(level)

    if intercept_stdlib:
        from .interceptors import install_stdlib_handler

        install_stdlib_handler(level)

    return sink
