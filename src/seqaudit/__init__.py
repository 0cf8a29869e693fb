"""
Seq audit sink for structlog.

Ships every log event to a Seq server with a single blocking HTTP request,
raising when delivery fails instead of dropping the event:
- compact: CLEF payloads (application/vnd.serilog.clef)
- raw: {"Events": [...]} payloads (application/json)

Library: structlog + orjson for serialization, httpx for transport.
"""

from .core import configure_logging, get_logger, shutdown_logging
from .exceptions import DeliveryFailedError, InvalidArgumentError, SeqAuditError, SinkClosedError
from .sinks import BaseSink, SeqAuditSink

__all__ = [
    "configure_logging",
    "get_logger",
    "shutdown_logging",
    "BaseSink",
    "SeqAuditSink",
    "SeqAuditError",
    "InvalidArgumentError",
    "DeliveryFailedError",
    "SinkClosedError",
]
