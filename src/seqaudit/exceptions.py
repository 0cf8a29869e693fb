"""
seqaudit exception hierarchy.

Every failure raised by the sink reaches the caller of the logging call.
Transport-level failures (``httpx.TransportError``) are not part of this
hierarchy: they propagate from httpx unmodified.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SeqAuditError(Exception):
    """Base class for all seqaudit errors.

    Carries a machine-readable ``code`` and a ``details`` mapping next to the
    human-readable message.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class InvalidArgumentError(SeqAuditError, ValueError):
    """A required argument was missing or unusable.

    Raised synchronously, before any I/O takes place.
    """

    def __init__(self, *, argument: str, reason: str = "must not be None") -> None:
        super().__init__(
            f"Argument '{argument}' {reason}",
            code="INVALID_ARGUMENT",
            details={"argument": argument, "reason": reason},
        )
        self.argument = argument


class DeliveryFailedError(SeqAuditError):
    """The ingestion endpoint answered with a non-success status code."""

    def __init__(self, *, status_code: int, url: Optional[str] = None) -> None:
        message = f"Received failed result {status_code} when posting events to Seq"
        details: Dict[str, Any] = {"status_code": status_code}
        if url:
            details["url"] = url
        super().__init__(message, code="DELIVERY_FAILED", details=details)
        self.status_code = status_code


class SinkClosedError(SeqAuditError, RuntimeError):
    """An event was emitted to a sink that has already been closed."""

    def __init__(self) -> None:
        super().__init__("Cannot emit to a closed sink", code="SINK_CLOSED")
