"""
Read-only log event model built from a structlog event dict.
"""

from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from structlog.typing import EventDict

# =============================================================================
# Level Mapping
# =============================================================================

INFORMATION = "Information"

LEVEL_NAMES = {
    "notset": "Verbose",
    "trace": "Verbose",
    "verbose": "Verbose",
    "debug": "Debug",
    "info": INFORMATION,
    "information": INFORMATION,
    "warn": "Warning",
    "warning": "Warning",
    "error": "Error",
    "exception": "Error",
    "critical": "Fatal",
    "fatal": "Fatal",
}

RESERVED_KEYS = frozenset(
    {
        "event",
        "message",
        "level",
        "timestamp",
        "exception",
        "exc_info",
        "stack",
        "stack_info",
        "_record",
        "_from_structlog",
    }
)


def to_level_name(level: Any) -> str:
    """Map a structlog/stdlib level name to its Seq equivalent."""
    if level is None:
        return INFORMATION
    return LEVEL_NAMES.get(str(level).lower(), INFORMATION)


def _parse_timestamp(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            dt = datetime.fromtimestamp(raw, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return datetime.now(timezone.utc)
    elif isinstance(raw, str) and raw:
        try:
            dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            return datetime.now(timezone.utc)
    else:
        return datetime.now(timezone.utc)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _format_exc_info(event_dict: Mapping[str, Any]) -> str | None:
    rendered = event_dict.get("exception")
    if rendered:
        return str(rendered)

    exc_info = event_dict.get("exc_info")
    if not exc_info:
        return None
    if isinstance(exc_info, BaseException):
        lines = traceback.format_exception(type(exc_info), exc_info, exc_info.__traceback__)
    elif isinstance(exc_info, tuple):
        lines = traceback.format_exception(*exc_info)
    else:
        exc_type, exc_value, exc_tb = sys.exc_info()
        if exc_value is None:
            return None
        lines = traceback.format_exception(exc_type, exc_value, exc_tb)
    return "".join(lines).rstrip("\n")


def _render_exception(event_dict: Mapping[str, Any]) -> str | None:
    """Exception text followed by the stack rendered by ``StackInfoRenderer``, if any."""
    parts = [_format_exc_info(event_dict), event_dict.get("stack")]
    text = "\n".join(str(part).rstrip("\n") for part in parts if part)
    return text or None


@dataclass(frozen=True)
class LogEvent:
    """A single structured log event as shipped to Seq.

    Attributes:
        timestamp: Timezone-aware instant the event occurred.
        level: Seq level name (Verbose, Debug, Information, Warning, Error, Fatal).
        message_template: The event message.
        properties: Remaining key/value pairs of the event.
        exception: Rendered exception/traceback, if any.
    """

    timestamp: datetime
    level: str
    message_template: str
    properties: Mapping[str, Any] = field(default_factory=dict)
    exception: str | None = None

    @classmethod
    def from_event_dict(cls, event_dict: EventDict, method_name: str | None = None) -> "LogEvent":
        """Build an event from a processed structlog event dict.

        The event dict is read, never mutated.
        """
        message = event_dict.get("event", event_dict.get("message", ""))
        properties = {k: v for k, v in event_dict.items() if k not in RESERVED_KEYS}

        return cls(
            timestamp=_parse_timestamp(event_dict.get("timestamp")),
            level=to_level_name(event_dict.get("level", method_name)),
            message_template="" if message is None else str(message),
            properties=MappingProxyType(properties),
            exception=_render_exception(event_dict),
        )
