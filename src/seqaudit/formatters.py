"""
JSON formatters for the two Seq payload shapes.

- compact: CLEF, one JSON object per line (``@t``, ``@mt``, ``@l``, ``@x``)
- raw: the ``{"Events": [...]}`` envelope with Pascal-cased event fields
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import orjson

from .events import INFORMATION, LogEvent


# orjson serializes integers in [-2**63, 2**64 - 1] only
_MIN_INT = -(2**63)
_MAX_INT = 2**64 - 1


def _clean_str(text: str) -> str:
    # Lone surrogates cannot be encoded as UTF-8
    return text.encode("utf-8", "backslashreplace").decode("utf-8")


def _sanitize(value: Any) -> Any:
    """Replace values orjson rejects without consulting ``default``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value if _MIN_INT <= value <= _MAX_INT else str(value)
    if isinstance(value, str):
        return _clean_str(value)
    if isinstance(value, Mapping):
        return {_sanitize(key): _sanitize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_sanitize(item) for item in value]
    return value


class JsonValueFormatter:
    """Stateless JSON serializer for arbitrary property values.

    Values orjson cannot serialize natively are rendered with ``str()``,
    including integers wider than 64 bits and strings holding lone surrogates.
    """

    OPTIONS = orjson.OPT_NON_STR_KEYS | orjson.OPT_NAIVE_UTC

    @staticmethod
    def _default(value: Any) -> Any:
        if isinstance(value, (set, frozenset)):
            return list(value)
        if isinstance(value, Mapping):
            return dict(value)
        return _clean_str(str(value))

    def dumps(self, value: Any) -> str:
        try:
            return orjson.dumps(value, default=self._default, option=self.OPTIONS).decode()
        except orjson.JSONEncodeError:
            return orjson.dumps(_sanitize(value), default=self._default, option=self.OPTIONS).decode()


# Shared, immutable
JSON_VALUE_FORMATTER = JsonValueFormatter()


class CompactJsonFormatter:
    """Render a :class:`LogEvent` as a single CLEF JSON object."""

    @staticmethod
    def escape_property_name(name: str) -> str:
        # Names starting with '@' would collide with CLEF reserved fields
        return "@" + name if name.startswith("@") else name

    @classmethod
    def format_event(cls, event: LogEvent, value_formatter: JsonValueFormatter = JSON_VALUE_FORMATTER) -> str:
        document: dict[str, Any] = {
            "@t": event.timestamp.isoformat(),
            "@mt": event.message_template,
        }
        if event.level != INFORMATION:
            document["@l"] = event.level
        if event.exception:
            document["@x"] = event.exception
        for name, value in event.properties.items():
            document[cls.escape_property_name(str(name))] = value
        return value_formatter.dumps(document)


class RawJsonFormatter:
    """Render a :class:`LogEvent` in Seq's raw event schema."""

    @staticmethod
    def format_event(event: LogEvent, value_formatter: JsonValueFormatter = JSON_VALUE_FORMATTER) -> str:
        document: dict[str, Any] = {
            "Timestamp": event.timestamp.isoformat(),
            "Level": event.level,
            "MessageTemplate": event.message_template,
        }
        if event.exception:
            document["Exception"] = event.exception
        document["Properties"] = {str(name): value for name, value in event.properties.items()}
        return value_formatter.dumps(document)


def format_compact_payload(event: LogEvent) -> str:
    """One CLEF line terminated by a single newline."""
    return CompactJsonFormatter.format_event(event) + "\n"


def format_raw_payload(event: LogEvent) -> str:
    """A single-element ``{"Events":[...]}`` batch."""
    return '{"Events":[' + RawJsonFormatter.format_event(event) + "]}"
