"""
Compact (CLEF) and raw payload formatting tests.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal

from seqaudit.events import LogEvent
from seqaudit.formatters import (
    JSON_VALUE_FORMATTER,
    CompactJsonFormatter,
    RawJsonFormatter,
    format_compact_payload,
    format_raw_payload,
)

TIMESTAMP = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def _event(**overrides) -> LogEvent:
    values = {
        "timestamp": TIMESTAMP,
        "level": "Information",
        "message_template": "Order {order_id} shipped",
        "properties": {"order_id": 42},
        "exception": None,
    }
    values.update(overrides)
    return LogEvent(**values)


class TestJsonValueFormatter:
    def test_unknown_values_fall_back_to_str(self) -> None:
        assert JSON_VALUE_FORMATTER.dumps({"d": Decimal("1.5")}) == '{"d":"1.5"}'

    def test_sets_become_lists(self) -> None:
        assert json.loads(JSON_VALUE_FORMATTER.dumps({"s": {1}})) == {"s": [1]}

    def test_non_string_keys(self) -> None:
        assert json.loads(JSON_VALUE_FORMATTER.dumps({1: "one"})) == {"1": "one"}

    def test_wide_integers_become_strings(self) -> None:
        document = json.loads(JSON_VALUE_FORMATTER.dumps({"n": 2**70, "nested": [-(2**70), 5], "ok": 2**64 - 1}))
        assert document == {"n": str(2**70), "nested": [str(-(2**70)), 5], "ok": 2**64 - 1}

    def test_wide_integer_key(self) -> None:
        assert json.loads(JSON_VALUE_FORMATTER.dumps({2**70: "big"})) == {str(2**70): "big"}

    def test_lone_surrogate_escaped(self) -> None:
        document = json.loads(JSON_VALUE_FORMATTER.dumps({"s": "bad \udc80 text"}))
        assert document == {"s": "bad \\udc80 text"}

    def test_wide_integer_inside_set(self) -> None:
        assert json.loads(JSON_VALUE_FORMATTER.dumps({"s": {2**70}})) == {"s": [str(2**70)]}


class TestCompactFormat:
    def test_information_level_omitted(self) -> None:
        document = json.loads(CompactJsonFormatter.format_event(_event()))
        assert document == {
            "@t": "2024-05-01T12:30:00+00:00",
            "@mt": "Order {order_id} shipped",
            "order_id": 42,
        }

    def test_level_and_exception(self) -> None:
        document = json.loads(CompactJsonFormatter.format_event(_event(level="Error", exception="boom")))
        assert document["@l"] == "Error"
        assert document["@x"] == "boom"

    def test_at_prefixed_properties_escaped(self) -> None:
        document = json.loads(CompactJsonFormatter.format_event(_event(properties={"@t": "user"})))
        assert document["@@t"] == "user"
        assert document["@t"] == "2024-05-01T12:30:00+00:00"

    def test_payload_is_single_line_with_one_newline(self) -> None:
        payload = format_compact_payload(_event(properties={"text": "multi\nline"}))
        assert payload.endswith("\n")
        assert payload.count("\n") == 1
        assert json.loads(payload)["text"] == "multi\nline"


class TestRawFormat:
    def test_raw_event_shape(self) -> None:
        document = json.loads(RawJsonFormatter.format_event(_event(level="Warning", exception="trace")))
        assert document == {
            "Timestamp": "2024-05-01T12:30:00+00:00",
            "Level": "Warning",
            "MessageTemplate": "Order {order_id} shipped",
            "Exception": "trace",
            "Properties": {"order_id": 42},
        }

    def test_payload_envelope(self) -> None:
        event = _event()
        payload = format_raw_payload(event)
        assert payload == '{"Events":[' + RawJsonFormatter.format_event(event) + "]}"
        assert len(json.loads(payload)["Events"]) == 1
