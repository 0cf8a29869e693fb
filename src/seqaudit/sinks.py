"""
Log sink abstraction and the Seq audit sink.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

import httpx
from structlog.typing import EventDict

from . import api
from .events import LogEvent
from .exceptions import DeliveryFailedError, InvalidArgumentError, SinkClosedError
from .formatters import format_compact_payload, format_raw_payload

# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def emit(self, event_dict: EventDict) -> None:
        """Emit a log event to the sink."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...

    def __enter__(self) -> "BaseSink":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class SeqAuditSink(BaseSink):
    """Ship each event to Seq synchronously, failing loudly.

    Every :meth:`emit` performs exactly one blocking POST to the bulk
    ingestion resource. There is no buffering, no retry and no fallback:
    a non-2xx answer raises :class:`DeliveryFailedError`, and connection or
    timeout failures from httpx propagate unchanged to the caller.

    Args:
        server_url: Base address of the Seq server.
        api_key: Optional API key, sent only when not blank.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``
            to intercept requests in tests. Owned by the sink once passed.
        use_compact_format: Send CLEF when True, the raw JSON envelope otherwise.
    """

    def __init__(
        self,
        server_url: str,
        api_key: str | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        use_compact_format: bool = True,
    ):
        base_address = api.normalize_server_base_address(server_url)
        self._api_key = api_key
        self._use_compact_format = use_compact_format
        self._client = httpx.Client(base_url=base_address, transport=transport)
        self._closed = False

    @property
    def base_address(self) -> str:
        return str(self._client.base_url)

    @property
    def closed(self) -> bool:
        return self._closed

    def _headers(self, content_type: str) -> dict[str, str]:
        headers = {"Content-Type": f"{content_type}; charset=utf-8"}
        if self._api_key and self._api_key.strip():
            headers[api.API_KEY_HEADER_NAME] = self._api_key
        return headers

    def emit(self, event_dict: EventDict) -> None:
        if event_dict is None:
            raise InvalidArgumentError(argument="event_dict")
        if self._closed:
            raise SinkClosedError()

        event = LogEvent.from_event_dict(event_dict)
        if self._use_compact_format:
            content_type = api.COMPACT_LOG_EVENT_FORMAT_MIME_TYPE
            payload = format_compact_payload(event)
        else:
            content_type = api.RAW_EVENT_FORMAT_MIME_TYPE
            payload = format_raw_payload(event)

        response = self._client.post(
            api.BULK_UPLOAD_RESOURCE,
            content=payload.encode("utf-8"),
            headers=self._headers(content_type),
        )
        if not response.is_success:
            raise DeliveryFailedError(status_code=response.status_code, url=str(response.request.url))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._client.close()
