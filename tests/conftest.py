import logging
import typing as t

import httpx
import pytest
import structlog

from seqaudit import core
from seqaudit.interceptors import AuditStdLibHandler


class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers every request and answers with a fixed status."""

    def __init__(self, status_code: int = 201):
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.closed = 0
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code)

    def close(self) -> None:
        self.closed += 1
        super().close()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def make_transport() -> t.Callable[..., RecordingTransport]:
    return RecordingTransport


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore structlog and the stdlib root logger after each test."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    core.shutdown_logging()
    structlog.reset_defaults()
    for handler in list(root_logger.handlers):
        if isinstance(handler, AuditStdLibHandler):
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
