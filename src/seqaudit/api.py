"""
Seq ingestion API constants and server address normalization.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit, urlunsplit

from .exceptions import InvalidArgumentError

BULK_UPLOAD_RESOURCE = "api/events/raw"
API_KEY_HEADER_NAME = "X-Seq-ApiKey"

COMPACT_LOG_EVENT_FORMAT_MIME_TYPE = "application/vnd.serilog.clef"
RAW_EVENT_FORMAT_MIME_TYPE = "application/json"

_API_SUFFIX = "api/"
_REPEATED_SLASHES = re.compile(r"/{2,}")


def normalize_server_base_address(server_url: str | None) -> str:
    """Return the canonical base address for ``server_url``.

    The result always ends with exactly one ``/`` so that relative resources
    such as :data:`BULK_UPLOAD_RESOURCE` join beneath it. A trailing ``api/``
    segment is dropped, since every resource path already starts with it.

    Raises:
        InvalidArgumentError: if ``server_url`` is None or blank.
    """
    if server_url is None:
        raise InvalidArgumentError(argument="server_url")
    if not server_url.strip():
        raise InvalidArgumentError(argument="server_url", reason="must not be blank")

    parts = urlsplit(server_url.strip())
    path = _REPEATED_SLASHES.sub("/", parts.path)
    if not path.endswith("/"):
        path += "/"
    if path.endswith("/" + _API_SUFFIX):
        path = path[: -len(_API_SUFFIX)]

    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))
