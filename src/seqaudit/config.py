"""
Seq Sink Configuration.

Usage:
    from seqaudit.config import configure_from_settings

    # SEQ_SERVER_URL=http://localhost:5341 SEQ_API_KEY=... in env or .env
    configure_from_settings()
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import InvalidArgumentError

if TYPE_CHECKING:
    import httpx

    from .sinks import SeqAuditSink


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class SeqSettings(BaseSettings):
    """Seq audit sink configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SEQ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    server_url: Optional[str] = Field(default=None, description="Seq server base address")
    api_key: Optional[str] = Field(default=None, description="Seq API key")
    use_compact_format: bool = Field(default=True, description="Send CLEF instead of the raw JSON envelope")
    level: LogLevel = Field(default=LogLevel.INFO, description="Log level")
    intercept_stdlib: bool = Field(default=False, description="Route stdlib logging through the sink")


def configure_from_settings(
    settings: SeqSettings | None = None,
    *,
    transport: "httpx.BaseTransport | None" = None,
) -> "SeqAuditSink":
    """Configure logging from :class:`SeqSettings` (environment by default)."""
    from .core import configure_logging

    settings = settings or SeqSettings()
    if settings.server_url is None:
        raise InvalidArgumentError(argument="server_url", reason="is not configured (set SEQ_SERVER_URL)")

    return configure_logging(
        server_url=settings.server_url,
        api_key=settings.api_key,
        use_compact_format=settings.use_compact_format,
        level=settings.level.value,
        transport=transport,
        intercept_stdlib=settings.intercept_stdlib,
    )
