"""Structured logging bootstrap.

Every record leaving the stdout handler carries the request context:

* ``client_ip`` — the address resolved for the request being served
  (empty outside a request or when nothing resolved).
* ``trace_id`` / ``span_id`` — the active OTEL span, i.e. the span that
  holds the client IP tags.

Raw header text is attacker-controlled and may carry credentials.  It is
only ever attached to records under ``RAW_HEADERS_LOG_FIELD``; the
redaction filter blanks that field on anything logged at INFO or above,
so it only survives in DEBUG output.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from opentelemetry import trace

from clientip.configs.system import LoggingConfig
from clientip.core.resolver import RAW_HEADERS_LOG_FIELD

REDACTED = "[redacted]"

_client_ip: ContextVar[str] = ContextVar("client_ip", default="")

_JSON_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(message)s "
    "%(client_ip)s %(trace_id)s %(span_id)s"
)
_JSON_RENAMES = {"asctime": "timestamp", "levelname": "level", "name": "logger"}
_JSON_DEFAULTS = {"client_ip": "", "trace_id": "", "span_id": ""}

_DEV_FORMAT = "%(levelprefix)s %(asctime)s %(name)s [%(client_ip)s]  %(message)s"
_DEV_DATEFMT = "%H:%M:%S"

_QUIET_LOGGERS = ("opentelemetry",)
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


@contextmanager
def client_ip_context(client_ip: str | None) -> Iterator[None]:
    """Tag every record logged inside the block with *client_ip*."""
    token = _client_ip.set(client_ip or "")
    try:
        yield
    finally:
        _client_ip.reset(token)


class _RequestContextFilter(logging.Filter):
    """Adds ``client_ip`` and the OTEL trace/span IDs to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.client_ip = _client_ip.get()  # type: ignore[attr-defined]
        ctx = trace.get_current_span().get_span_context()
        valid = bool(ctx and ctx.is_valid)
        record.trace_id = format(ctx.trace_id, "032x") if valid else ""  # type: ignore[attr-defined]
        record.span_id = format(ctx.span_id, "016x") if valid else ""  # type: ignore[attr-defined]
        return True


class _RawHeaderRedactionFilter(logging.Filter):
    """Blanks raw header values on records at INFO and above."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= logging.INFO and hasattr(record, RAW_HEADERS_LOG_FIELD):
            setattr(record, RAW_HEADERS_LOG_FIELD, REDACTED)
        return True


def _build_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.json_output:
        from pythonjsonlogger.json import JsonFormatter

        return JsonFormatter(
            fmt=_JSON_FORMAT,
            rename_fields=_JSON_RENAMES,
            defaults=_JSON_DEFAULTS,
        )

    from uvicorn.logging import DefaultFormatter

    return DefaultFormatter(fmt=_DEV_FORMAT, datefmt=_DEV_DATEFMT, use_colors=True)


def build_handler(config: LoggingConfig) -> logging.Handler:
    """The stdout handler with request context and redaction filters."""
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(_RequestContextFilter())
    handler.addFilter(_RawHeaderRedactionFilter())
    handler.setFormatter(_build_formatter(config))
    return handler


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure the root logger (call once at startup)."""
    config = config or LoggingConfig()
    handler = build_handler(config)

    root = logging.getLogger()
    root.setLevel(config.level.upper())
    root.handlers = [handler]

    for name in _UVICORN_LOGGERS:
        uvi = logging.getLogger(name)
        uvi.handlers = [handler]
        uvi.propagate = False

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
