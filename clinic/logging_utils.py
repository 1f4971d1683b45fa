"""
Request-scoped logging context.

``RequestIdMiddleware`` binds an id per request; ``RequestContextFilter``
copies it onto every log record so both the plain and the JSON formatter
can print it.
"""
from __future__ import annotations

import contextvars
import json
import logging
from typing import Any

_request_id_ctx_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

_STANDARD_ATTRIBUTES = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "taskName",
    "asctime",
}


class RequestContextFilter(logging.Filter):
    """Inject the current request id into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id_ctx_var.get() or "-"
        return True


class JSONLogFormatter(logging.Formatter):
    """Serialize log records as one JSON object per line."""

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": record.__dict__.get("request_id"),
        }
        for key, value in record.__dict__.items():
            if key == "request_id" or key.startswith("_") or key in _STANDARD_ATTRIBUTES:
                continue
            log_entry[key] = value
        if record.exc_info:
            log_entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False, default=str)


def bind_request_id(request_id: str | None) -> contextvars.Token:
    return _request_id_ctx_var.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx_var.reset(token)


def get_request_id() -> str:
    """Return the request id bound to the current context."""
    return _request_id_ctx_var.get() or "unknown"


__all__ = [
    "JSONLogFormatter",
    "RequestContextFilter",
    "bind_request_id",
    "get_request_id",
    "reset_request_id",
]
