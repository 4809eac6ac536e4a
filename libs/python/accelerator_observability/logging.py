"""Process-wide logging setup for the accelerator API.

Records are emitted one JSON object per line on stdout. Fields bound with
:func:`log_context` (route, user, agent, provider) ride along on every record
emitted inside the block, and ``extra=`` fields are merged at the top level.
Set ``ACCELERATOR_LOG_FORMAT=text`` for human-readable local output.
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Mapping

_LOG_CONTEXT: ContextVar[Mapping[str, Any]] = ContextVar("accelerator_log_context", default={})

# Attributes every LogRecord carries; anything else on a record came from ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}
_STAMPED_ATTRS = frozenset({"service", "log_context"})

TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(service)s] %(name)s: %(message)s"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "t", "yes", "y"}


class ContextFilter(logging.Filter):
    """Stamp the service name and the active :func:`log_context` onto records."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.log_context = dict(_LOG_CONTEXT.get())
        if getattr(record, "service", None) is None:
            record.service = self.service_name
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "service": getattr(record, "service", None),
            "message": record.getMessage(),
        }

        # Explicit extras win over bound context.
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key in _STAMPED_ATTRS or key.startswith("_"):
                continue
            payload[key] = _jsonable(value)
        for key, value in getattr(record, "log_context", {}).items():
            if value is not None:
                payload.setdefault(key, _jsonable(value))

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)
        return json.dumps(payload, ensure_ascii=True)


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


def build_logging_config(service_name: str, level: str | int = "INFO", *, json_output: bool = True) -> dict:
    """Return a ``dictConfig`` mapping; also usable as uvicorn's ``log_config``."""

    handler = {
        "class": "logging.StreamHandler",
        "stream": sys.stdout,
        "formatter": "json" if json_output else "text",
        "filters": ["context"],
    }
    routed = {"handlers": ["default"], "level": level, "propagate": False}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": f"{__name__}.JsonFormatter"},
            "text": {"format": TEXT_FORMAT},
        },
        "filters": {"context": {"()": f"{__name__}.ContextFilter", "service_name": service_name}},
        "handlers": {"default": handler},
        "root": {"level": level, "handlers": ["default"]},
        "loggers": {
            "uvicorn": routed,
            "uvicorn.error": routed,
            "uvicorn.access": routed,
            "httpx": {"level": "WARNING"},
            "openai": {"level": "WARNING"},
        },
    }


def setup_logging(
    service_name: str,
    level: str | int = "INFO",
    *,
    capture_warnings: bool | None = None,
) -> None:
    """Configure logging for the current process.

    Safe to call repeatedly; each call rebuilds the handlers with the requested
    level. ``capture_warnings`` defaults to ``ACCELERATOR_CAPTURE_WARNINGS``.
    """

    json_output = os.getenv("ACCELERATOR_LOG_FORMAT", "json").strip().lower() != "text"
    logging.config.dictConfig(build_logging_config(service_name, level, json_output=json_output))

    if capture_warnings is None:
        capture_warnings = _env_flag("ACCELERATOR_CAPTURE_WARNINGS")
    if capture_warnings:
        logging.captureWarnings(True)


def current_log_context() -> Dict[str, Any]:
    return dict(_LOG_CONTEXT.get())


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Bind fields to every record logged inside the block; ``None`` unbinds."""

    bound = {**_LOG_CONTEXT.get(), **fields}
    token = _LOG_CONTEXT.set({key: value for key, value in bound.items() if value is not None})
    try:
        yield
    finally:
        _LOG_CONTEXT.reset(token)
