"""
Structured JSON logging with evaluation ID propagation.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .context import EvaluationContext, current_scope, get_evaluation_id

# LogRecord attributes that are not user-supplied extras
_RESERVED_ATTRS = frozenset(
    (
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "message",
        "taskName",
    )
)


def _utc_timestamp(record: logging.LogRecord) -> str:
    stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
    return stamp.strftime("%Y-%m-%dT%H:%M:%S.") + f"{int(record.msecs):03d}Z"


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

        {"timestamp": "2024-01-15T10:30:00.000Z", "level": "INFO",
         "logger": "align.governor.evaluate", "message": "Evaluated 2024-01-15: ...",
         "evaluation_id": "eval-3f9c0d2a51e84b77", "evaluation_day": "2024-01-15",
         "busy_blocks": 2, ...}

    `extra=` fields are copied verbatim; values json cannot encode go through str().
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _utc_timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        scope = current_scope()
        if scope is not None:
            payload["evaluation_id"] = scope.evaluation_id
            if scope.day:
                payload["evaluation_day"] = scope.day

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        payload.update(
            (key, value) for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS
        )
        return json.dumps(payload, default=str)


class HumanFormatter(logging.Formatter):
    """Single-line output for terminals."""

    def format(self, record: logging.LogRecord) -> str:
        when = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        evaluation_id = get_evaluation_id()
        prefix = f"[{evaluation_id[:13]}] " if evaluation_id else ""
        line = f"{when} [{record.levelname}] {record.name}: {prefix}{record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str = "INFO", json_format: bool | None = None) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        level: Root level name, case-insensitive
        json_format: JSONFormatter if True, HumanFormatter if False,
            JSON whenever stderr is not a TTY if None
    """
    use_json = not sys.stderr.isatty() if json_format is None else json_format

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if use_json else HumanFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    """Module logger; records pick up the current evaluation ID when formatted."""
    return logging.getLogger(name)


class EvaluationIdMiddleware:
    """
    ASGI middleware: each HTTP request runs inside an EvaluationContext.

    The X-Request-ID header, when present, becomes the evaluation ID.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        request_id = headers.get(b"x-request-id", b"").decode("latin-1") or None

        with EvaluationContext(evaluation_id=request_id):
            await self.app(scope, receive, send)
