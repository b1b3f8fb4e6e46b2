"""JSON logging for the package and its host.

``UserResolver.get_user`` and ``SocialLoginService.get_user`` bind ``trace_id_var`` for the duration of a call,
so every line it logs carries the same ``trace_id``. A host that already has a
request id can set the variable first and it is kept.
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

SERVICE_NAME = "social-login"

trace_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("trace_id", default=None)


def get_trace_id() -> str | None:
    return trace_id_var.get()


@contextmanager
def bound_trace_id() -> Iterator[str]:
    """Bind a fresh trace id unless one is already bound, and yield it."""
    current = trace_id_var.get()
    if current is not None:
        yield current
        return
    trace_id = uuid.uuid4().hex
    token = trace_id_var.set(trace_id)
    try:
        yield trace_id
    finally:
        trace_id_var.reset(token)


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    ``extra={"extra_fields": {...}}`` on a logging call is merged into the
    object; ``extra={"trace_id": ...}`` overrides the bound trace id.
    """

    def __init__(self, service: str = SERVICE_NAME):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
        }

        trace_id = getattr(record, "trace_id", None) or get_trace_id()
        if trace_id:
            log_entry["trace_id"] = trace_id

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            log_entry.update(extra_fields)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def configure_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Install a single stdout handler on the root logger.

    Arguments left as None come from ``Settings.log_level`` and
    ``Settings.log_format``.
    """
    if level is None or log_format is None:
        from .config import get_settings

        settings = get_settings()
        level = level or settings.log_level
        log_format = log_format or settings.log_format

    resolved_level = getattr(logging, level.strip().upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(resolved_level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved_level)

    if log_format.strip().lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root.addHandler(handler)

    for noisy in ("httpx", "httpcore", "authlib"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
