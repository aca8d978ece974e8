"""JSON logging formatter used by the package logging setup.

:class:`JsonFormatter` renders one JSON object per record. When the message
itself is a JSON object (as produced by ``log_event``) its keys are hoisted to
the top level so scope events are not double-encoded.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

_RESERVED = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
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
        "taskName",
        "message",
    }
)


class JsonFormatter(logging.Formatter):
    """Lightweight JSON formatter for structured scope logs.

    Output keys: ``ts``, ``level``, ``logger``, then either the hoisted event
    payload or ``msg``, then any ``extra=`` attributes on the record.
    """

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        msg_text = record.getMessage()
        payload = None
        if msg_text.startswith("{"):
            try:
                payload = json.loads(msg_text)
            except ValueError:
                payload = None
        if isinstance(payload, dict):
            base.update(payload)
        else:
            base["msg"] = msg_text
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        for k, v in record.__dict__.items():
            if k.startswith("_") or k in _RESERVED or k in base:
                continue
            base[k] = v
        return json.dumps(base, ensure_ascii=False, default=repr)


__all__ = ["JsonFormatter", "ISO"]
