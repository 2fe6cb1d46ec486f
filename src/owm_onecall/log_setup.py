"""JSON console logging for the One Call decoder and inspect CLI."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from .redaction import sanitize_for_logging, sanitize_text

# Attribute set through ``extra={"decode": {...}}`` by the decoder and CLI.
DECODE_CONTEXT_ATTR = "decode"


class JsonConsoleFormatter(logging.Formatter):
    """One JSON object per record.

    Records carrying a ``decode`` mapping (failure kind, error path, ``cod``)
    get it emitted as a nested field so log consumers can filter on it without
    parsing the message text. Every string is redacted before output.
    """

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }
        context = getattr(record, DECODE_CONTEXT_ATTR, None)
        if isinstance(context, Mapping):
            event[DECODE_CONTEXT_ATTR] = sanitize_for_logging(dict(context))
        if record.exc_info:
            event["exception"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, default=str)


def setup_logger(name: str = "owm_onecall", level: int | str = logging.INFO) -> logging.Logger:
    """Configure the package logger once; later calls only adjust the level."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(stream=None)
    handler.setFormatter(JsonConsoleFormatter())
    logger.addHandler(handler)
    return logger
