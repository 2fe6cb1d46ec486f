"""Redaction of OpenWeatherMap credentials in logs and console output.

One Call requests carry the account key as the ``appid`` query parameter, and
error envelopes or exception text can echo the request URL back. Anything that
reaches a log line or the inspect CLI's console passes through here first.
"""

from __future__ import annotations

import re
from typing import Any

REDACTED = "[REDACTED]"

SENSITIVE_KEYS = ("appid", "authorization", "token", "secret", "password", r"api[_-]?key")

_SENSITIVE_KEY_RE = re.compile("|".join(SENSITIVE_KEYS), re.IGNORECASE)
_BEARER_RE = re.compile(r"(?i)\b(bearer)\s+[A-Za-z0-9\-._~+/]+=*")
# ``appid=<hex>`` in a query string, ``api_key: <value>`` in a header dump.
_KEY_VALUE_RE = re.compile(
    r"(?i)\b(" + "|".join(SENSITIVE_KEYS) + r")\s*[:=]\s*([^\s,;&\"']+)"
)


def sanitize_text(text: str) -> str:
    """Mask credentials embedded in free text."""
    masked = _BEARER_RE.sub(r"\1 " + REDACTED, text)
    return _KEY_VALUE_RE.sub(lambda match: f"{match.group(1)}={REDACTED}", masked)


def sanitize_for_logging(value: Any) -> Any:
    """Mask credentials in a JSON-like structure.

    Values under a sensitive key are replaced outright; other strings are
    scanned with :func:`sanitize_text`.
    """
    if isinstance(value, dict):
        return {
            key: REDACTED if _SENSITIVE_KEY_RE.search(str(key)) else sanitize_for_logging(child)
            for key, child in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(sanitize_for_logging(item) for item in value)
    if isinstance(value, str):
        return sanitize_text(value)
    return value
