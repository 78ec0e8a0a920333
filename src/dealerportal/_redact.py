"""Helpers for safe debug logging.

Directory requests carry the project API key (both as the ``apikey``
header and inside the bearer token) and dealers' secondary identifiers.
Everything passed to a DEBUG log call goes through :func:`redact_for_log`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

REDACTED = "<redacted>"

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "apikey",
        "authorization",
        "cookie",
        "id_number",
        "access_token",
        "refresh_token",
    }
)


def _redact_string(value: str, max_string: int) -> str:
    if len(value) <= max_string:
        return value
    return f"{value[:max_string]}…<truncated>"


def redact_for_log(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return a copy of *value* with secrets replaced and long strings cut.

    Mapping keys are compared case-insensitively so HTTP headers
    (``Authorization``/``authorization``) are covered as well as
    PostgREST filter params (``id_number=eq.…``).
    """
    if _depth > 10:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _redact_string(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, Mapping):
        return {
            str(k): REDACTED
            if str(k).lower() in _SENSITIVE_KEYS
            else redact_for_log(v, max_string=max_string, _depth=_depth + 1)
            for k, v in value.items()
        }
    if isinstance(value, Sequence):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]
    return repr(value)
