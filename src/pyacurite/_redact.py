"""Masking of credentials and session tokens in debug logs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SECRET_KEYS = frozenset({"password", "email", "token_id", "x-one-vue-token", "authorization", "cookie"})


def redact_for_log(value: Any) -> Any:
    """Copy a JSON body or header dict with secret values masked.

    Nested objects and lists are walked; everything else is returned as is.
    """
    if isinstance(value, Mapping):
        return {
            str(key): "<redacted>" if str(key).lower() in _SECRET_KEYS else redact_for_log(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact_for_log(item) for item in value]
    return value
