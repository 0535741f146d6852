"""
JSON helpers used when assembling wire requests.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Mapping


def merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge `overrides` over `base` and return a new dict.

    Nested objects are merged key by key; scalars and arrays in `overrides`
    replace the value in `base`. Neither input is modified.

    Example:
        >>> merge({"temperature": 0.5, "p": {"a": 1}}, {"temperature": 0.9, "p": {"b": 2}})
        {'temperature': 0.9, 'p': {'a': 1, 'b': 2}}
    """
    merged: Dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def drop_none(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of `payload` without top-level keys whose value is None."""
    return {key: value for key, value in payload.items() if value is not None}


def as_count(value: Any) -> int:
    """Read a token/unit count from a payload; anything non-numeric counts as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


__all__ = ["merge", "drop_none", "as_count"]
