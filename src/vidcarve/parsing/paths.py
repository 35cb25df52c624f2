"""
Safe navigation over loosely typed JSON.
"""

from __future__ import annotations

from typing import Any


def dig(obj: Any, *path: str | int) -> Any:
    """Follow a path of dict keys and list indices.

    Returns None as soon as any link is missing, has the wrong type, or is
    out of range. Never raises for shape mismatches.

    Example:
        >>> dig({"a": [{"b": 1}]}, "a", 0, "b")
        1
        >>> dig({"a": []}, "a", 0, "b") is None
        True
    """
    current = obj
    for step in path:
        if isinstance(step, int) and not isinstance(step, bool):
            if not isinstance(current, list) or not 0 <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict) or step not in current:
                return None
            current = current[step]
        if current is None:
            return None
    return current


def dig_str(obj: Any, *path: str | int) -> str | None:
    """Like dig(), but only accepts a non-empty string at the end of the path."""
    value = dig(obj, *path)
    if isinstance(value, str) and value:
        return value
    return None


def dig_list(obj: Any, *path: str | int) -> list:
    """Like dig(), but returns an empty list unless the target is a list."""
    value = dig(obj, *path)
    return value if isinstance(value, list) else []
