"""Helpers for the string-encoded flags found in build artifacts."""

from typing import Any


def as_bool(value: Any) -> bool:
    """Interpret a build flag.

    Only a case-insensitive ``"true"`` string or an actual ``True`` counts as set.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def as_os_list(value: Any) -> list[str] | None:
    """Normalize an OS list written either as a JSON array or a delimited string.

    Returns ``None`` when the value is absent so callers can tell "not
    declared" apart from "declared empty".
    """
    if value is None:
        return None
    if isinstance(value, str):
        items = value.replace(",", ";").split(";")
    elif isinstance(value, (list, tuple, set)):
        items = [str(item) for item in value]
    else:
        return None
    return [item.strip().lower() for item in items if item.strip()]
