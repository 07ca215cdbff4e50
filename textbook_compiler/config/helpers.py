"""Utility helpers shared by the compiler configuration loader."""

from __future__ import annotations

import re

from .models import CompilerConfigError

ATTRIBUTE_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


def _normalize_names(value: str | list[object] | None, *, field: str) -> tuple[str, ...]:
    """Normalize a whitespace-separated string or list into a tuple of names."""
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(segment for segment in value.split() if segment)
    if isinstance(value, list):
        normalized: list[str] = []
        for segment in value:
            text = str(segment).strip()
            if text:
                normalized.append(text)
        return tuple(normalized)
    msg = f"'{field}' must be a string or a list of strings."
    raise CompilerConfigError(msg)


def _attribute_names(value: str | list[object] | None) -> tuple[str, ...]:
    """Return validated attribute names for the ``data-`` rename rule."""
    names = _normalize_names(value, field="data_attributes")
    for name in names:
        if not ATTRIBUTE_NAME_PATTERN.match(name):
            msg = f"'{name}' is not a valid attribute name."
            raise CompilerConfigError(msg)
    return names


def _path_prefix(value: object, *, field: str) -> str:
    """Return an absolute URL path prefix without a trailing slash.

    The site root ``/`` normalizes to an empty prefix.
    """
    text = str(value).strip()
    if not text.startswith("/"):
        msg = f"'{field}' must be an absolute path, got '{text}'."
        raise CompilerConfigError(msg)
    return text.rstrip("/")


def _positive_int(value: object, *, field: str) -> int:
    """Return ``value`` as a positive integer."""
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        msg = f"'{field}' must be an integer."
        raise CompilerConfigError(msg) from exc
    if number <= 0:
        msg = f"'{field}' must be positive."
        raise CompilerConfigError(msg)
    return number


__all__ = [
    "_attribute_names",
    "_normalize_names",
    "_path_prefix",
    "_positive_int",
]
