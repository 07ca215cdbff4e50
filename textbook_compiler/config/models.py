"""Typed dataclasses describing textbook compiler configuration."""

from __future__ import annotations

import dataclasses as dc


class CompilerConfigError(ValueError):
    """Raised when the compiler configuration is invalid or incomplete."""


@dc.dataclass(slots=True, frozen=True)
class CompilerConfig:
    """Read-only settings shared by every compilation.

    Attributes
    ----------
    resource_root : str
        Absolute path prefix used when rewriting ``images/`` references; the
        document identifier is appended below it.
    emoji_root : str
        Path prefix for emoji images named by their hexadecimal codepoint.
    emoji_size : int
        Width and height, in pixels, of inline emoji images.
    data_attributes : tuple[str, ...]
        Bare attribute names renamed to their ``data-`` form before parsing.
    markdown_extensions : tuple[str, ...]
        Stock Python-Markdown extensions enabled alongside the textbook
        extension.
    pygments_style : str
        Pygments style used by ``codehilite`` for fenced code.
    """

    resource_root: str = "/resources"
    emoji_root: str = "/images/emoji"
    emoji_size: int = 20
    data_attributes: tuple[str, ...] = ("when", "delay", "animation")
    markdown_extensions: tuple[str, ...] = (
        "tables",
        "sane_lists",
        "fenced_code",
        "codehilite",
    )
    pygments_style: str = "monokai"


__all__ = ["CompilerConfig", "CompilerConfigError"]
