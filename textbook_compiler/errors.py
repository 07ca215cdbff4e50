"""Exceptions raised while compiling textbook Markdown.

Every failure surfaces as a :class:`CompilationError` subclass so callers can
handle a broken document with a single ``except`` clause. Errors coming from
the YAML, template, or math libraries are re-raised with the original
exception chained as ``__cause__``.

Examples
--------
>>> from textbook_compiler.errors import CompilationError, StructureError
>>> issubclass(StructureError, CompilationError)
True
"""

from __future__ import annotations


class CompilationError(Exception):
    """Raised when a document cannot be compiled."""


class StructureError(CompilationError):
    """Raised when ``:::`` block markers are unbalanced."""


class MetadataParseError(CompilationError):
    """Raised when a blockquote front-matter block is not a YAML mapping."""


class TemplateRenderError(CompilationError):
    """Raised when Pug/Jinja template source fails to render."""


class MathConversionError(CompilationError):
    """Raised when an inline code expression cannot be converted to MathML."""


__all__ = [
    "CompilationError",
    "MathConversionError",
    "MetadataParseError",
    "StructureError",
    "TemplateRenderError",
]
