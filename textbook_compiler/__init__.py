"""Compile interactive textbook Markdown into HTML and step metadata.

This package exposes the compiler used by content builds and the ``textbook``
CLI entry point.

Exports
-------
- ``compile_document``: Compile one document with default settings.
- ``TextbookCompiler``: Reusable compiler bound to a ``CompilerConfig``.
- ``CompilationResult``: The HTML, step fragments and metadata produced.
- ``CompilationError``: Base class of every compilation failure.
- ``app`` / ``main``: Cyclopts application and its runner.

Examples
--------
>>> from textbook_compiler import compile_document
>>> result = compile_document("atoms", "---\\n\\nHello", ".")  # doctest: +SKIP
>>> list(result.steps)  # doctest: +SKIP
['step-0']
"""

from __future__ import annotations

from .cli import app, main
from .compiler import TextbookCompiler, compile_document
from .config import CompilerConfig
from .errors import (
    CompilationError,
    MathConversionError,
    MetadataParseError,
    StructureError,
    TemplateRenderError,
)
from .models import CompilationResult, Document, Step

__all__ = [
    "CompilationError",
    "CompilationResult",
    "CompilerConfig",
    "Document",
    "MathConversionError",
    "MetadataParseError",
    "Step",
    "StructureError",
    "TemplateRenderError",
    "TextbookCompiler",
    "app",
    "compile_document",
    "main",
]
