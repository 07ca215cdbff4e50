"""Compile textbook Markdown into HTML, step fragments and metadata.

The pipeline for one document is:

1. :func:`~textbook_compiler.source_rewriter.rewrite_source` rewrites image
   paths and special attribute names;
2. :class:`~textbook_compiler.blocks.BlockStructureParser` expands ``:::``
   containers;
3. Python-Markdown renders the text with
   :class:`~textbook_compiler.renderer.TextbookExtension`;
4. the HTML is parsed with BeautifulSoup and restructured by
   :class:`~textbook_compiler.dom.DomPostProcessor`;
5. :func:`~textbook_compiler.assembler.assemble_result` minifies and bundles
   the output.

All mutable state lives in a :class:`~textbook_compiler.context.CompilationContext`
created per call, so a single :class:`TextbookCompiler` can compile different
documents concurrently.

Example
-------
>>> from textbook_compiler import compile_document
>>> result = compile_document("intro", "# Intro\\n\\n---\\n\\nHello", ".")  # doctest: +SKIP
>>> result.data.title  # doctest: +SKIP
'Intro'
>>> list(result.steps)  # doctest: +SKIP
['step-0']
"""

from __future__ import annotations

import logging
from pathlib import Path

from bs4 import BeautifulSoup
from markdown import Markdown

from ._constants import STEP_CLOSE
from .assembler import assemble_result
from .blocks import BlockStructureParser
from .config import CompilerConfig
from .context import CompilationContext
from .dom import DomPostProcessor
from .mathml import MathRenderer
from .models import CompilationResult
from .renderer import TextbookExtension
from .source_rewriter import rewrite_source
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)


class TextbookCompiler:
    """Compile textbook documents with shared, read-only configuration."""

    def __init__(self, config: CompilerConfig | None = None) -> None:
        """Initialize the compiler.

        Parameters
        ----------
        config : CompilerConfig, optional
            Compiler settings; defaults to :class:`CompilerConfig` defaults.
        """
        self.config = config or CompilerConfig()
        self.math = MathRenderer()

    def compile(
        self, document_id: str, source: str, source_directory: str | Path
    ) -> CompilationResult:
        """Compile one document from scratch.

        Parameters
        ----------
        document_id : str
            Identifier of the document; namespaces its image resources.
        source : str
            Textbook Markdown source.
        source_directory : str or Path
            Directory containing the source, used to resolve template includes.

        Returns
        -------
        CompilationResult
            Page HTML, step fragments, metadata and reference sets.

        Raises
        ------
        CompilationError
            A :class:`StructureError`, :class:`MetadataParseError`,
            :class:`TemplateRenderError` or :class:`MathConversionError` when
            the document is malformed. No partial result is returned.
        """
        logger.debug("Compiling document %s from %s", document_id, source_directory)
        context = CompilationContext(
            document_id=document_id,
            templates=TemplateRenderer(source_directory),
            math=self.math,
            config=self.config,
        )
        text = rewrite_source(source, document_id, self.config)
        text = BlockStructureParser(context.templates).parse(text)
        html = self.render_markdown(text, context)

        soup = BeautifulSoup(html + STEP_CLOSE, "html.parser")
        DomPostProcessor(context, lambda inner: self.render_markdown(inner, context)).run(soup)
        result = assemble_result(soup, context)
        logger.debug(
            "Compiled document %s: %d steps, %d glossary and %d biography references",
            document_id,
            len(result.steps),
            len(result.gloss),
            len(result.bios),
        )
        return result

    def render_markdown(self, text: str, context: CompilationContext) -> str:
        """Render ``text`` with the textbook extension bound to ``context``."""
        extensions: list[object] = [*self.config.markdown_extensions, TextbookExtension(context)]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.config.pygments_style,
                }
            },
        )
        return md.convert(text)


def compile_document(
    document_id: str,
    source: str,
    source_directory: str | Path,
    *,
    config: CompilerConfig | None = None,
) -> CompilationResult:
    """Compile ``source`` with a one-off :class:`TextbookCompiler`."""
    return TextbookCompiler(config).compile(document_id, source, source_directory)


__all__ = ["TextbookCompiler", "compile_document"]
