"""Python-Markdown extension wiring the textbook renderer together."""

from __future__ import annotations

import typing as typ

from markdown.extensions import Extension
from markdown.inlinepatterns import BACKTICK_RE

from textbook_compiler.inline import register_inline_rules

from .blockprocessors import FrontMatterProcessor, StepBoundaryProcessor, TemplateCodeProcessor
from .inline_code import MathInlineProcessor
from .link_rewriter import LinkTreeprocessor
from .raw_html import RawHtmlLinePreprocessor, TextbookRawHtmlPostprocessor
from .treeprocessors import TitleTreeprocessor

if typ.TYPE_CHECKING:
    from markdown import Markdown

    from textbook_compiler.context import CompilationContext


class TextbookExtension(Extension):
    """Reinterpret standard Markdown constructs with textbook semantics.

    One handler is registered per construct, replacing the stock processor of
    the same name where one exists:

    ======================  ==========================================
    Construct               Handler
    ======================  ==========================================
    raw HTML lines          :class:`RawHtmlLinePreprocessor`
    indented code           :class:`TemplateCodeProcessor`
    horizontal rule         :class:`StepBoundaryProcessor`
    blockquote              :class:`FrontMatterProcessor`
    inline code             :class:`MathInlineProcessor`
    blanks, variables       :data:`textbook_compiler.inline.INLINE_RULES`
    level-one heading       :class:`TitleTreeprocessor`
    links                   :class:`LinkTreeprocessor`
    stashed HTML            :class:`TextbookRawHtmlPostprocessor`
    ======================  ==========================================
    """

    def __init__(self, context: CompilationContext) -> None:
        super().__init__()
        self.context = context

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the textbook processors on the Markdown instance."""
        context = self.context
        md.preprocessors.deregister("html_block", strict=False)
        md.preprocessors.register(RawHtmlLinePreprocessor(md), "textbook_raw_html", 20)

        blockprocessors = md.parser.blockprocessors
        blockprocessors.register(TemplateCodeProcessor(md.parser, context), "code", 80)
        blockprocessors.register(StepBoundaryProcessor(md.parser, context), "hr", 50)
        blockprocessors.register(FrontMatterProcessor(md.parser, context), "quote", 20)

        md.inlinePatterns.register(MathInlineProcessor(BACKTICK_RE, md, context.math), "backtick", 190)
        register_inline_rules(md, context.config)

        md.treeprocessors.register(LinkTreeprocessor(md, context), "textbook_links", 15)
        md.treeprocessors.register(TitleTreeprocessor(md, context), "textbook_title", 14)
        md.postprocessors.register(TextbookRawHtmlPostprocessor(md), "raw_html", 30)


__all__ = ["TextbookExtension"]
