"""Render inline code spans as MathML."""

from __future__ import annotations

import typing as typ
import xml.etree.ElementTree as etree

from markdown.inlinepatterns import BacktickInlineProcessor

if typ.TYPE_CHECKING:
    import re

    from markdown import Markdown

    from textbook_compiler.mathml import MathRenderer


class MathInlineProcessor(BacktickInlineProcessor):
    """Replace backtick spans with ``span.math`` markup.

    Span detection is left to the stock processor, whose match groups differ
    between Python-Markdown releases; only the ``code`` element it builds is
    converted. Escaped backslashes pass through unchanged.
    """

    def __init__(self, pattern: str, md: Markdown, math: MathRenderer) -> None:
        super().__init__(pattern)
        self.md = md
        self.math = math

    def handleMatch(  # noqa: N802
        self, m: re.Match[str], data: str
    ) -> tuple[etree.Element | str | None, int | None, int | None]:
        el, start, end = super().handleMatch(m, data)
        if not isinstance(el, etree.Element) or el.tag != self.tag:
            return el, start, end
        markup = self.math.render((el.text or "").strip())
        return self.md.htmlStash.store(markup), start, end


__all__ = ["MathInlineProcessor"]
