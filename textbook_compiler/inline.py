r"""Inline extensions for textbook Markdown.

The rules in :data:`INLINE_RULES` run in order on every inline text run
(paragraphs, list items, headings and table cells):

1. ``blank``: ``[[a|b]]`` becomes a multiple-choice ``x-blank``; ``[[42]]``
   becomes a free-text ``x-blank-input``.
2. ``bound_variable``: ``${expr}{name}`` becomes ``x-var`` bound to ``name``.
3. ``variable``: ``${expr}`` becomes ``span.var``. Bound variables are consumed
   by the previous rule first, so this never wraps one.
4. ``emoji``: ``:name:`` becomes an inline emoji image.

Example
-------
>>> from markdown import Markdown
>>> from textbook_compiler.inline import InlineExtension
>>> Markdown(extensions=[InlineExtension()]).convert("[[42]]")
'<p><x-blank-input solution="42"></x-blank-input></p>'
"""

from __future__ import annotations

import typing as typ
import xml.etree.ElementTree as etree

import emoji
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.util import AtomicString

from ._constants import EMOJI_PATH_TEMPLATE
from .config import CompilerConfig

if typ.TYPE_CHECKING:
    import re

    from markdown import Markdown

BLANK_PATTERN = r"\[\[([^\]]+)\]\]"
BOUND_VARIABLE_PATTERN = r"\$\{([^}]+)\}\{([^}]+)\}"
VARIABLE_PATTERN = r"\$\{([^}]+)\}"
EMOJI_PATTERN = r":([a-z0-9_+-]+):"

InlineMatch = tuple[etree.Element | None, int | None, int | None]


class BlankInlineProcessor(InlineProcessor):
    """Turn ``[[...]]`` into a fill-in blank element."""

    def handleMatch(self, m: re.Match[str], data: str) -> InlineMatch:  # noqa: N802
        body = m.group(1)
        if len(body.split("|")) > 1:
            el = etree.Element("x-blank")
            el.set("choices", body)
        else:
            el = etree.Element("x-blank-input")
            el.set("solution", body)
        return el, m.start(0), m.end(0)


class BoundVariableInlineProcessor(InlineProcessor):
    """Turn ``${expr}{name}`` into an ``x-var`` bound to ``name``."""

    def handleMatch(self, m: re.Match[str], data: str) -> InlineMatch:  # noqa: N802
        el = etree.Element("x-var")
        el.set("bind", m.group(2))
        el.text = AtomicString(f"${{{m.group(1)}}}")
        return el, m.start(0), m.end(0)


class VariableInlineProcessor(InlineProcessor):
    """Turn ``${expr}`` into a ``span.var`` display."""

    def handleMatch(self, m: re.Match[str], data: str) -> InlineMatch:  # noqa: N802
        el = etree.Element("span")
        el.set("class", "var")
        el.text = AtomicString(f"${{{m.group(1)}}}")
        return el, m.start(0), m.end(0)


class EmojiInlineProcessor(InlineProcessor):
    """Replace ``:name:`` shorthands with emoji images."""

    def __init__(self, pattern: str, md: Markdown | None, config: CompilerConfig) -> None:
        super().__init__(pattern, md)
        self.config = config

    def handleMatch(self, m: re.Match[str], data: str) -> InlineMatch:  # noqa: N802
        glyph = emoji.emojize(m.group(0), language="alias")
        if glyph == m.group(0):
            return None, None, None
        code = format(ord(glyph[0]), "x")
        size = str(self.config.emoji_size)
        el = etree.Element("img")
        el.set("class", "emoji")
        el.set("width", size)
        el.set("height", size)
        el.set("src", EMOJI_PATH_TEMPLATE.format(root=self.config.emoji_root, code=code))
        el.set("alt", m.group(1))
        return el, m.start(0), m.end(0)


class InlineRule(typ.NamedTuple):
    """One inline rewrite: registry name, pattern and processor class."""

    name: str
    pattern: str
    processor: type[InlineProcessor]


# Ordered by precedence. Priorities sit between the stock ``escape`` (180)
# and ``reference`` (170) patterns so ``[[`` is claimed before link parsing.
INLINE_RULES: tuple[InlineRule, ...] = (
    InlineRule("blank", BLANK_PATTERN, BlankInlineProcessor),
    InlineRule("bound_variable", BOUND_VARIABLE_PATTERN, BoundVariableInlineProcessor),
    InlineRule("variable", VARIABLE_PATTERN, VariableInlineProcessor),
    InlineRule("emoji", EMOJI_PATTERN, EmojiInlineProcessor),
)
FIRST_RULE_PRIORITY = 178


def register_inline_rules(md: Markdown, config: CompilerConfig) -> None:
    """Register :data:`INLINE_RULES` on ``md`` with descending priorities."""
    for offset, rule in enumerate(INLINE_RULES):
        if rule.processor is EmojiInlineProcessor:
            processor: InlineProcessor = EmojiInlineProcessor(rule.pattern, md, config)
        else:
            processor = rule.processor(rule.pattern, md)
        md.inlinePatterns.register(processor, f"textbook_{rule.name}", FIRST_RULE_PRIORITY - offset)


class InlineExtension(Extension):
    """Python-Markdown extension enabling only the inline rules."""

    def __init__(self, config: CompilerConfig | None = None) -> None:
        super().__init__()
        self.config = config or CompilerConfig()

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the inline rules on the Markdown instance."""
        register_inline_rules(md, self.config)


__all__ = [
    "INLINE_RULES",
    "BlankInlineProcessor",
    "BoundVariableInlineProcessor",
    "EmojiInlineProcessor",
    "InlineExtension",
    "InlineRule",
    "VariableInlineProcessor",
    "register_inline_rules",
]
