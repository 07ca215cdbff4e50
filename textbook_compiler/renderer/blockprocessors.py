"""Block-level handlers giving horizontal rules, blockquotes and indented
code blocks their textbook meaning.

Each processor replaces a stock Python-Markdown processor of the same
registry name and shares the :class:`~textbook_compiler.context.CompilationContext`
of the current compilation, so step records, front matter and the template
preamble accumulate in source order while blocks are parsed.
"""

from __future__ import annotations

import typing as typ
import xml.etree.ElementTree as etree

from markdown.blockprocessors import BlockQuoteProcessor, CodeBlockProcessor, HRProcessor
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from textbook_compiler._constants import STEP_CLOSE, STEP_OPEN
from textbook_compiler.errors import MetadataParseError

if typ.TYPE_CHECKING:
    from markdown.blockparser import BlockParser

    from textbook_compiler.context import CompilationContext


def _emit_raw(parser: BlockParser, parent: etree.Element, markup: str) -> None:
    """Append ``markup`` as a stashed raw HTML block."""
    placeholder = parser.md.htmlStash.store(markup.strip())
    el = etree.SubElement(parent, "p")
    el.text = placeholder


def parse_front_matter(text: str) -> dict[str, typ.Any]:
    """Parse a blockquote body as a YAML mapping.

    Parameters
    ----------
    text : str
        Blockquote content with the ``>`` markers removed.

    Returns
    -------
    dict[str, Any]
        The parsed mapping; empty when the text holds no YAML content.

    Raises
    ------
    MetadataParseError
        If the text is not valid YAML or does not describe a mapping.
    """
    loader = YAML(typ="safe")
    try:
        loaded = loader.load(text)
    except YAMLError as exc:
        msg = f"Malformed front matter block: {exc}"
        raise MetadataParseError(msg) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = f"Front matter must be a mapping of keys to values, got {text.strip()!r}."
        raise MetadataParseError(msg)
    return dict(loaded)


class StepBoundaryProcessor(HRProcessor):
    """Start a new step at every top-level horizontal rule.

    Rules nested in lists or other containers stay plain ``<hr>`` elements so
    a step boundary never splits an open element.
    """

    def __init__(self, parser: BlockParser, context: CompilationContext) -> None:
        super().__init__(parser)
        self.context = context

    def run(self, parent: etree.Element, blocks: list[str]) -> None:
        if parent is not self.parser.root:
            super().run(parent, blocks)
            return
        block = blocks.pop(0)
        match = self.match
        prelines = block[: match.start()].rstrip("\n")
        if prelines:
            self.parser.parseBlocks(parent, [prelines])
        _, previous = self.context.start_step()
        _emit_raw(self.parser, parent, f"{STEP_CLOSE}{STEP_OPEN}" if previous is not None else STEP_OPEN)
        postlines = block[match.end() :].lstrip("\n")
        if postlines:
            blocks.insert(0, postlines)


class FrontMatterProcessor(BlockQuoteProcessor):
    """Merge blockquote YAML into the current step instead of rendering it."""

    def __init__(self, parser: BlockParser, context: CompilationContext) -> None:
        super().__init__(parser)
        self.context = context

    def run(self, parent: etree.Element, blocks: list[str]) -> None:
        block = blocks.pop(0)
        m = self.RE.search(block)
        if m:
            before = block[: m.start()]
            self.parser.parseBlocks(parent, [before])
            block = "\n".join(self.clean(line) for line in block[m.start() :].split("\n"))
        self.context.merge_front_matter(parse_front_matter(block))


class TemplateCodeProcessor(CodeBlockProcessor):
    """Treat indented code blocks as Pug templates.

    Consecutive indented blocks, even when separated by blank lines, form a
    single template. Templates that appear before the first step are kept as
    a preamble for later templates and produce no output.
    """

    def __init__(self, parser: BlockParser, context: CompilationContext) -> None:
        super().__init__(parser)
        self.context = context

    def run(self, parent: etree.Element, blocks: list[str]) -> None:
        sources: list[str] = []
        while True:
            code, rest = self.detab(blocks.pop(0))
            sources.append(code)
            if rest or not blocks or not self.test(parent, blocks[0]):
                break
        if rest:
            blocks.insert(0, rest)
        source = "\n\n".join(sources).rstrip("\n")

        if self.context.current_step is None:
            self.context.add_to_preamble(source)
            return
        markup = self.context.templates.render(self.context.template_preamble + source)
        if markup.strip():
            _emit_raw(self.parser, parent, markup)


__all__ = [
    "FrontMatterProcessor",
    "StepBoundaryProcessor",
    "TemplateCodeProcessor",
    "parse_front_matter",
]
