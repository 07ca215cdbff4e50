r"""Expand ``:::`` block markers into HTML open and close tags.

Textbook authors wrap Markdown in containers with fenced markers::

    ::: .callout(parent="wide")
    Body keeps **Markdown** semantics.
    :::

A marker's tag specifier is Pug. ``column`` and ``tab`` specifiers open a row
or tab box on first use and continue the same group on the following marker;
an empty marker closes the innermost open block.

Example
-------
>>> from textbook_compiler.blocks import BlockStructureParser
>>> from textbook_compiler.templates import TemplateRenderer
>>> parser = BlockStructureParser(TemplateRenderer())  # doctest: +SKIP
>>> parser.parse("::: .box\nHello\n:::")  # doctest: +SKIP
'\n<div class="box">\n\nHello\n\n</div>\n'
"""

from __future__ import annotations

import typing as typ

from ._constants import (
    BLOCK_MARKER,
    COLUMN_GROUP_CLOSE,
    COLUMN_GROUP_OPEN,
    COLUMN_KEYWORD,
    TAB_GROUP_CLOSE,
    TAB_GROUP_OPEN,
    TAB_KEYWORD,
)
from .errors import StructureError

if typ.TYPE_CHECKING:
    from .templates import TemplateRenderer


class OpenBlock(typ.NamedTuple):
    """A container opened by a marker and waiting for its close marker."""

    kind: str
    close: str


class BlockStructureParser:
    """Line-oriented stack machine rewriting ``:::`` markers into HTML."""

    def __init__(self, templates: TemplateRenderer) -> None:
        self.templates = templates
        self.stack: list[OpenBlock] = []

    def parse(self, text: str) -> str:
        """Return ``text`` with every marker line replaced by HTML.

        Raises
        ------
        StructureError
            If a close marker has no open block, or a block is still open at
            the end of the input.
        """
        self.stack = []
        lines = text.split("\n")
        for number, line in enumerate(lines, start=1):
            if line.startswith(BLOCK_MARKER):
                lines[number - 1] = self._expand(line[len(BLOCK_MARKER) :].strip(), number)
        if self.stack:
            msg = f"{len(self.stack)} block(s) opened with '{BLOCK_MARKER}' are never closed."
            raise StructureError(msg)
        return "\n".join(lines)

    def _expand(self, tag: str, number: int) -> str:
        if not tag:
            return self._close(number)
        if tag.startswith(COLUMN_KEYWORD):
            opening = self._column(tag)
            return self._group(COLUMN_KEYWORD, opening, COLUMN_GROUP_OPEN, COLUMN_GROUP_CLOSE)
        if tag.startswith(TAB_KEYWORD):
            opening, _ = self.templates.render_tag_pair(tag.replace(TAB_KEYWORD, ".tab", 1))
            return self._group(TAB_KEYWORD, opening, TAB_GROUP_OPEN, TAB_GROUP_CLOSE)
        opening, closing = self.templates.render_tag_pair(tag)
        self.stack.append(OpenBlock("block", closing))
        return _standalone(opening)

    def _close(self, number: int) -> str:
        if not self.stack:
            msg = f"Line {number}: '{BLOCK_MARKER}' closes a block but none is open."
            raise StructureError(msg)
        return _standalone(self.stack.pop().close)

    def _group(self, kind: str, opening: str, wrapper: str, close: str) -> str:
        """Continue the innermost group of ``kind`` or open a new one."""
        if self.stack and self.stack[-1].kind == kind:
            return _standalone(f"</div>{opening}")
        self.stack.append(OpenBlock(kind, close))
        return _standalone(f"{wrapper}{opening}")

    def _column(self, tag: str) -> str:
        """Render a column opening tag with its width moved into a style."""
        fragment = self.templates.render_fragment(tag.replace(COLUMN_KEYWORD, "div", 1))
        column = fragment.find(True)
        if column is None:
            return "<div>"
        width = column.attrs.pop("width", None)
        if width is not None and str(width).isdigit():
            style = f"width: {width}px"
            existing = column.get("style")
            column["style"] = f"{existing}; {style}" if existing else style
        elif width is not None:
            column["width"] = width
        column.clear()
        return str(column).partition("</")[0]


def _standalone(markup: str) -> str:
    """Surround generated markup with blank lines so it parses as raw HTML."""
    return f"\n{markup}\n"


__all__ = ["BlockStructureParser", "OpenBlock"]
