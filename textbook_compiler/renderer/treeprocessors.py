"""Tree processors for document-level heading handling."""

from __future__ import annotations

import typing as typ

from markdown import util
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from textbook_compiler.context import CompilationContext


class TitleTreeprocessor(Treeprocessor):
    """Use level-one headings as the document title and drop them.

    Runs after inline processing and link rewriting, so references inside the
    heading are recorded and the title is the heading's rendered text. When
    several level-one headings exist the last one wins.
    """

    def __init__(self, md: Markdown, context: CompilationContext) -> None:
        super().__init__(md)
        self.context = context

    def run(self, root: Element) -> Element:
        for parent in list(root.iter()):
            for child in list(parent):
                if child.tag == "h1":
                    self.context.document.title = self._text(child)
                    parent.remove(child)
        return root

    def _text(self, heading: Element) -> str:
        text = util.HTML_PLACEHOLDER_RE.sub("", "".join(heading.itertext()))
        if "unescape" in self.md.treeprocessors:
            text = self.md.treeprocessors["unescape"].unescape(text)  # type: ignore[attr-defined]
        return " ".join(text.split())


__all__ = ["TitleTreeprocessor"]
