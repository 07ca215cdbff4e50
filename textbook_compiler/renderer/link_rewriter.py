"""Rewrite Markdown links according to their textbook scheme.

``gloss:`` and ``bio:`` targets become glossary and biography references and
are recorded on the compilation context; ``target:`` marks a navigation
target; ``->`` points at another step; every other link opens in a new
browsing context.
"""

from __future__ import annotations

import typing as typ
from html import unescape

from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from textbook_compiler.context import CompilationContext

GLOSS_SCHEME = "gloss:"
BIO_SCHEME = "bio:"
TARGET_SCHEME = "target:"
STEP_ARROW = "->"


class LinkTreeprocessor(Treeprocessor):
    """Turn ``<a>`` elements into glossary, biography and step references."""

    def __init__(self, md: Markdown, context: CompilationContext) -> None:
        super().__init__(md)
        self.context = context

    def run(self, root: Element) -> Element:
        """Rewrite every anchor in the parsed markdown tree."""
        for element in list(root.iter("a")):
            self._rewrite(element, element.get("href") or "")
        return root

    def _rewrite(self, element: Element, href: str) -> None:
        if href.startswith(GLOSS_SCHEME):
            xid = href[len(GLOSS_SCHEME) :]
            self.context.gloss.add(xid)
            _retag(element, "x-gloss", xid=xid)
        elif href.startswith(BIO_SCHEME):
            xid = href[len(BIO_SCHEME) :]
            self.context.bios.add(xid)
            _retag(element, "x-bio", xid=xid)
        elif href.startswith(TARGET_SCHEME):
            _retag(element, "span", **{"class": "step-target", "data-to": href[len(TARGET_SCHEME) :]})
        elif unescape(href).startswith(STEP_ARROW):
            _retag(element, "x-target", to=unescape(href)[len(STEP_ARROW) :].strip())
        else:
            element.set("target", "_blank")


def _retag(element: Element, tag: str, **attributes: str) -> None:
    """Rename ``element`` and replace its ``href`` with ``attributes``."""
    element.tag = tag
    element.attrib.pop("href", None)
    for name, value in attributes.items():
        element.set(name, value)


__all__ = ["LinkTreeprocessor"]
