"""Restructure the rendered HTML tree before output.

:class:`DomPostProcessor` runs four passes over the BeautifulSoup tree built
from the renderer's HTML:

1. attribute blocks: a leading ``{pug}`` group in an element's first text
   node is rendered and either merged into the element (``div`` roots) or
   replaces it;
2. Markdown inside HTML: elements with the ``md`` class have their content
   rendered as Markdown;
3. parent classes: ``parent="a b"`` moves the classes onto the parent node;
4. step identity: ``x-step`` elements receive the ids, goals and classes of
   the step records, paired by position.
"""

from __future__ import annotations

import re
import typing as typ

from bs4 import BeautifulSoup, NavigableString, Tag

from ._constants import DEFAULT_STEP_ID, MARKDOWN_CLASS, PARENT_ATTRIBUTE, STEP_TAG

if typ.TYPE_CHECKING:
    from .context import CompilationContext

ATTRIBUTE_BLOCK_PATTERN = re.compile(r"^\{([^}]+)\}")
WRAPPING_PARAGRAPH_PATTERN = re.compile(r"^<p>|</p>$")


def post_order(root: Tag) -> list[Tag]:
    """Return the element descendants of ``root``, children before parents."""
    result: list[Tag] = []
    for child in root.find_all(True, recursive=False):
        result.extend(post_order(child))
        result.append(child)
    return result


def _class_list(value: str | list[str] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


class DomPostProcessor:
    """Apply the post-render passes for one compilation."""

    def __init__(
        self,
        context: CompilationContext,
        render_markdown: typ.Callable[[str], str] | None = None,
    ) -> None:
        """Bind the processor to a compilation.

        Parameters
        ----------
        context : CompilationContext
            Compilation whose templates and step records are used.
        render_markdown : callable, optional
            Converts Markdown to HTML for elements with the ``md`` class; when
            ``None`` those elements are left untouched.
        """
        self.context = context
        self.render_markdown = render_markdown

    def run(self, soup: BeautifulSoup) -> BeautifulSoup:
        """Apply every pass to ``soup`` in place and return it."""
        for element in post_order(soup):
            self.expand_attribute_block(element)
        if self.render_markdown is not None:
            for element in soup.select(f".{MARKDOWN_CLASS}"):
                render_markdown_content(element, self.render_markdown)
        for element in soup.select(f"[{PARENT_ATTRIBUTE}]"):
            propagate_parent_classes(element)
        self.assign_step_identity(soup)
        return soup

    def expand_attribute_block(self, element: Tag) -> None:
        """Expand a leading ``{...}`` group in the first child of ``element``."""
        first = next(iter(element.contents), None)
        if type(first) is not NavigableString:
            return
        match = ATTRIBUTE_BLOCK_PATTERN.match(str(first))
        if not match:
            return
        first.replace_with(NavigableString(str(first)[match.end() :]))

        fragment = self.context.templates.render_fragment(match.group(1))
        rendered = fragment.find(True)
        if rendered is None:
            return
        if rendered.name == "div":
            for name, value in rendered.attrs.items():
                element[name] = value
            return
        rendered.extract()
        for child in list(element.contents):
            rendered.append(child.extract())
        element.replace_with(rendered)

    def assign_step_identity(self, soup: BeautifulSoup) -> None:
        """Copy step ids, goals and classes onto the ``x-step`` elements."""
        elements = soup.find_all(STEP_TAG)
        steps = self.context.document.steps
        for index, (element, step) in enumerate(zip(elements, steps, strict=False)):
            if not step.id:
                step.id = DEFAULT_STEP_ID.format(index=index)
            element["id"] = step.id
            if step.goals:
                element["goals"] = step.goals
            if step.css_class:
                element["class"] = step.css_class


def render_markdown_content(element: Tag, render: typ.Callable[[str], str]) -> None:
    """Render the content of an ``md``-classed element as Markdown."""
    classes = [name for name in _class_list(element.get("class")) if name != MARKDOWN_CLASS]
    if classes:
        element["class"] = classes
    else:
        del element["class"]
    html = WRAPPING_PARAGRAPH_PATTERN.sub("", render(element.decode_contents()).strip())
    fragment = BeautifulSoup(html, "html.parser")
    element.clear()
    for child in list(fragment.contents):
        element.append(child.extract())


def propagate_parent_classes(element: Tag) -> None:
    """Move the classes named by ``parent="..."`` onto the element's parent."""
    classes = _class_list(element.get(PARENT_ATTRIBUTE))
    del element[PARENT_ATTRIBUTE]
    parent = element.parent
    if parent is None or isinstance(parent, BeautifulSoup):
        return
    existing = _class_list(parent.get("class"))
    parent["class"] = existing + [name for name in classes if name not in existing]


__all__ = [
    "DomPostProcessor",
    "post_order",
    "propagate_parent_classes",
    "render_markdown_content",
]
