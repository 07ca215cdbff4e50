"""Render Pug template snippets into HTML through Jinja.

Block markers, attribute blocks and indented code blocks are authored in Pug.
:class:`TemplateRenderer` converts that source to Jinja with the ``pypugjs``
extension and renders it in an environment whose loader is rooted at the
document's source directory, so ``include`` statements resolve next to the
content file.
"""

from __future__ import annotations

import re
from pathlib import Path

from bs4 import BeautifulSoup
from jinja2 import Environment, FileSystemLoader
from pypugjs.ext.jinja import PyPugJSExtension

from ._constants import TEMPLATE_NAME
from .errors import TemplateRenderError

INTER_TAG_WHITESPACE = re.compile(r">\s+<")


class TemplateRenderer:
    """Render Pug source relative to one document directory."""

    def __init__(self, source_directory: str | Path | None = None) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        source_directory : str or Path, optional
            Directory used to resolve template includes; defaults to the
            current working directory.
        """
        self.source_directory = Path(source_directory or ".")
        self.env = Environment(
            loader=FileSystemLoader(str(self.source_directory)),
            extensions=[PyPugJSExtension],
            autoescape=False,
        )

    def render(self, source: str) -> str:
        """Render Pug ``source`` to an HTML string.

        Raises
        ------
        TemplateRenderError
            If the Pug or Jinja stage rejects the source.
        """
        try:
            jinja_source = self.env.preprocess(source, name=TEMPLATE_NAME)
            return self.env.from_string(jinja_source).render()
        except Exception as exc:  # noqa: BLE001 - pypugjs raises bare exceptions
            msg = f"Failed to render template {source.strip()!r}: {exc}"
            raise TemplateRenderError(msg) from exc

    def render_fragment(self, source: str) -> BeautifulSoup:
        """Render ``source`` and parse the result into a detached tree."""
        return BeautifulSoup(self.render(source), "html.parser")

    def render_tag_pair(self, source: str) -> tuple[str, str]:
        """Render ``source`` and split it into opening and closing markup.

        The split happens at the first closing tag, so text content rendered
        by the snippet stays with the opening half. Void elements yield an
        empty closing half.
        """
        markup = _single_line(str(self.render_fragment(source)))
        opening, separator, closing = markup.partition("</")
        return opening, f"{separator}{closing}" if separator else ""


def _single_line(markup: str) -> str:
    """Collapse pretty-printed markup onto one line."""
    return " ".join(INTER_TAG_WHITESPACE.sub("><", markup.strip()).split("\n"))


__all__ = ["TemplateRenderer"]
