"""Raw HTML detection tuned for generated container tags.

The stock ``html_block`` preprocessor swallows everything between an opening
``<div>`` and its matching close, which would disable Markdown inside ``:::``
containers. :class:`RawHtmlLinePreprocessor` instead stashes single tag lines
that stand alone before a blank line, leaving the lines between them to the
normal block parser.
"""

from __future__ import annotations

import re

from markdown.postprocessors import RawHtmlPostprocessor
from markdown.preprocessors import Preprocessor

RAW_LINE_PATTERN = re.compile(r"^<(?:!|/?[A-Za-z][\w-]*(?:[\s/>]|$))")
RAW_TAG_PATTERN = re.compile(r"^</?([^ >]+)")
EXTRA_BLOCK_TAGS = frozenset({"svg"})


class RawHtmlLinePreprocessor(Preprocessor):
    """Stash lines that start with a tag and are followed by a blank line."""

    def run(self, lines: list[str]) -> list[str]:
        result: list[str] = []
        for index, line in enumerate(lines):
            followed_by_blank = index + 1 == len(lines) or not lines[index + 1].strip()
            if followed_by_blank and RAW_LINE_PATTERN.match(line):
                result.append(self.md.htmlStash.store(line))
            else:
                result.append(line)
        return result


class TextbookRawHtmlPostprocessor(RawHtmlPostprocessor):
    """Treat custom elements as block level when restoring stashed HTML."""

    def isblocklevel(self, html: str) -> bool:  # noqa: D102
        m = RAW_TAG_PATTERN.match(html)
        if m:
            tag = m.group(1).lower()
            if "-" in tag or tag in EXTRA_BLOCK_TAGS:
                return True
        return super().isblocklevel(html)


__all__ = ["RawHtmlLinePreprocessor", "TextbookRawHtmlPostprocessor"]
