"""Serialize the post-processed tree into the final compilation result."""

from __future__ import annotations

import typing as typ

import htmlmin

from ._constants import STEP_TAG
from .models import CompilationResult

if typ.TYPE_CHECKING:
    from bs4 import BeautifulSoup

    from .context import CompilationContext


def minify_markup(html: str) -> str:
    """Collapse whitespace conservatively and strip comments from ``html``.

    Whitespace runs shrink to a single space but are never removed, so text
    separated only by whitespace between inline elements keeps its spacing.
    Entities are passed through untouched. Minifying already-minified markup
    returns it unchanged.
    """
    return htmlmin.minify(
        html,
        remove_comments=True,
        remove_empty_space=False,
        convert_charrefs=False,
    )


def assemble_result(soup: BeautifulSoup, context: CompilationContext) -> CompilationResult:
    """Bundle minified HTML, step fragments and metadata for ``context``.

    Parameters
    ----------
    soup : BeautifulSoup
        Post-processed tree whose root stands for the document body.
    context : CompilationContext
        Compilation providing the document model and reference sets.

    Returns
    -------
    CompilationResult
        Minified page HTML, step fragments keyed by id, document metadata and
        the glossary and biography identifiers.
    """
    steps: dict[str, str] = {}
    for element, step in zip(soup.find_all(STEP_TAG), context.document.steps, strict=False):
        fragment = minify_markup(str(element))
        step.html = fragment
        steps[str(element.get("id"))] = fragment
    return CompilationResult(
        html=minify_markup(soup.decode_contents()),
        steps=steps,
        data=context.document,
        gloss=set(context.gloss),
        bios=set(context.bios),
    )


__all__ = ["assemble_result", "minify_markup"]
