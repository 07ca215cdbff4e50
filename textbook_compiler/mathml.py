"""Convert inline code expressions from ASCIIMath to MathML.

Inline code in textbook Markdown is mathematics, not source code. The
expression is converted with ``py_asciimath`` in bare mode (no surrounding
``<math>`` element) and then passed through :data:`MARKUP_FIXUPS`, an ordered
list of presentation tweaks expected by the textbook stylesheets.
"""

from __future__ import annotations

import re
import typing as typ
from html import unescape

from py_asciimath.translator.translator import ASCIIMath2MathML

from .errors import MathConversionError

MATH_WRAPPER_PATTERN = re.compile(r"^\s*<math[^>]*>(.*)</math>\s*$", re.DOTALL)
SINGLE_OPERATOR_PATTERN = re.compile(r">(.)</mo>")


def _annotate_operator(match: re.Match[str]) -> str:
    operator = match.group(1)
    return f' value="{operator}">{operator}</mo>'


MARKUP_FIXUPS: tuple[tuple[re.Pattern[str], str | typ.Callable[[re.Match[str]], str]], ...] = (
    (re.compile(r"<mo>-</mo>"), "<mo>−</mo>"),
    (re.compile(r'\s*accent="true"'), ""),
    (re.compile(r'\s*lspace="0" rspace="0">′'), ">′"),
    (SINGLE_OPERATOR_PATTERN, _annotate_operator),
)


def apply_fixups(markup: str) -> str:
    """Apply every presentation fix-up to MathML ``markup`` in order."""
    for pattern, replacement in MARKUP_FIXUPS:
        markup = pattern.sub(replacement, markup)
    return markup


def strip_math_wrapper(markup: str) -> str:
    """Return the children of a top-level ``<math>`` element."""
    match = MATH_WRAPPER_PATTERN.match(markup)
    return match.group(1) if match else markup


class MathRenderer:
    """Render ASCIIMath expressions as ``<span class="math">`` markup.

    The underlying translator builds its grammar once, lazily, and is only read
    afterwards, so one renderer can be shared by concurrent compilations.
    """

    def __init__(self) -> None:
        self._translator: ASCIIMath2MathML | None = None

    @property
    def translator(self) -> ASCIIMath2MathML:
        """Return the cached ASCIIMath translator."""
        if self._translator is None:
            self._translator = ASCIIMath2MathML(log=False, inplace=True)
        return self._translator

    def to_mathml(self, expression: str) -> str:
        """Convert ``expression`` to bare MathML.

        Raises
        ------
        MathConversionError
            If the translator rejects the expression.
        """
        try:
            markup = self.translator.translate(
                expression,
                displaystyle=False,
                from_file=False,
                output="string",
                pprint=False,
                xml_declaration=False,
                xml_pprint=False,
            )
        except Exception as exc:  # noqa: BLE001 - translator errors vary by parser stage
            msg = f"Could not convert {expression!r} to MathML: {exc}"
            raise MathConversionError(msg) from exc
        return strip_math_wrapper(str(markup))

    def render(self, code: str) -> str:
        """Return styled math markup for the raw text of an inline code span."""
        maths = apply_fixups(self.to_mathml(unescape(code)))
        return f'<span class="math">{maths}</span>'


__all__ = ["MARKUP_FIXUPS", "MathRenderer", "apply_fixups", "strip_math_wrapper"]
