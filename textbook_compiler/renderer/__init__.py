"""Python-Markdown handlers that give standard constructs textbook meaning."""

from .blockprocessors import (
    FrontMatterProcessor,
    StepBoundaryProcessor,
    TemplateCodeProcessor,
    parse_front_matter,
)
from .extension import TextbookExtension
from .inline_code import MathInlineProcessor
from .link_rewriter import LinkTreeprocessor
from .raw_html import RawHtmlLinePreprocessor, TextbookRawHtmlPostprocessor
from .treeprocessors import TitleTreeprocessor

__all__ = [
    "FrontMatterProcessor",
    "LinkTreeprocessor",
    "MathInlineProcessor",
    "RawHtmlLinePreprocessor",
    "StepBoundaryProcessor",
    "TemplateCodeProcessor",
    "TextbookExtension",
    "TextbookRawHtmlPostprocessor",
    "TitleTreeprocessor",
    "parse_front_matter",
]
