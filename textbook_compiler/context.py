"""Per-call state threaded through every compilation stage."""

from __future__ import annotations

import dataclasses as dc
import logging

from .config import CompilerConfig
from .mathml import MathRenderer
from .models import Document, Step
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class CompilationContext:
    """Mutable state owned by one compilation.

    Attributes
    ----------
    document_id : str
        Identifier of the document being compiled.
    templates : TemplateRenderer
        Template environment rooted at the document's source directory.
    math : MathRenderer
        Shared, read-only ASCIIMath converter.
    config : CompilerConfig
        Read-only compiler settings.
    document : Document
        Metadata and step records accumulated while rendering.
    current_step : Step or None
        Step that receives front matter and templates; ``None`` before the
        first horizontal rule.
    template_preamble : str
        Indented code blocks seen before the first step, prepended to every
        later template so shared mixins are available.
    gloss : set[str]
        Glossary identifiers referenced so far.
    bios : set[str]
        Biography identifiers referenced so far.
    """

    document_id: str
    templates: TemplateRenderer
    math: MathRenderer
    config: CompilerConfig = dc.field(default_factory=CompilerConfig)
    document: Document = dc.field(default_factory=Document)
    current_step: Step | None = None
    template_preamble: str = ""
    gloss: set[str] = dc.field(default_factory=set)
    bios: set[str] = dc.field(default_factory=set)

    def start_step(self) -> tuple[Step, Step | None]:
        """Open a new step and return it with the step it replaces."""
        previous = self.current_step
        self.current_step = self.document.new_step()
        logger.debug(
            "Opened step %d in document %s", len(self.document.steps) - 1, self.document_id
        )
        return self.current_step, previous

    def merge_front_matter(self, values: dict[str, object]) -> None:
        """Merge front matter into the current step, or the document before it."""
        target = self.current_step if self.current_step is not None else self.document
        target.update(values)

    def add_to_preamble(self, code: str) -> None:
        """Record template source shared by every later template block."""
        self.template_preamble += f"{code}\n\n"
        logger.debug("Template preamble extended to %d characters", len(self.template_preamble))


__all__ = ["CompilationContext"]
