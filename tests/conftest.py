"""Shared fixtures for the textbook compiler test suite.

``StubTemplates`` replaces the Pug/Jinja stage with a lookup table so block
and DOM tests can assert exact markup without depending on the template
engine's formatting. ``compile_text`` compiles a string with a temporary
source directory.
"""

from __future__ import annotations

import typing as typ

import pytest

from textbook_compiler.compiler import TextbookCompiler
from textbook_compiler.context import CompilationContext
from textbook_compiler.errors import TemplateRenderError
from textbook_compiler.mathml import MathRenderer
from textbook_compiler.templates import TemplateRenderer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from textbook_compiler.models import CompilationResult


class StubTemplates(TemplateRenderer):
    """Template renderer returning canned HTML for known snippets."""

    def __init__(self, rendered: dict[str, str]) -> None:
        super().__init__()
        self.rendered = rendered
        self.sources: list[str] = []

    def render(self, source: str) -> str:
        self.sources.append(source)
        try:
            return self.rendered[source.strip()]
        except KeyError as exc:
            msg = f"No stub for {source!r}"
            raise TemplateRenderError(msg) from exc


class FakeTranslator:
    """Stand-in for the ASCIIMath translator recording its inputs."""

    def __init__(self, markup: str = "<math><mi>x</mi><mo>-</mo><mn>1</mn></math>") -> None:
        self.markup = markup
        self.expressions: list[str] = []

    def translate(self, expression: str, **_: object) -> str:
        self.expressions.append(expression)
        return self.markup


@pytest.fixture
def stub_templates() -> typ.Callable[[dict[str, str]], StubTemplates]:
    """Return a factory building ``StubTemplates`` from a mapping."""
    return StubTemplates


@pytest.fixture
def make_context() -> typ.Callable[..., CompilationContext]:
    """Return a factory for compilation contexts backed by stub templates."""

    def _make(rendered: dict[str, str] | None = None) -> CompilationContext:
        return CompilationContext(
            document_id="doc",
            templates=StubTemplates(rendered or {}),
            math=MathRenderer(),
        )

    return _make


@pytest.fixture
def compiler() -> TextbookCompiler:
    """Return a compiler with default configuration."""
    return TextbookCompiler()


@pytest.fixture
def compile_text(
    compiler: TextbookCompiler, tmp_path: Path
) -> typ.Callable[[str], CompilationResult]:
    """Return a helper compiling source text as document ``doc``."""

    def _compile(source: str) -> CompilationResult:
        return compiler.compile("doc", source, tmp_path)

    return _compile


@pytest.fixture
def fake_translator() -> FakeTranslator:
    """Return a translator double producing fixed MathML."""
    return FakeTranslator()
