"""Cyclopts CLI entrypoint for compiling textbook Markdown.

The ``textbook`` console script compiles one content file into a JSON bundle
holding the page HTML, the per-step fragments, the document metadata and the
glossary and biography identifiers the content references. Typical usage runs
``textbook compile content/atoms/content.md`` from a build script.

Examples
--------
Compile a chapter next to its source:

>>> from textbook_compiler.cli import main
>>> main()  # doctest: +SKIP

Compile into a custom output file with a site configuration:

>>> from textbook_compiler.cli import app
>>> app(
...     ["compile", "content/atoms/content.md", "--output", "dist/atoms.json"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from .compiler import TextbookCompiler
from .config import CompilerConfig, load_compiler_config

DEFAULT_CONFIG = Path("textbook.yaml")

app = App(name="textbook", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_config(path: Path) -> CompilerConfig:
    """Return the configuration at ``path``, or defaults when it is absent."""
    if path == DEFAULT_CONFIG and not path.exists():
        return CompilerConfig()
    return load_compiler_config(path)


@app.command(help="Compile a textbook Markdown file into a JSON bundle.")
def compile(  # noqa: A001 - command name mirrors the CLI verb
    source: typ.Annotated[Path, Parameter(help="Markdown content file")],
    *,
    document_id: typ.Annotated[
        str | None,
        Parameter(help="Document identifier", env_var="INPUT_DOCUMENT_ID"),
    ] = None,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Where to write the JSON bundle", env_var="INPUT_OUTPUT"),
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to compiler config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Compile ``source`` and write the result as JSON.

    Parameters
    ----------
    source : Path
        Textbook Markdown file; its directory resolves template includes.
    document_id : str or None, optional
        Identifier namespacing image resources; defaults to the name of the
        source file's directory.
    output : Path or None, optional
        JSON output path; defaults to ``<source stem>.json`` next to the
        source.
    config : Path, optional
        Compiler configuration YAML; defaults to ``textbook.yaml`` and is
        optional when left at that default.

    Returns
    -------
    None
        Writes the JSON bundle and prints its path.

    Raises
    ------
    FileNotFoundError
        If ``source`` (or an explicitly requested ``config``) does not exist.
    CompilationError
        If the document is malformed.
    """
    if not source.exists():
        msg = f"Source file '{source}' not found."
        raise FileNotFoundError(msg)
    compiler = TextbookCompiler(_load_config(config))
    resolved = source.resolve()
    result = compiler.compile(
        document_id or resolved.parent.name,
        source.read_text(encoding="utf-8"),
        resolved.parent,
    )
    target = output or source.with_suffix(".json")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(msgspec_json.format(msgspec_json.encode(result.to_builtins()), indent=2))
    print(f"wrote {_format_path(target)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``textbook`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
