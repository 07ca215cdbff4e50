"""Dataclasses describing a compiled textbook document and its steps."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .errors import MetadataParseError

RESERVED_DOCUMENT_KEYS = frozenset({"steps"})


@dc.dataclass(slots=True)
class Step:
    """A single lesson unit opened by a horizontal rule.

    Attributes
    ----------
    id : str or None
        Explicit identifier from front matter; assigned ``step-<index>`` during
        DOM post-processing when missing.
    goals : str or None
        Space-separated goal names copied onto the ``x-step`` element.
    css_class : str or None
        Class list copied onto the ``x-step`` element.
    extra : dict[str, Any]
        Remaining front-matter keys scoped to this step.
    html : str or None
        Minified outer HTML of the step, attached by the output assembler.
    """

    id: str | None = None
    goals: str | None = None
    css_class: str | None = None
    extra: dict[str, typ.Any] = dc.field(default_factory=dict)
    html: str | None = None

    def update(self, values: typ.Mapping[str, typ.Any]) -> None:
        """Merge a front-matter mapping into the step."""
        for key, value in values.items():
            match key:
                case "id":
                    self.id = None if value is None else str(value)
                case "goals":
                    self.goals = None if value is None else str(value)
                case "class":
                    self.css_class = None if value is None else str(value)
                case _:
                    self.extra[str(key)] = value

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the step metadata as a plain mapping."""
        payload: dict[str, typ.Any] = {"id": self.id}
        if self.goals is not None:
            payload["goals"] = self.goals
        if self.css_class is not None:
            payload["class"] = self.css_class
        payload.update(self.extra)
        return payload


@dc.dataclass(slots=True)
class Document:
    """Document-level metadata and the ordered step records.

    Attributes
    ----------
    title : str or None
        Text of the last level-one heading, or a ``title`` front-matter key.
    steps : list[Step]
        Steps in source order of their boundary markers.
    metadata : dict[str, Any]
        Front-matter keys that appeared before the first step.
    """

    title: str | None = None
    steps: list[Step] = dc.field(default_factory=list)
    metadata: dict[str, typ.Any] = dc.field(default_factory=dict)

    def update(self, values: typ.Mapping[str, typ.Any]) -> None:
        """Merge a top-level front-matter mapping into the document.

        Raises
        ------
        MetadataParseError
            If the mapping uses a reserved key such as ``steps``.
        """
        for key, value in values.items():
            if key in RESERVED_DOCUMENT_KEYS:
                msg = f"Front matter may not set the reserved key '{key}'."
                raise MetadataParseError(msg)
            if key == "title":
                self.title = None if value is None else str(value)
            else:
                self.metadata[str(key)] = value

    def new_step(self) -> Step:
        """Append and return a fresh step."""
        step = Step()
        self.steps.append(step)
        return step

    def to_dict(self) -> dict[str, typ.Any]:
        """Return document metadata with step records as plain mappings."""
        payload: dict[str, typ.Any] = {"title": self.title}
        payload.update(self.metadata)
        payload["steps"] = [step.to_dict() for step in self.steps]
        return payload


@dc.dataclass(slots=True)
class CompilationResult:
    """Everything produced by compiling one document.

    Attributes
    ----------
    html : str
        Minified HTML of the whole document.
    steps : dict[str, str]
        Minified outer HTML of each ``x-step`` element keyed by step id, in
        document order.
    data : Document
        Document metadata including the ordered step records.
    gloss : set[str]
        Glossary identifiers referenced through ``gloss:`` links.
    bios : set[str]
        Biography identifiers referenced through ``bio:`` links.
    """

    html: str
    steps: dict[str, str]
    data: Document
    gloss: set[str]
    bios: set[str]

    def to_builtins(self) -> dict[str, typ.Any]:
        """Return a JSON-serialisable mapping of the result."""
        return {
            "html": self.html,
            "steps": dict(self.steps),
            "data": self.data.to_dict(),
            "gloss": sorted(self.gloss),
            "bios": sorted(self.bios),
        }


__all__ = ["CompilationResult", "Document", "Step"]
