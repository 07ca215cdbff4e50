"""Behaviour tests for splitting lessons into steps.

The scenarios in ``features/step_compilation.feature`` compile small lessons
end to end and check the step records, the page HTML and the collected
glossary references.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from textbook_compiler import CompilationError, StructureError, TextbookCompiler

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "step_compilation.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a lesson with a titled introduction and two steps")
def given_two_step_lesson(scenario_state: dict[str, object]) -> None:
    scenario_state["source"] = (
        "# Waves\n\nWelcome.\n\n---\n\n> id: intro\n\nFirst step.\n\n---\n\nSecond step.\n"
    )


@given("a lesson that mentions the same glossary term twice")
def given_repeated_glossary(scenario_state: dict[str, object]) -> None:
    scenario_state["source"] = (
        "---\n\nAn [amplitude](gloss:amplitude).\n\n---\n\nAgain [it](gloss:amplitude).\n"
    )


@given("a lesson with a block that is never closed")
def given_unclosed_block(scenario_state: dict[str, object]) -> None:
    scenario_state["source"] = "---\n\n::: .callout\nNever closed.\n"


@when("the lesson is compiled")
def when_compiled(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Compile the lesson, keeping either the result or the failure."""
    try:
        scenario_state["result"] = TextbookCompiler().compile(
            "waves", str(scenario_state["source"]), tmp_path
        )
    except CompilationError as exc:
        scenario_state["error"] = exc


@then('the document title is "Waves"')
def then_title(scenario_state: dict[str, object]) -> None:
    assert scenario_state["result"].data.title == "Waves"  # type: ignore[attr-defined]


@then('the step ids are "intro" and "step-1"')
def then_step_ids(scenario_state: dict[str, object]) -> None:
    result = scenario_state["result"]
    assert list(result.steps) == ["intro", "step-1"]  # type: ignore[attr-defined]


@then("every step fragment matches its element in the page")
def then_fragments_match(scenario_state: dict[str, object]) -> None:
    result = scenario_state["result"]
    page = BeautifulSoup(result.html, "html.parser")  # type: ignore[attr-defined]
    for step_id, fragment in result.steps.items():  # type: ignore[attr-defined]
        element = page.find("x-step", id=step_id)
        assert element is not None
        standalone = BeautifulSoup(fragment, "html.parser").find("x-step")
        assert standalone is not None
        assert standalone.get_text() == element.get_text()


@then('the glossary references are "amplitude"')
def then_glossary(scenario_state: dict[str, object]) -> None:
    assert scenario_state["result"].gloss == {"amplitude"}  # type: ignore[attr-defined]


@then("compilation fails with a structure error")
def then_structure_error(scenario_state: dict[str, object]) -> None:
    assert "result" not in scenario_state
    assert isinstance(scenario_state["error"], StructureError)
