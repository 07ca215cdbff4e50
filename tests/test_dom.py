"""Tests for the post-render DOM passes."""

from __future__ import annotations

import typing as typ

from bs4 import BeautifulSoup

from textbook_compiler.dom import DomPostProcessor, post_order

if typ.TYPE_CHECKING:
    from textbook_compiler.context import CompilationContext

MakeContext = typ.Callable[..., "CompilationContext"]


def _run(context: CompilationContext, html: str, render: typ.Any = None) -> BeautifulSoup:
    return DomPostProcessor(context, render).run(BeautifulSoup(html, "html.parser"))


def test_post_order_visits_children_first() -> None:
    soup = BeautifulSoup("<div><p><em>x</em></p><span></span></div>", "html.parser")
    assert [el.name for el in post_order(soup)] == ["em", "p", "span", "div"]


def test_div_attribute_block_merges_into_element(make_context: MakeContext) -> None:
    context = make_context({'.note(data-x="1")': '<div class="note" data-x="1"></div>'})
    soup = _run(context, '<p>{.note(data-x="1")} Hello</p>')
    p = soup.find("p")
    assert p is not None
    assert p["class"] == ["note"]
    assert p["data-x"] == "1"
    assert p.get_text() == " Hello"


def test_other_attribute_block_replaces_element(make_context: MakeContext) -> None:
    context = make_context({"span.tag": '<span class="tag"></span>'})
    soup = _run(context, "<div><p>{span.tag} <em>Label</em></p></div>")
    assert soup.find("p") is None
    span = soup.select_one("div > span.tag")
    assert span is not None
    assert span.find("em") is not None


def test_attribute_block_must_lead_first_child(make_context: MakeContext) -> None:
    context = make_context()
    html = "<p><em>x</em>{.a} y</p>"
    assert str(_run(context, html)) == html
    assert context.templates.sources == []  # type: ignore[attr-defined]


def test_nested_attribute_blocks_apply_inside_out(make_context: MakeContext) -> None:
    context = make_context(
        {"section": "<section></section>", "span.inner": '<span class="inner"></span>'}
    )
    soup = _run(context, "<p>{section}<b>{span.inner}x</b></p>")
    assert soup.select_one("section > span.inner") is not None
    assert context.templates.sources == ["span.inner", "section"]  # type: ignore[attr-defined]


def test_markdown_class_content_is_rendered(make_context: MakeContext) -> None:
    def render(text: str) -> str:
        return "<p>" + text.replace("*em*", "<em>em</em>") + "</p>"

    soup = _run(make_context(), '<div class="md box">Some *em*</div>', render)
    div = soup.find("div")
    assert div is not None
    assert div["class"] == ["box"]
    assert div.decode_contents() == "Some <em>em</em>"


def test_markdown_class_is_dropped_when_alone(make_context: MakeContext) -> None:
    soup = _run(make_context(), '<span class="md">x</span>', lambda text: text)
    span = soup.find("span")
    assert span is not None
    assert not span.has_attr("class")


def test_parent_classes_move_to_parent(make_context: MakeContext) -> None:
    soup = _run(make_context(), '<div class="a"><span parent="a b">x</span></div>')
    div = soup.find("div")
    assert div is not None
    assert div["class"] == ["a", "b"]
    span = soup.find("span")
    assert span is not None
    assert not span.has_attr("parent")


def test_steps_receive_ids_goals_and_classes(make_context: MakeContext) -> None:
    context = make_context()
    first = context.document.new_step()
    first.update({"id": "intro", "goals": "g1 g2", "class": "wide"})
    second = context.document.new_step()
    soup = _run(context, "<x-step>A</x-step><x-step>B</x-step>")
    one, two = soup.find_all("x-step")
    assert one["id"] == "intro"
    assert one["goals"] == "g1 g2"
    assert one["class"] == "wide"
    assert two["id"] == "step-1"
    assert not two.has_attr("goals")
    assert second.id == "step-1"
