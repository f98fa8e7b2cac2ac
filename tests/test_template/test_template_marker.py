"""Tests for the template marker and the render model."""

import pytest

from scopedcss.config import ScopeConfig
from scopedcss.errors import InvalidIdentity
from scopedcss.scope_id import ScopeId
from scopedcss.template import (
    AttributeInstruction,
    Component,
    ComponentRef,
    Element,
    RawHTML,
    Text,
    markers,
    render,
    to_html,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _child(scope: str | None = "child1") -> Component:
    return Component(
        name="Child",
        template=Element("span", children=[Element("em", children=[Text("x")])]),
        scope=markers(scope) if scope else None,
    )


def _parent(child: Component, scope: str | None = "parent1") -> Component:
    return Component(
        name="Parent",
        template=Element(
            "div",
            {"class": "parent"},
            [
                Element("p", children=[Text("hi")]),
                ComponentRef(child),
                RawHTML("<b>raw</b>"),
            ],
        ),
        scope=markers(scope) if scope else None,
    )


# ---------------------------------------------------------------------------
# markers
# ---------------------------------------------------------------------------


class TestMarkers:
    def test_attribute_name(self):
        instruction = markers(ScopeId("f3f3eg9"))
        assert instruction == AttributeInstruction(name="data-v-f3f3eg9", value="")
        assert instruction.render() == "data-v-f3f3eg9"

    def test_accepts_string(self):
        assert markers("abc").name == "data-v-abc"

    def test_custom_prefix(self):
        assert markers("abc", ScopeConfig(attribute_prefix="data-s-")).name == "data-s-abc"

    def test_invalid_id(self):
        with pytest.raises(InvalidIdentity):
            markers("bad id")

    def test_render_with_value(self):
        assert AttributeInstruction("data-x", "1").render() == 'data-x="1"'


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


class TestRender:
    def test_every_template_element_marked(self):
        component = Component(
            "Solo",
            Element("ul", children=[Element("li"), Element("li", children=[Element("a")])]),
            scope=markers("solo1"),
        )
        root = render(component).root
        assert to_html(root) == (
            "<ul data-v-solo1><li data-v-solo1></li>"
            "<li data-v-solo1><a data-v-solo1></a></li></ul>"
        )

    def test_child_root_carries_both_attributes(self):
        root = render(_parent(_child())).root
        child_root = root.children[1]
        assert child_root.tag == "span"
        assert set(child_root.attrs) == {"data-v-child1", "data-v-parent1"}

    def test_child_internals_private(self):
        root = render(_parent(_child())).root
        em = root.children[1].children[0]
        assert em.attrs == {"data-v-child1": ""}

    def test_full_html(self):
        root = render(_parent(_child())).root
        assert to_html(root) == (
            '<div class="parent" data-v-parent1>'
            "<p data-v-parent1>hi</p>"
            "<span data-v-child1 data-v-parent1><em data-v-child1>x</em></span>"
            "<b>raw</b>"
            "</div>"
        )

    def test_raw_html_not_marked(self):
        root = render(_parent(_child())).root
        assert root.children[2] == RawHTML("<b>raw</b>")

    def test_unscoped_parent(self):
        root = render(_parent(_child(), scope=None)).root
        assert root.attrs == {"class": "parent"}
        assert root.children[1].attrs == {"data-v-child1": ""}

    def test_unscoped_child_gets_parent_attribute_on_root_only(self):
        root = render(_parent(_child(scope=None))).root
        child_root = root.children[1]
        assert child_root.attrs == {"data-v-parent1": ""}
        assert child_root.children[0].attrs == {}

    def test_template_not_mutated(self):
        parent = _parent(_child())
        render(parent)
        assert parent.template.attrs == {"class": "parent"}
        assert parent.template.children[0].attrs == {}

    def test_grant_root_attribute(self):
        rendered = render(_child())
        rendered.grant_root_attribute(markers("outer1"))
        assert rendered.root.attrs == {"data-v-child1": "", "data-v-outer1": ""}

    def test_text_escaped(self):
        component = Component("T", Element("p", children=[Text("a < b")]))
        assert to_html(render(component).root) == "<p>a &lt; b</p>"

    def test_components_hashable_by_identity(self):
        child = _child()
        ref = ComponentRef(child)
        registry = {child: "Child", ref: "ref"}
        assert registry[child] == "Child"
        assert registry[ref] == "ref"
        assert child != _child()
