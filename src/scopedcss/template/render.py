"""Minimal render model showing where scope attributes land.

A component's template is a tree of :class:`Element`, :class:`Text`,
:class:`RawHTML` and :class:`ComponentRef` nodes with a single root element.
Rendering copies the tree and adds the component's scope attribute to every
element the template builds. Raw HTML is inserted untouched. A child
component renders itself; the parent may only add its own attribute to the
child's root element.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Union

from scopedcss.template.marker import AttributeInstruction


@dataclass
class Element:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class RawHTML:
    """Unescaped HTML injected at render time; never carries scope attributes."""

    html: str


# Identity equality: the template is a mutable Element tree.
@dataclass(frozen=True, eq=False)
class ComponentRef:
    """A child component instantiated inside a template."""

    component: Component


@dataclass(frozen=True, eq=False)
class Component:
    """A component definition: its template and, when it has scoped styles, its marker."""

    name: str
    template: Element
    scope: AttributeInstruction | None = None


Node = Union[Element, Text, RawHTML, ComponentRef]


class RenderedComponent:
    """The rendered output of one component instance.

    Attributes of the root element are shared with the instantiating parent
    through :meth:`grant_root_attribute`; every other element belongs to the
    component alone.
    """

    def __init__(self, component: Component, root: Element) -> None:
        self.component = component
        self._root = root

    @property
    def root(self) -> Element:
        return self._root

    def grant_root_attribute(self, instruction: AttributeInstruction) -> None:
        """Let a parent mark this component's root element with *instruction*."""
        self._root.attrs.setdefault(instruction.name, instruction.value)


def render(component: Component) -> RenderedComponent:
    """Render *component* into a fresh element tree."""
    root = _build_element(component.template, component.scope)
    return RenderedComponent(component, root)


def _build_element(template: Element, scope: AttributeInstruction | None) -> Element:
    element = Element(tag=template.tag, attrs=dict(template.attrs))
    if scope is not None:
        element.attrs.setdefault(scope.name, scope.value)
    for child in template.children:
        element.children.append(_build_node(child, scope))
    return element


def _build_node(node: Node, scope: AttributeInstruction | None) -> Node:
    if isinstance(node, Element):
        return _build_element(node, scope)
    if isinstance(node, ComponentRef):
        child = render(node.component)
        if scope is not None:
            child.grant_root_attribute(scope)
        return child.root
    if isinstance(node, (Text, RawHTML)):
        return node
    raise TypeError(f"Unknown template node: {type(node).__name__}")


def to_html(node: Node) -> str:
    """Serialize a rendered node tree to HTML."""
    if isinstance(node, Text):
        return html.escape(node.value, quote=False)
    if isinstance(node, RawHTML):
        return node.html
    if isinstance(node, ComponentRef):
        return to_html(render(node.component).root)
    parts = [node.tag]
    for name, value in node.attrs.items():
        if value == "":
            parts.append(name)
        else:
            parts.append(f'{name}="{html.escape(value)}"')
    inner = "".join(to_html(child) for child in node.children)
    return f"<{' '.join(parts)}>{inner}</{node.tag}>"
