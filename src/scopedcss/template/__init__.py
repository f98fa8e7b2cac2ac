from scopedcss.template.marker import AttributeInstruction, markers
from scopedcss.template.render import (
    Component,
    ComponentRef,
    Element,
    RawHTML,
    RenderedComponent,
    Text,
    render,
    to_html,
)

__all__ = [
    "AttributeInstruction",
    "markers",
    "Component",
    "ComponentRef",
    "Element",
    "RawHTML",
    "RenderedComponent",
    "Text",
    "render",
    "to_html",
]
