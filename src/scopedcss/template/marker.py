"""Attribute instruction handed to the template compiler."""

from __future__ import annotations

from dataclasses import dataclass

from scopedcss.config import ScopeConfig
from scopedcss.scope_id.model import ScopeId


@dataclass(frozen=True)
class AttributeInstruction:
    """A boolean attribute to place on the elements a component renders."""

    name: str
    value: str = ""

    def render(self) -> str:
        if not self.value:
            return self.name
        return f'{self.name}="{self.value}"'


def markers(scope_id: ScopeId | str, config: ScopeConfig | None = None) -> AttributeInstruction:
    """Return the scope attribute for *scope_id*, e.g. ``data-v-1a2b3c4d``."""
    config = config or ScopeConfig()
    if not isinstance(scope_id, ScopeId):
        scope_id = ScopeId(scope_id)
    return AttributeInstruction(name=scope_id.attribute_name(config.attribute_prefix))
