from __future__ import annotations

import re
from dataclasses import dataclass, field

# At-rules whose block holds rules rather than declarations.
DEFAULT_NESTING_AT_RULES = frozenset(
    {
        "media",
        "supports",
        "container",
        "layer",
        "document",
        "-moz-document",
        "starting-style",
    }
)

_ATTR_PREFIX_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.:-]*$")


@dataclass(frozen=True)
class ScopeConfig:
    attribute_prefix: str = "data-v-"
    id_length: int = 8
    hash_content: bool = False  # production builds digest the source too
    nesting_at_rules: frozenset[str] = field(default=DEFAULT_NESTING_AT_RULES)

    def __post_init__(self) -> None:
        if not 4 <= self.id_length <= 64:
            raise ValueError(f"id_length must be between 4 and 64, got {self.id_length}")
        if not _ATTR_PREFIX_RE.match(self.attribute_prefix):
            raise ValueError(f"Invalid attribute prefix: {self.attribute_prefix!r}")
        object.__setattr__(
            self,
            "nesting_at_rules",
            frozenset(name.lower() for name in self.nesting_at_rules),
        )
