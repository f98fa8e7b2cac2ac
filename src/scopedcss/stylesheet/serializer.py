"""Turn a Stylesheet back into CSS text."""

from __future__ import annotations

from scopedcss.stylesheet.model import (
    LeafAtRule,
    NestedAtRule,
    QualifiedRule,
    Rule,
    Stylesheet,
    Verbatim,
)

__all__ = ["serialize", "serialize_rule"]


def serialize_rule(rule: Rule) -> str:
    if isinstance(rule, QualifiedRule):
        return f"{rule.prelude}{{{rule.body}}}"
    if isinstance(rule, NestedAtRule):
        inner = "".join(serialize_rule(r) for r in rule.rules)
        return f"{rule.head}{{{inner}}}"
    if isinstance(rule, LeafAtRule):
        return rule.text
    if isinstance(rule, Verbatim):
        return rule.text
    raise TypeError(f"Unknown rule node: {type(rule).__name__}")


def serialize(stylesheet: Stylesheet) -> str:
    """Serialize *stylesheet*; a freshly parsed one reproduces its source exactly."""
    return "".join(serialize_rule(r) for r in stylesheet.rules)
