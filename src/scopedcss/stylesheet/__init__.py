from scopedcss.stylesheet.parser import parse_stylesheet
from scopedcss.stylesheet.serializer import serialize, serialize_rule
from scopedcss.stylesheet.model import (
    LeafAtRule,
    NestedAtRule,
    QualifiedRule,
    Rule,
    Stylesheet,
    Verbatim,
)

__all__ = [
    "parse_stylesheet",
    "serialize",
    "serialize_rule",
    "LeafAtRule",
    "NestedAtRule",
    "QualifiedRule",
    "Rule",
    "Stylesheet",
    "Verbatim",
]
