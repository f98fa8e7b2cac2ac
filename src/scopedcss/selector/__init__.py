from scopedcss.selector.parser import parse_selector_list
from scopedcss.selector.model import (
    Combinator,
    ComplexSelector,
    CompoundSelector,
    SelectorList,
    SimpleKind,
    SimpleSelector,
    attribute_predicate,
)

__all__ = [
    "parse_selector_list",
    "Combinator",
    "ComplexSelector",
    "CompoundSelector",
    "SelectorList",
    "SimpleKind",
    "SimpleSelector",
    "attribute_predicate",
]
