"""Stylesheet model: the rule node variants and the Stylesheet container."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from scopedcss.selector.model import SelectorList


@dataclass(frozen=True)
class Verbatim:
    """Whitespace and comments between rules, kept as written."""

    text: str


@dataclass(frozen=True)
class QualifiedRule:
    """A selector list with its declaration block.

    ``prelude`` is the raw text before ``{`` (selector plus any trailing
    whitespace); ``body`` is the raw text between the braces.
    """

    prelude: str
    selectors: SelectorList
    body: str
    index: int  # position among qualified rules, in source order
    line: int
    column: int
    offset: int

    @property
    def selector_text(self) -> str:
        return self.prelude.strip()


@dataclass(frozen=True)
class NestedAtRule:
    """An at-rule whose block holds rules (``@media``, ``@supports``, ...)."""

    name: str
    head: str  # raw text from '@' up to '{'
    rules: tuple[Rule, ...]
    line: int
    column: int
    offset: int


@dataclass(frozen=True)
class LeafAtRule:
    """Any other at-rule (``@keyframes``, ``@font-face``, ``@import``, ...)."""

    name: str
    text: str
    line: int
    column: int
    offset: int


Rule = Union[QualifiedRule, NestedAtRule, LeafAtRule, Verbatim]


@dataclass(frozen=True)
class Stylesheet:
    """An ordered sequence of rule nodes parsed from CSS source."""

    rules: tuple[Rule, ...] = ()

    def qualified_rules(self) -> Iterator[QualifiedRule]:
        """Yield every qualified rule, descending into nested at-rules."""
        yield from _walk(self.rules)


def _walk(rules: tuple[Rule, ...]) -> Iterator[QualifiedRule]:
    for rule in rules:
        if isinstance(rule, QualifiedRule):
            yield rule
        elif isinstance(rule, NestedAtRule):
            yield from _walk(rule.rules)
