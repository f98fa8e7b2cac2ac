"""Selector model: simple, compound and complex selector dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SimpleKind(Enum):
    """The kind of a simple selector within a compound."""

    TYPE = "type"
    UNIVERSAL = "universal"
    CLASS = "class"
    ID = "id"
    ATTRIBUTE = "attribute"
    PSEUDO_CLASS = "pseudo-class"
    PSEUDO_ELEMENT = "pseudo-element"


class Combinator(Enum):
    """Relationship between two adjacent compound selectors."""

    DESCENDANT = " "
    CHILD = ">"
    NEXT_SIBLING = "+"
    SUBSEQUENT_SIBLING = "~"
    DEEP = ">>>"

    def render(self) -> str:
        if self is Combinator.DESCENDANT:
            return " "
        return f" {self.value} "


@dataclass(frozen=True)
class SimpleSelector:
    """A single simple selector.

    ``name`` is the bare identifier (``div``, ``active``, ``href``,
    ``before``); ``text`` is its canonical CSS serialization
    (``div``, ``.active``, ``[href^="/"]``, ``::before``).
    """

    kind: SimpleKind
    name: str
    text: str

    def __str__(self) -> str:
        return self.text


def attribute_predicate(name: str) -> SimpleSelector:
    """Build the presence selector ``[name]``."""
    return SimpleSelector(kind=SimpleKind.ATTRIBUTE, name=name, text=f"[{name}]")


@dataclass(frozen=True)
class CompoundSelector:
    """Simple selectors that all apply to one element, in source order."""

    simples: tuple[SimpleSelector, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.simples

    def with_predicate(self, predicate: SimpleSelector) -> CompoundSelector:
        """Return a copy with *predicate* inserted.

        The predicate goes at the end, except that it stays in front of the
        first pseudo-element: pseudo-elements are not elements and cannot
        carry attributes.
        """
        simples = list(self.simples)
        index = len(simples)
        for i, simple in enumerate(simples):
            if simple.kind is SimpleKind.PSEUDO_ELEMENT:
                index = i
                break
        simples.insert(index, predicate)
        return CompoundSelector(tuple(simples))

    def __str__(self) -> str:
        return "".join(s.text for s in self.simples)


@dataclass(frozen=True)
class ComplexSelector:
    """Compound selectors joined by combinators.

    ``combinators[i]`` joins ``compounds[i]`` and ``compounds[i + 1]``. A
    selector that starts with a deep combinator (``>>> .a``) has an empty
    first compound.
    """

    compounds: tuple[CompoundSelector, ...]
    combinators: tuple[Combinator, ...] = ()

    def __post_init__(self) -> None:
        if len(self.combinators) != max(len(self.compounds) - 1, 0):
            raise ValueError("A complex selector needs one combinator between each compound")

    @property
    def has_deep(self) -> bool:
        return Combinator.DEEP in self.combinators

    def __str__(self) -> str:
        parts = [str(self.compounds[0])] if self.compounds else []
        for combinator, compound in zip(self.combinators, self.compounds[1:]):
            parts.append(combinator.render())
            parts.append(str(compound))
        return "".join(parts).strip()


@dataclass(frozen=True)
class SelectorList:
    """A comma-separated list of complex selectors."""

    selectors: tuple[ComplexSelector, ...]

    def __iter__(self):
        return iter(self.selectors)

    def __len__(self) -> int:
        return len(self.selectors)

    def __str__(self) -> str:
        return ", ".join(str(s) for s in self.selectors)
