"""Scoped rewrite transform: constrains every selector to one component's elements."""

from __future__ import annotations

import logging
from dataclasses import replace

from scopedcss.config import ScopeConfig
from scopedcss.scope_id.model import ScopeId
from scopedcss.selector.model import (
    Combinator,
    ComplexSelector,
    CompoundSelector,
    SelectorList,
    SimpleSelector,
    attribute_predicate,
)
from scopedcss.stylesheet.model import NestedAtRule, QualifiedRule, Rule, Stylesheet

logger = logging.getLogger(__name__)


def scope_selector(selector: ComplexSelector, predicate: SimpleSelector) -> ComplexSelector:
    """Add *predicate* to each compound up to the first deep combinator.

    The deep combinator itself turns into a plain descendant combinator and
    the compounds after it are left alone.
    """
    compounds: list[CompoundSelector] = []
    combinators: list[Combinator] = []
    scoping = True
    for i, compound in enumerate(selector.compounds):
        if i > 0:
            combinator = selector.combinators[i - 1]
            if combinator is Combinator.DEEP:
                scoping = False
                combinator = Combinator.DESCENDANT
            combinators.append(combinator)
        compounds.append(compound.with_predicate(predicate) if scoping else compound)
    return ComplexSelector(tuple(compounds), tuple(combinators))


def scope_selector_list(selectors: SelectorList, predicate: SimpleSelector) -> SelectorList:
    return SelectorList(tuple(scope_selector(s, predicate) for s in selectors))


class ScopedRewriteTransform:
    """Rewrite a stylesheet so it only matches elements marked with a scope id.

    Qualified rules get the ``[data-v-<id>]`` predicate on their compounds;
    nested at-rules (``@media``, ``@supports``, ...) are rewritten
    recursively; leaf at-rules such as ``@keyframes`` and ``@font-face`` and
    all declaration blocks are kept byte for byte. The input is not modified.
    """

    def __init__(self, scope_id: ScopeId | str, config: ScopeConfig | None = None) -> None:
        if not isinstance(scope_id, ScopeId):
            scope_id = ScopeId(scope_id)
        self.scope_id = scope_id
        self.config = config or ScopeConfig()
        self.attribute = scope_id.attribute_name(self.config.attribute_prefix)
        self.predicate = attribute_predicate(self.attribute)

    def apply(self, stylesheet: Stylesheet) -> Stylesheet:
        if not stylesheet.rules:
            return stylesheet
        rules = tuple(self._rewrite_rule(rule) for rule in stylesheet.rules)
        logger.debug(
            "Scoped %d rule node(s) with %s", len(rules), self.attribute
        )
        return Stylesheet(rules=rules)

    def _rewrite_rule(self, rule: Rule) -> Rule:
        if isinstance(rule, QualifiedRule):
            scoped = scope_selector_list(rule.selectors, self.predicate)
            trailing = rule.prelude[len(rule.prelude.rstrip()) :]
            return replace(rule, prelude=f"{scoped}{trailing}", selectors=scoped)
        if isinstance(rule, NestedAtRule):
            return replace(rule, rules=tuple(self._rewrite_rule(r) for r in rule.rules))
        return rule


def rewrite(
    stylesheet: Stylesheet, scope_id: ScopeId | str, config: ScopeConfig | None = None
) -> Stylesheet:
    """Return a scoped copy of *stylesheet* for *scope_id*."""
    return ScopedRewriteTransform(scope_id, config).apply(stylesheet)
