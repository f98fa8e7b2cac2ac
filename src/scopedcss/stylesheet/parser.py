"""Hand-written scanner that splits CSS source into rule nodes.

Only block structure is parsed here: where rules start and end, and which
at-rules contain further rules. Declaration blocks and leaf at-rules are kept
as raw text, so serializing an unmodified Stylesheet gives back the source.
Selector preludes go through :func:`scopedcss.selector.parse_selector_list`.
"""

from __future__ import annotations

import re

from scopedcss.config import ScopeConfig
from scopedcss.errors import SelectorParseError
from scopedcss.selector import parse_selector_list
from scopedcss.selector.parser import line_starts
from scopedcss.stylesheet.model import (
    LeafAtRule,
    NestedAtRule,
    QualifiedRule,
    Rule,
    Stylesheet,
    Verbatim,
)

__all__ = ["parse_stylesheet"]

_AT_NAME_RE = re.compile(r"@(-?[A-Za-z_][A-Za-z0-9_-]*)?")

_CLOSERS = {"(": ")", "[": "]", "{": "}"}
_WHITESPACE = " \t\n\r\f"


class _Scanner:
    def __init__(self, source: str, config: ScopeConfig) -> None:
        self.source = source
        self.config = config
        self.pos = 0
        self.rule_index = 0
        self._line_starts = line_starts(source)

    # ---- positions and errors ----

    def position(self, offset: int) -> tuple[int, int]:
        """Return the 1-based (line, column) of *offset*."""
        lo, hi = 0, len(self._line_starts) - 1
        while lo < hi:
            mid = (lo + hi + 1) // 2
            if self._line_starts[mid] <= offset:
                lo = mid
            else:
                hi = mid - 1
        return lo + 1, offset - self._line_starts[lo] + 1

    def error(self, message: str, offset: int, rule_index: int | None = None) -> SelectorParseError:
        line, column = self.position(offset)
        return SelectorParseError(
            message, line=line, column=column, offset=offset, rule_index=rule_index
        )

    # ---- low-level scanning ----

    def _skip_comment(self, index: int) -> int:
        end = self.source.find("*/", index + 2)
        return len(self.source) if end == -1 else end + 2

    def _skip_string(self, index: int) -> int:
        quote = self.source[index]
        index += 1
        while index < len(self.source):
            char = self.source[index]
            if char == "\\":
                index += 2
                continue
            if char == quote:
                return index + 1
            if char == "\n":  # unterminated string ends at the line break
                return index
            index += 1
        return index

    def _skip_trivia(self, top_level: bool) -> None:
        source = self.source
        while self.pos < len(source):
            char = source[self.pos]
            if char in _WHITESPACE:
                self.pos += 1
            elif source.startswith("/*", self.pos):
                self.pos = self._skip_comment(self.pos)
            elif top_level and source.startswith("<!--", self.pos):
                self.pos += 4
            elif top_level and source.startswith("-->", self.pos):
                self.pos += 3
            else:
                break

    def _scan_until(self, stops: str) -> int:
        """Advance from ``self.pos`` to the first top-level char in *stops*.

        Strings, comments, escapes and bracketed sections are skipped over.
        Returns the index of the stop character, or ``len(source)`` at EOF.
        Raises when EOF is reached inside an open bracket.
        """
        source = self.source
        stack: list[tuple[str, int]] = []
        index = self.pos
        while index < len(source):
            char = source[index]
            if char == "\\":
                index += 2
                continue
            if char in "\"'":
                index = self._skip_string(index)
                continue
            if source.startswith("/*", index):
                index = self._skip_comment(index)
                continue
            if not stack and char in stops:
                return index
            if char in _CLOSERS:
                stack.append((_CLOSERS[char], index))
            elif stack and char == stack[-1][0]:
                stack.pop()
            index += 1
        if stack:
            closer, opened = stack[-1]
            opener = {v: k for k, v in _CLOSERS.items()}[closer]
            raise self.error(f"Unclosed '{opener}'", opened, self.rule_index)
        return len(source)

    # ---- rules ----

    def parse_rules(self, nested: bool) -> list[Rule]:
        rules: list[Rule] = []
        while True:
            start = self.pos
            self._skip_trivia(top_level=not nested)
            if self.pos > start:
                rules.append(Verbatim(self.source[start : self.pos]))
            if self.pos >= len(self.source):
                return rules
            char = self.source[self.pos]
            if char == "}":
                if nested:
                    return rules
                raise self.error("Unexpected '}'", self.pos)
            if char == "@":
                rules.append(self._parse_at_rule())
            else:
                rules.append(self._parse_qualified_rule())

    def _parse_qualified_rule(self) -> QualifiedRule:
        start = self.pos
        index = self.rule_index
        brace = self._scan_until("{}")
        if brace >= len(self.source) or self.source[brace] == "}":
            raise self.error("Expected '{' after selector", start, index)

        prelude = self.source[start:brace]
        try:
            selectors = parse_selector_list(prelude)
        except SelectorParseError as exc:
            raise self.error(exc.message, start + (exc.offset or 0), index) from exc

        self.pos = brace + 1
        end = self._scan_until("}")
        if end >= len(self.source):
            raise self.error("Unclosed block", brace, index)
        body = self.source[brace + 1 : end]
        self.pos = end + 1
        self.rule_index += 1

        line, column = self.position(start)
        return QualifiedRule(
            prelude=prelude,
            selectors=selectors,
            body=body,
            index=index,
            line=line,
            column=column,
            offset=start,
        )

    def _parse_at_rule(self) -> Rule:
        start = self.pos
        match = _AT_NAME_RE.match(self.source, start)
        name = (match.group(1) or "").lower() if match else ""
        line, column = self.position(start)

        stop = self._scan_until("{;}")
        if stop >= len(self.source) or self.source[stop] == "}":
            # Statement at-rule ended by EOF or by the enclosing block.
            self.pos = stop
            return LeafAtRule(name, self.source[start:stop], line, column, start)
        if self.source[stop] == ";":
            self.pos = stop + 1
            return LeafAtRule(name, self.source[start : self.pos], line, column, start)

        if name in self.config.nesting_at_rules:
            self.pos = stop + 1
            rules = self.parse_rules(nested=True)
            if self.pos >= len(self.source):
                raise self.error(f"Unclosed block in @{name}", stop)
            self.pos += 1
            return NestedAtRule(
                name=name,
                head=self.source[start:stop],
                rules=tuple(rules),
                line=line,
                column=column,
                offset=start,
            )

        self.pos = stop + 1
        end = self._scan_until("}")
        if end >= len(self.source):
            raise self.error(f"Unclosed block in @{name}", stop)
        self.pos = end + 1
        return LeafAtRule(name, self.source[start : self.pos], line, column, start)


def parse_stylesheet(source: str, config: ScopeConfig | None = None) -> Stylesheet:
    """Parse CSS *source* into a :class:`Stylesheet`.

    Raises :class:`SelectorParseError` for malformed selectors and for broken
    block structure, with the line, column and offset of the fault.
    """
    scanner = _Scanner(source, config or ScopeConfig())
    return Stylesheet(rules=tuple(scanner.parse_rules(nested=False)))
