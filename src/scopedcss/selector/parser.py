"""Recursive-descent selector parser over tinycss2 component values.

Grammar accepted (per comma-separated item):

    complex   := [ deep ] compound ( combinator compound )*
    compound  := [ type ] ( class | id | attribute | pseudo )*
    deep      := '>>>' | '/deep/'
    combinator:= whitespace | '>' | '+' | '~' | deep

Positions in errors are relative to the text handed to
:func:`parse_selector_list`.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Any

import tinycss2

from scopedcss.errors import SelectorParseError
from scopedcss.selector.model import (
    Combinator,
    ComplexSelector,
    CompoundSelector,
    SelectorList,
    SimpleKind,
    SimpleSelector,
)

__all__ = ["parse_selector_list"]

# CSS2 pseudo-elements that may be written with a single colon.
_LEGACY_PSEUDO_ELEMENTS = frozenset({"before", "after", "first-line", "first-letter"})

_ATTR_OPERATORS = frozenset({"=", "~=", "|=", "^=", "$=", "*="})
_ATTR_FLAGS = frozenset({"i", "s"})

_SKIPPED = ("comment",)

# tinycss2 folds these into a single newline before counting lines.
_NEWLINE_RE = re.compile(r"\r\n|[\n\r\f]")


def line_starts(text: str) -> list[int]:
    """Return the offset at which each line of *text* starts."""
    return [0] + [match.end() for match in _NEWLINE_RE.finditer(text)]


def _is_literal(token: Any, value: str) -> bool:
    return token is not None and token.type == "literal" and token.value == value


def _is_ident(token: Any) -> bool:
    return token is not None and token.type == "ident"


def _describe(token: Any) -> str:
    if token is None:
        return "end of selector"
    if token.type == "whitespace":
        return "whitespace"
    return repr(token.serialize())


class _Cursor:
    """Index into a flat token list; ``end`` is the token following the list."""

    def __init__(self, tokens: list[Any], end: Any = None) -> None:
        self.tokens = tokens
        self.end = end
        self.pos = 0

    def peek(self, ahead: int = 0) -> Any:
        index = self.pos + ahead
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def advance(self, count: int = 1) -> Any:
        token = self.peek(count - 1)
        self.pos += count
        return token

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def skip_whitespace(self) -> bool:
        skipped = False
        while not self.at_end() and self.tokens[self.pos].type == "whitespace":
            self.pos += 1
            skipped = True
        return skipped


class _SelectorParser:
    def __init__(self, text: str) -> None:
        self.text = text
        self._line_starts = line_starts(text)

    # ---- positions and errors ----

    def _offset(self, token: Any) -> int:
        if token is None:
            return len(self.text)
        start = self._line_starts[min(token.source_line, len(self._line_starts)) - 1]
        return start + token.source_column - 1

    def _source_text(self, first: Any, cursor: _Cursor, fallback: str) -> str:
        """Return the source text from *first* up to the cursor's next token.

        Author spelling (quotes, escapes, ``2n+1``) survives this way. Falls
        back to *fallback* when a comment sits inside the span.
        """
        following = cursor.peek() if not cursor.at_end() else cursor.end
        text = self.text[self._offset(first) : self._offset(following)]
        if not text or "/*" in text:
            return fallback
        return text

    def _error(self, message: str, token: Any = None) -> SelectorParseError:
        offset = self._offset(token)
        if token is None:
            line = len(self._line_starts)
            column = offset - self._line_starts[-1] + 1
        else:
            line, column = token.source_line, token.source_column
        return SelectorParseError(message, line=line, column=column, offset=offset)

    def _check_tokens(self, tokens: list[Any]) -> None:
        for token in tokens:
            if token.type == "error":
                raise self._error(f"Invalid selector: {token.message}", token)
            if token.type == "{} block":
                raise self._error("Unexpected '{' in selector", token)
            nested = getattr(token, "content", None) or getattr(token, "arguments", None)
            if nested:
                self._check_tokens(nested)

    # ---- entry point ----

    def parse(self) -> SelectorList:
        tokens = [
            t
            for t in tinycss2.parse_component_value_list(self.text, skip_comments=True)
            if t.type not in _SKIPPED
        ]
        self._check_tokens(tokens)

        groups: list[tuple[list[Any], Any]] = []
        current: list[Any] = []
        for token in tokens:
            if _is_literal(token, ","):
                groups.append((current, token))
                current = []
            else:
                current.append(token)
        groups.append((current, None))

        selectors = []
        for group, end in groups:
            if all(t.type == "whitespace" for t in group):
                raise self._error("Expected a selector", end)
            selectors.append(self._parse_complex(_Cursor(group, end)))
        return SelectorList(tuple(selectors))

    # ---- complex selectors ----

    def _at_deep(self, cursor: _Cursor) -> bool:
        first = cursor.peek()
        if _is_literal(first, ">"):
            return _is_literal(cursor.peek(1), ">") and _is_literal(cursor.peek(2), ">")
        if _is_literal(first, "/"):
            second = cursor.peek(1)
            return (
                _is_ident(second)
                and second.lower_value == "deep"
                and _is_literal(cursor.peek(2), "/")
            )
        return False

    def _parse_complex(self, cursor: _Cursor) -> ComplexSelector:
        compounds: list[CompoundSelector] = []
        combinators: list[Combinator] = []

        cursor.skip_whitespace()
        if self._at_deep(cursor):
            cursor.advance(3)
            compounds.append(CompoundSelector())
            combinators.append(Combinator.DEEP)
            cursor.skip_whitespace()
            if cursor.at_end():
                raise self._error("Expected a selector after deep combinator", cursor.end)

        while True:
            compounds.append(self._parse_compound(cursor))
            had_whitespace = cursor.skip_whitespace()
            if cursor.at_end():
                break
            combinator = self._parse_combinator(cursor)
            if combinator is None:
                if not had_whitespace:
                    token = cursor.peek()
                    raise self._error(f"Unexpected {_describe(token)} in selector", token)
                combinator = Combinator.DESCENDANT
            else:
                cursor.skip_whitespace()
                if cursor.at_end():
                    raise self._error("Selector ends with a combinator", cursor.end)
            combinators.append(combinator)

        return ComplexSelector(tuple(compounds), tuple(combinators))

    def _parse_combinator(self, cursor: _Cursor) -> Combinator | None:
        token = cursor.peek()
        if self._at_deep(cursor):
            cursor.advance(3)
            return Combinator.DEEP
        if _is_literal(token, ">"):
            if _is_literal(cursor.peek(1), ">"):
                raise self._error("Unexpected '>>' (did you mean '>>>'?)", token)
            cursor.advance()
            return Combinator.CHILD
        if _is_literal(token, "+"):
            cursor.advance()
            return Combinator.NEXT_SIBLING
        if _is_literal(token, "~"):
            cursor.advance()
            return Combinator.SUBSEQUENT_SIBLING
        if _is_literal(token, "/"):
            raise self._error("Unknown '/' combinator (only /deep/ is supported)", token)
        return None

    # ---- compound selectors ----

    def _parse_compound(self, cursor: _Cursor) -> CompoundSelector:
        simples: list[SimpleSelector] = []
        type_selector = self._parse_type(cursor)
        if type_selector is not None:
            simples.append(type_selector)

        while not cursor.at_end():
            token = cursor.peek()
            if _is_literal(token, "."):
                name = cursor.peek(1)
                if not _is_ident(name):
                    raise self._error("Expected a class name after '.'", token)
                cursor.advance(2)
                text = self._source_text(token, cursor, "." + name.serialize())
                simples.append(SimpleSelector(SimpleKind.CLASS, name.value, text))
            elif token.type == "hash":
                if not token.is_identifier:
                    raise self._error(f"Invalid id selector {_describe(token)}", token)
                cursor.advance()
                text = self._source_text(token, cursor, token.serialize())
                simples.append(SimpleSelector(SimpleKind.ID, token.value, text))
            elif token.type == "[] block":
                cursor.advance()
                attribute = self._parse_attribute(token)
                text = self._source_text(token, cursor, attribute.text)
                if not text.endswith("]"):
                    raise self._error("Unclosed '[' in selector", token)
                simples.append(replace(attribute, text=text))
            elif _is_literal(token, ":"):
                simples.append(self._parse_pseudo(cursor))
            else:
                break

        if not simples:
            token = cursor.peek()
            raise self._error(f"Unexpected {_describe(token)} in selector", token or cursor.end)
        return CompoundSelector(tuple(simples))

    def _parse_type(self, cursor: _Cursor) -> SimpleSelector | None:
        first = token = cursor.peek()
        namespace: str | None = None
        if _is_ident(token) or _is_literal(token, "*"):
            if _is_literal(cursor.peek(1), "|"):
                name = cursor.peek(2)
                if not (_is_ident(name) or _is_literal(name, "*")):
                    raise self._error("Expected a name after namespace '|'", cursor.peek(1))
                namespace = token.serialize()
                cursor.advance(2)
        elif _is_literal(token, "|"):
            name = cursor.peek(1)
            if not (_is_ident(name) or _is_literal(name, "*")):
                raise self._error("Expected a name after namespace '|'", token)
            namespace = ""
            cursor.advance()
        else:
            return None

        token = cursor.advance()
        prefix = "" if namespace is None else f"{namespace}|"
        if _is_literal(token, "*"):
            return SimpleSelector(SimpleKind.UNIVERSAL, "*", prefix + "*")
        text = self._source_text(first, cursor, prefix + token.serialize())
        return SimpleSelector(SimpleKind.TYPE, token.value, text)

    def _parse_pseudo(self, cursor: _Cursor) -> SimpleSelector:
        colon = cursor.advance()
        element = False
        if _is_literal(cursor.peek(), ":"):
            cursor.advance()
            element = True
        token = cursor.peek()
        prefix = "::" if element else ":"
        if _is_ident(token):
            name = token.lower_value
            functional = False
        elif token is not None and token.type == "function":
            name = token.lower_name
            functional = True
        else:
            raise self._error(f"Expected a pseudo-class name after {prefix!r}", colon)
        cursor.advance()
        if element or (not functional and name in _LEGACY_PSEUDO_ELEMENTS):
            kind = SimpleKind.PSEUDO_ELEMENT
        else:
            kind = SimpleKind.PSEUDO_CLASS
        text = self._source_text(colon, cursor, prefix + token.serialize())
        if functional and not text.endswith(")"):
            raise self._error("Unclosed '(' in selector", token)
        return SimpleSelector(kind, name, text)

    def _parse_attribute(self, block: Any) -> SimpleSelector:
        # tinycss2 may hand back "~" "=" as two literals; join them.
        merged: list[Any] = []
        for token in block.content:
            previous = merged[-1] if merged else None
            if (
                _is_literal(token, "=")
                and previous is not None
                and previous.type == "literal"
                and previous.value in ("~", "|", "^", "$", "*")
            ):
                merged[-1] = _JoinedLiteral(previous, previous.value + "=")
                continue
            merged.append(token)
        tokens = [t for t in merged if t.type not in ("whitespace", "comment")]
        if not tokens:
            raise self._error("Empty attribute selector", block)

        cursor = _Cursor(tokens)
        first = cursor.peek()
        namespace = ""
        if (_is_ident(first) or _is_literal(first, "*")) and _is_literal(cursor.peek(1), "|"):
            namespace = first.serialize() + "|"
            cursor.advance(2)
        elif _is_literal(first, "|"):
            namespace = "|"
            cursor.advance()

        name = cursor.advance()
        if not _is_ident(name):
            raise self._error(
                f"Expected an attribute name, got {_describe(name)}", name or block
            )
        text = namespace + name.serialize()

        if not cursor.at_end():
            operator = cursor.advance()
            if operator.type != "literal" or operator.value not in _ATTR_OPERATORS:
                raise self._error(
                    f"Unexpected {_describe(operator)} in attribute selector", operator
                )
            value = cursor.advance()
            if value is None or value.type not in ("ident", "string"):
                raise self._error(
                    f"Expected an attribute value after {operator.value!r}", value or operator
                )
            text += operator.value + value.serialize()
            if not cursor.at_end():
                flag = cursor.advance()
                if not _is_ident(flag) or flag.lower_value not in _ATTR_FLAGS:
                    raise self._error(
                        f"Unexpected {_describe(flag)} in attribute selector", flag
                    )
                text += " " + flag.value
            if not cursor.at_end():
                extra = cursor.peek()
                raise self._error(f"Unexpected {_describe(extra)} in attribute selector", extra)

        return SimpleSelector(SimpleKind.ATTRIBUTE, name.value, f"[{text}]")


class _JoinedLiteral:
    """A two-character operator rebuilt from adjacent single-character literals."""

    type = "literal"

    def __init__(self, first: Any, value: str) -> None:
        self.source_line = first.source_line
        self.source_column = first.source_column
        self.value = value

    def serialize(self) -> str:
        return self.value


def parse_selector_list(text: str) -> SelectorList:
    """Parse a comma-separated selector list into a :class:`SelectorList`.

    Raises :class:`SelectorParseError` for malformed input.
    """
    return _SelectorParser(text).parse()
