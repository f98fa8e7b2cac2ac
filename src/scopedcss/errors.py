"""Error types raised while allocating scope ids and rewriting stylesheets."""

from __future__ import annotations


class ScopedCSSError(Exception):
    """Base class for all scoped-CSS compilation failures."""


class InvalidIdentity(ScopedCSSError):
    """Raised when a component identity (or scope id token) is empty or malformed."""


class SelectorParseError(ScopedCSSError):
    """Raised when a stylesheet or one of its selectors cannot be parsed.

    Attributes:
        message: Description of the problem, without location.
        line: 1-based line in the stylesheet source, if known.
        column: 1-based column in the stylesheet source, if known.
        offset: 0-based character offset in the stylesheet source, if known.
        rule_index: Index of the offending qualified rule, in source order.
        component: Path of the component whose stylesheet failed.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        offset: int | None = None,
        rule_index: int | None = None,
        component: str | None = None,
    ):
        self.message = message
        self.line = line
        self.column = column
        self.offset = offset
        self.rule_index = rule_index
        self.component = component
        super().__init__(self._format())

    def _format(self) -> str:
        location = []
        if self.component:
            location.append(self.component)
        if self.line is not None:
            location.append(f"line {self.line}")
        if self.column is not None:
            location.append(f"column {self.column}")
        if self.rule_index is not None:
            location.append(f"rule {self.rule_index}")
        if not location:
            return self.message
        return f"{self.message} ({', '.join(location)})"

    def with_context(
        self, component: str | None = None, rule_index: int | None = None
    ) -> SelectorParseError:
        """Return a copy carrying *component* and *rule_index* where unset."""
        return SelectorParseError(
            self.message,
            line=self.line,
            column=self.column,
            offset=self.offset,
            rule_index=self.rule_index if self.rule_index is not None else rule_index,
            component=self.component or component,
        )
