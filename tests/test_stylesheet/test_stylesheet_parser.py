"""Tests for the stylesheet scanner and serializer."""

from pathlib import Path

import pytest

from scopedcss.config import ScopeConfig
from scopedcss.errors import SelectorParseError
from scopedcss.stylesheet import (
    LeafAtRule,
    NestedAtRule,
    QualifiedRule,
    Stylesheet,
    Verbatim,
    parse_stylesheet,
    serialize,
)

FIXTURES = Path(__file__).parent.parent / "fixtures"


def _significant(stylesheet: Stylesheet) -> list:
    return [r for r in stylesheet.rules if not isinstance(r, Verbatim)]


# ---------------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------------


class TestRoundTrip:
    def test_fixture_round_trips(self):
        source = (FIXTURES / "component.css").read_text()
        assert serialize(parse_stylesheet(source)) == source

    def test_empty_string(self):
        ss = parse_stylesheet("")
        assert ss.rules == ()
        assert serialize(ss) == ""

    def test_whitespace_only(self):
        ss = parse_stylesheet("   \n\t  ")
        assert ss.rules == (Verbatim("   \n\t  "),)
        assert list(ss.qualified_rules()) == []

    def test_comments_kept(self):
        source = "/* a */\n.a { color: red; } /* b */\n"
        assert serialize(parse_stylesheet(source)) == source


# ---------------------------------------------------------------------------
# Rule kinds
# ---------------------------------------------------------------------------


class TestRuleKinds:
    def test_qualified_rule(self):
        ss = parse_stylesheet(".a, .b { color: red; }")
        (rule,) = _significant(ss)
        assert isinstance(rule, QualifiedRule)
        assert rule.selector_text == ".a, .b"
        assert rule.body == " color: red; "
        assert len(rule.selectors) == 2

    def test_body_with_braces_in_string(self):
        ss = parse_stylesheet('.a { content: "}"; }')
        (rule,) = _significant(ss)
        assert rule.body == ' content: "}"; '

    def test_media_is_nested(self):
        ss = parse_stylesheet("@media (max-width: 600px) { .a { color: red; } }")
        (rule,) = _significant(ss)
        assert isinstance(rule, NestedAtRule)
        assert rule.name == "media"
        assert rule.head == "@media (max-width: 600px) "
        inner = [r for r in rule.rules if not isinstance(r, Verbatim)]
        assert len(inner) == 1
        assert isinstance(inner[0], QualifiedRule)

    def test_keyframes_is_leaf(self):
        source = "@keyframes pulse { from { opacity: 0; } 50% { opacity: 1; } }"
        (rule,) = _significant(parse_stylesheet(source))
        assert isinstance(rule, LeafAtRule)
        assert rule.name == "keyframes"
        assert rule.text == source

    def test_vendor_keyframes_is_leaf(self):
        source = "@-webkit-keyframes spin { to { transform: rotate(1turn); } }"
        (rule,) = _significant(parse_stylesheet(source))
        assert isinstance(rule, LeafAtRule)
        assert rule.name == "-webkit-keyframes"

    def test_statement_at_rules(self):
        ss = parse_stylesheet('@charset "utf-8";\n@import url("a.css") screen;')
        rules = _significant(ss)
        assert [r.name for r in rules] == ["charset", "import"]
        assert rules[1].text == '@import url("a.css") screen;'

    def test_at_rule_without_semicolon_at_end_of_block(self):
        source = "@supports (display: grid) { @import 'x.css' }"
        (rule,) = _significant(parse_stylesheet(source))
        assert isinstance(rule, NestedAtRule)
        assert serialize(parse_stylesheet(source)) == source

    def test_custom_nesting_at_rules(self):
        config = ScopeConfig(nesting_at_rules=frozenset({"MEDIA"}))
        (rule,) = _significant(parse_stylesheet("@supports (x: y) { .a {} }", config))
        assert isinstance(rule, LeafAtRule)
        (rule,) = _significant(parse_stylesheet("@media print { .a {} }", config))
        assert isinstance(rule, NestedAtRule)

    def test_qualified_rules_walks_nested_blocks(self):
        source = (FIXTURES / "component.css").read_text()
        ss = parse_stylesheet(source)
        texts = [r.selector_text for r in ss.qualified_rules()]
        assert texts == [
            ".card",
            ".card > .title, .card .subtitle::after",
            ".card >>> .icon",
            ".card",
            ".card ul li:nth-child(2n+1)",
        ]
        assert [r.index for r in ss.qualified_rules()] == [0, 1, 2, 3, 4]

    def test_rule_position(self):
        ss = parse_stylesheet(".a {}\n  .b {}")
        rules = list(ss.qualified_rules())
        assert (rules[1].line, rules[1].column, rules[1].offset) == (2, 3, 8)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestStylesheetErrors:
    def test_unclosed_attribute_bracket(self):
        with pytest.raises(SelectorParseError) as info:
            parse_stylesheet(".a[ { color: red; }")
        assert "Unclosed '['" in str(info.value)
        assert info.value.offset == 2
        assert info.value.rule_index == 0

    def test_broken_fixture(self):
        with pytest.raises(SelectorParseError) as info:
            parse_stylesheet((FIXTURES / "broken.css").read_text())
        assert info.value.line == 2
        assert info.value.rule_index == 1

    def test_selector_error_is_relocated(self):
        with pytest.raises(SelectorParseError) as info:
            parse_stylesheet(".a {}\n.b {}\n.c > {}")
        err = info.value
        assert err.message == "Selector ends with a combinator"
        assert (err.line, err.column, err.offset) == (3, 6, 17)
        assert err.rule_index == 2

    def test_unclosed_block(self):
        with pytest.raises(SelectorParseError, match="Unclosed block"):
            parse_stylesheet(".a { color: red;")

    def test_unclosed_nested_block(self):
        with pytest.raises(SelectorParseError, match="Unclosed block"):
            parse_stylesheet("@media print { .a { color: red; }")

    def test_stray_closing_brace(self):
        with pytest.raises(SelectorParseError, match="Unexpected '}'"):
            parse_stylesheet(".a {} }")

    def test_missing_block(self):
        with pytest.raises(SelectorParseError, match="Expected '{'"):
            parse_stylesheet(".a")

    def test_missing_block_inside_media(self):
        with pytest.raises(SelectorParseError, match="Expected '{'"):
            parse_stylesheet("@media print { .a }")

    def test_empty_selector(self):
        with pytest.raises(SelectorParseError):
            parse_stylesheet("{ color: red; }")
