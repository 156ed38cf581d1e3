"""
Tests for the grammar-rule adapters and the parse context.
"""

import pytest

from lexkit import (
    Discard, DualParse, Eof, Location, LocationRange, ParseContext, ParseError, TokenRule,
    TokenType, TransformRule, parse,
)
from lexkit.rules import Parsed, RuleRef, as_production
from tests.infrastructure.kinds import Eq, Ident, Let, Number, Ws


class Binding(TransformRule):
    """let <ident> = <number>"""

    def __init__(self, name, value):
        self.name = name
        self.value = value

    @classmethod
    def inner(cls):
        return DualParse(
            Discard(TokenRule(TokenType.of(Let))),
            DualParse(RuleRef(Ident), DualParse(Discard(as_production(Eq)), RuleRef(Number))),
        )

    @classmethod
    def from_inner(cls, inner, range):
        _, (name, (_, value)) = inner
        return cls(name, value)


class TestProductions:

    def test_token_rule_yields_any_token(self):
        cx = ParseContext("let")
        parsed = TokenRule(TokenType.of(Let)).parse(cx, Location(0))
        assert parsed.value.token_type == TokenType.of(Let)
        assert parsed.range == LocationRange.of(0, 3)

    def test_discard_keeps_range(self):
        cx = ParseContext("let")
        parsed = Discard(TokenRule(TokenType.of(Let))).parse(cx, Location(0))
        assert parsed == Parsed(None, LocationRange.of(0, 3))

    def test_dual_parse_continues_at_remaining_input(self):
        cx = ParseContext("let=")
        production = DualParse(TokenRule(TokenType.of(Let)), TokenRule(TokenType.of(Eq)))
        parsed = production.parse(cx, Location(0))
        assert parsed.range == LocationRange.of(0, 4)
        first, second = parsed.value
        assert first.range == LocationRange.of(0, 3)
        assert second.range == LocationRange.of(3, 4)

    def test_dual_parse_fails_when_second_fails(self):
        cx = ParseContext("let let")
        production = DualParse(TokenRule(TokenType.of(Let)), TokenRule(TokenType.of(Eq)))
        assert production.parse(cx, Location(0)) is None

    def test_as_production_rejects_other_values(self):
        with pytest.raises(TypeError):
            as_production(42)


class TestParseContext:

    def test_skip_trivia(self):
        cx = ParseContext("   let", skip=TokenType.of(Ws))
        assert cx.skip_trivia(Location(0)) == Location(3)

    def test_without_skip_kind_location_is_unchanged(self):
        cx = ParseContext("   let")
        assert cx.skip_trivia(Location(0)) == Location(0)

    def test_records_expected_kinds_at_furthest_failure(self):
        cx = ParseContext("let x")
        let_, eq, num = TokenType.of(Let), TokenType.of(Eq), TokenType.of(Number)

        assert cx.lex(num, Location(0)) is None
        assert cx.lex(let_, Location(0)) is not None
        assert cx.lex(num, Location(4)) is None
        assert cx.lex(eq, Location(4)) is None

        assert cx.furthest == Location(4)
        assert cx.expected == sorted([num, eq])

    def test_error_names_expected_kinds(self):
        cx = ParseContext("x")
        cx.lex(TokenType.of(Let), Location(0))
        err = cx.error()
        assert isinstance(err, ParseError)
        assert err.location == Location(0)
        assert "Let" in str(err)


class TestParse:

    def test_transform_rule(self):
        src = "let answer = 42"
        binding = parse(Binding, src, skip=Ws)
        assert binding.name.range.text(src) == "answer"
        assert binding.value.range.text(src) == "42"

    def test_trailing_input_is_an_error(self):
        with pytest.raises(ParseError) as ei:
            parse(Let, "let!")
        assert ei.value.location == Location(3)
        assert ei.value.expected == (TokenType.of(Eof),)
        assert "end-of-file" in str(ei.value)

    def test_failure_reports_furthest_location(self):
        with pytest.raises(ParseError) as ei:
            parse(Binding, "let x = y", skip=Ws)
        assert ei.value.location == Location(8)
        assert ei.value.expected == (TokenType.of(Number),)

    def test_trailing_trivia_is_skipped(self):
        assert parse(Let, "let  ", skip=Ws) == Let(range=LocationRange.of(0, 3))

    def test_eof_rule(self):
        assert parse(Eof, "") == Eof()
