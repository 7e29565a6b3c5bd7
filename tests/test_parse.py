"""Tests for annals.parse module."""

import pytest

from annals.errors import (
    EmptyRule,
    InvalidExpression,
    InvalidName,
    InvalidRange,
    UnbalancedBrackets,
    UnknownCommand,
    ZeroLengthSubst,
)
from annals.parse import (
    Binding,
    Expression,
    Literal,
    NonTerminal,
    Range,
    StickyNonTerminal,
    VariableAssignment,
    literal_text,
    parse,
)


class TestScanner:
    """Tests for splitting literals into tokens."""

    def test_literal_only(self):
        assert parse("abc") == [Literal("abc")]

    def test_single_nonterminal(self):
        assert parse("<aa>") == [NonTerminal("aa")]

    def test_literal_around_nonterminal(self):
        assert parse("This is an expression with one <substitution> symbol.") == [
            Literal("This is an expression with one "),
            NonTerminal("substitution"),
            Literal(" symbol."),
        ]

    def test_adjacent_nonterminals(self):
        assert parse("<aa><bb><cc>") == [
            NonTerminal("aa"),
            NonTerminal("bb"),
            NonTerminal("cc"),
        ]

    def test_separated_nonterminals(self):
        assert parse("<aa> <cc>") == [
            NonTerminal("aa"),
            Literal(" "),
            NonTerminal("cc"),
        ]

    def test_mixed_forms(self):
        assert parse("This is <(cap one)> a complex expression with <!sticky> and <@bind>!") == [
            Literal("This is "),
            Expression("capitalize", NonTerminal("one")),
            Literal(" a complex expression with "),
            StickyNonTerminal("sticky"),
            Literal(" and "),
            Binding("bind"),
            Literal("!"),
        ]

    def test_names_with_digits_hyphens_underscores(self):
        assert parse("<new_world-2>") == [NonTerminal("new_world-2")]


class TestSigils:
    """Tests for the sigil-prefixed substitution forms."""

    def test_sticky(self):
        assert parse("<!foo>") == [StickyNonTerminal("foo")]

    def test_binding(self):
        assert parse("<@ab>") == [Binding("ab")]
        assert parse("<@bind1>") == [Binding("bind1")]
        assert parse("<@beautiful_snake>") == [Binding("beautiful_snake")]

    def test_range(self):
        assert parse("<#39-100>") == [Range(39, 100)]

    def test_range_in_text(self):
        assert parse("I saw <#1-10> cats") == [
            Literal("I saw "),
            Range(1, 10),
            Literal(" cats"),
        ]

    def test_variable_assignment(self):
        assert parse("<$x:leaf>") == [VariableAssignment("x", "leaf")]

    def test_variable_assignment_then_binding(self):
        assert parse("<$hero:name> met <@hero>") == [
            VariableAssignment("hero", "name"),
            Literal(" met "),
            Binding("hero"),
        ]


class TestCommands:
    """Tests for (cmd ...) expressions."""

    @pytest.mark.parametrize(
        "word, command",
        [
            ("cap", "capitalize"),
            ("capitalize", "capitalize"),
            ("low", "lowercase"),
            ("lowercase", "lowercase"),
            ("title", "titlecase"),
            ("titlecase", "titlecase"),
            ("a", "article"),
            ("an", "article"),
        ],
    )
    def test_keywords(self, word, command):
        assert parse(f"<({word} animal)>") == [Expression(command, NonTerminal("animal"))]

    def test_nested_expression(self):
        assert parse("<(an (cap animal))>") == [
            Expression("article", Expression("capitalize", NonTerminal("animal")))
        ]

    def test_command_wraps_sticky(self):
        assert parse("<(an !animal)>") == [Expression("article", StickyNonTerminal("animal"))]

    def test_command_wraps_binding(self):
        assert parse("<(cap @name)>") == [Expression("capitalize", Binding("name"))]

    def test_extra_spaces_trimmed(self):
        assert parse("<(cap   animal)>") == [Expression("capitalize", NonTerminal("animal"))]

    def test_unknown_command(self):
        with pytest.raises(UnknownCommand) as exc:
            parse("<(shout animal)>")
        assert exc.value.span == (2, 7)

    def test_missing_argument(self):
        with pytest.raises(InvalidExpression):
            parse("<(cap)>")

    def test_unbalanced_parens(self):
        with pytest.raises(InvalidExpression):
            parse("<(an (an animal)>")

    def test_invalid_inner_name_points_inside(self):
        with pytest.raises(InvalidName) as exc:
            parse("<(cap @bad name)>")
        assert exc.value.span == (6, 15)


class TestEscaping:
    """Tests for \\< and \\> escapes."""

    def test_escaped_brackets(self):
        assert parse("Expr with \\<escaped brackets\\>") == [
            Literal("Expr with <escaped brackets>")
        ]

    def test_unbalanced_escaped_brackets_are_fine(self):
        assert parse("Expr with \\<\\< unbalanced escaped brackets\\>") == [
            Literal("Expr with << unbalanced escaped brackets>")
        ]

    def test_escape_next_to_substitution(self):
        assert parse("\\<<tag>\\>") == [
            Literal("<"),
            NonTerminal("tag"),
            Literal(">"),
        ]


class TestParseErrors:
    """Tests for parse failures and their spans."""

    def test_empty_rule(self):
        with pytest.raises(EmptyRule):
            parse("")

    @pytest.mark.parametrize(
        "expr",
        ["<<", "<>>", "<", ">", "Hello <!", "Hello >!", "<<>", "<><", "This is an <<unbalanced> expression"],
    )
    def test_unbalanced(self, expr):
        with pytest.raises(UnbalancedBrackets):
            parse(expr)

    def test_stray_closing_bracket(self):
        with pytest.raises(UnbalancedBrackets) as exc:
            parse("a>b<c")
        assert exc.value.span == (1, 2)

    def test_zero_length(self):
        assert _span(ZeroLengthSubst, "<>") == (1, 2)
        assert _span(ZeroLengthSubst, "<()>") == (2, 3)

    def test_zero_length_in_text(self):
        assert _span(ZeroLengthSubst, "Zero-length <>") == (13, 14)
        assert _span(ZeroLengthSubst, "Zero-length <> unaffected by post-string") == (13, 14)

    def test_bare_sigils(self):
        assert _span(InvalidName, "<@>") == (1, 2)
        assert _span(InvalidName, "<!>") == (1, 2)

    def test_bad_binding(self):
        assert _span(InvalidName, "<@some binding>") == (1, 14)
        assert _span(InvalidName, "<@ binding>") == (1, 10)

    def test_punctuation_name(self):
        with pytest.raises(InvalidName):
            parse("<,>")

    def test_assignment_without_colon(self):
        with pytest.raises(InvalidName):
            parse("<$x>")

    @pytest.mark.parametrize("expr", ["<#1>", "<#a-b>", "<#1-2-3>", "<#5-5>", "<#9-3>"])
    def test_invalid_range(self, expr):
        with pytest.raises(InvalidRange):
            parse(expr)


class TestRoundTrip:
    """Literal-only token sequences rebuild the unescaped text."""

    @pytest.mark.parametrize(
        "expr, text",
        [
            ("plain text", "plain text"),
            ("a \\<b\\> c", "a <b> c"),
            ("\\>\\>\\<", ">><"),
        ],
    )
    def test_literal_round_trip(self, expr, text):
        assert literal_text(parse(expr)) == text

    def test_non_literal_tokens(self):
        assert literal_text(parse("a <b>")) is None


def _span(err_type, expr):
    with pytest.raises(err_type) as exc:
        parse(expr)
    return exc.value.span
