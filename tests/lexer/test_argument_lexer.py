"""Tests for the argument lexer (expression mini-language scanner)."""

import pytest

from plantilla import ExpressionSyntaxError
from plantilla.lexer import ArgumentLexer
from plantilla.tokens import ArgumentToken, ArgumentTokenType as T


def _scan(source: str) -> list[tuple[T, str]]:
    return [(t.type, t.value) for t in ArgumentLexer(source).tokenize()]


class TestValueMode:
    """Tokens recognised outside filter chains."""

    def test_names_and_separators(self) -> None:
        assert _scan("a, b, c") == [
            (T.NAME, "a"),
            (T.SEPARATOR, ","),
            (T.NAME, "b"),
            (T.SEPARATOR, ","),
            (T.NAME, "c"),
        ]

    def test_dotted_and_hyphenated_names(self) -> None:
        assert _scan("user.profile.first-name items.0") == [
            (T.NAME, "user.profile.first-name"),
            (T.NAME, "items.0"),
        ]

    @pytest.mark.parametrize(
        "source,op",
        [
            ("a == b", "eq"),
            ("a != b", "ne"),
            ("a > b", "gt"),
            ("a < b", "lt"),
            ("a >= b", "ge"),
            ("a <= b", "le"),
            ("a and b", "and"),
            ("a or b", "or"),
            ("a AND b", "and"),
        ],
    )
    def test_binary_operators(self, source: str, op: str) -> None:
        assert _scan(source) == [(T.NAME, "a"), (T.OPERATOR, op), (T.NAME, "b")]

    def test_operators_without_spaces(self) -> None:
        assert _scan("a>=1") == [(T.NAME, "a"), (T.OPERATOR, "ge"), (T.NUMBER, "1")]

    def test_negation(self) -> None:
        assert _scan("!a") == [(T.OPERATOR, "not"), (T.NAME, "a")]
        assert _scan("not a") == [(T.OPERATOR, "not"), (T.NAME, "a")]

    def test_operator_words_inside_names(self) -> None:
        assert _scan("order android notes") == [
            (T.NAME, "order"),
            (T.NAME, "android"),
            (T.NAME, "notes"),
        ]

    def test_booleans(self) -> None:
        assert _scan("true, false") == [
            (T.BOOLEAN, "true"),
            (T.SEPARATOR, ","),
            (T.BOOLEAN, "false"),
        ]

    def test_boolean_prefix_is_a_name(self) -> None:
        assert _scan("trueish") == [(T.NAME, "trueish")]

    @pytest.mark.parametrize("source", ["10", "1.5", "-3", "2."])
    def test_numbers(self, source: str) -> None:
        assert _scan(source) == [(T.NUMBER, source)]

    @pytest.mark.parametrize(
        "source",
        ['"hello"', "'hello'", r'"say \"hi\""', r"'it\'s'", '_("hello")', "_( 'hi' )"],
    )
    def test_strings(self, source: str) -> None:
        assert _scan(source) == [(T.STRING, source)]

    def test_string_with_delimiter_characters(self) -> None:
        assert _scan('"a, b|c; d"') == [(T.STRING, '"a, b|c; d"')]

    def test_named_argument(self) -> None:
        assert _scan('limit: 10, title:"x"') == [
            (T.NAMED_ARGUMENT, "limit: 10"),
            (T.SEPARATOR, ","),
            (T.NAMED_ARGUMENT, 'title:"x"'),
        ]

    def test_named_argument_with_translated_value(self) -> None:
        assert _scan('label: _("Name")') == [(T.NAMED_ARGUMENT, 'label: _("Name")')]

    def test_empty_source(self) -> None:
        assert _scan("") == []
        assert _scan("   ") == []


class TestFilterMode:
    """Pipes, chaining and filter terminators."""

    def test_single_filter(self) -> None:
        assert _scan("x|upper") == [
            (T.NAME, "x"),
            (T.FILTER_START, "|"),
            (T.NAME, "upper"),
            (T.FILTER_END, ""),
        ]

    def test_chained_filters(self) -> None:
        kinds = [kind for kind, _ in _scan("x | upper | lower")]
        assert kinds == [
            T.NAME,
            T.FILTER_START,
            T.NAME,
            T.FILTER_END,
            T.FILTER_START,
            T.NAME,
            T.FILTER_END,
        ]

    def test_semicolon_returns_to_value_mode(self) -> None:
        assert _scan("x|upper; a == b") == [
            (T.NAME, "x"),
            (T.FILTER_START, "|"),
            (T.NAME, "upper"),
            (T.FILTER_END, ";"),
            (T.NAME, "a"),
            (T.OPERATOR, "eq"),
            (T.NAME, "b"),
        ]

    def test_filter_arguments(self) -> None:
        assert _scan('x|date "Y", tz: utc') == [
            (T.NAME, "x"),
            (T.FILTER_START, "|"),
            (T.NAME, "date"),
            (T.STRING, '"Y"'),
            (T.SEPARATOR, ","),
            (T.NAMED_ARGUMENT, "tz: utc"),
            (T.FILTER_END, ""),
        ]

    def test_colon_form_is_named_argument(self) -> None:
        assert _scan("x|truncate:10") == [
            (T.NAME, "x"),
            (T.FILTER_START, "|"),
            (T.NAMED_ARGUMENT, "truncate:10"),
            (T.FILTER_END, ""),
        ]

    def test_operators_not_recognised_in_filters(self) -> None:
        with pytest.raises(ExpressionSyntaxError):
            ArgumentLexer("x|f == 1").tokenize()


class TestOffsetsAndErrors:
    """Absolute offsets on tokens and errors."""

    def test_token_offsets(self) -> None:
        tokens = ArgumentLexer("a, bc", base_offset=5).tokenize()
        assert tokens == [
            ArgumentToken(T.NAME, "a", 5),
            ArgumentToken(T.SEPARATOR, ",", 6),
            ArgumentToken(T.NAME, "bc", 8),
        ]

    def test_unexpected_character_offset(self) -> None:
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            ArgumentLexer("a @ b", base_offset=10, source_file="page.html").tokenize()

        err = exc_info.value
        assert err.position == 12
        assert err.source_file == "page.html"
        assert "'@'" in str(err)

    def test_single_equals_is_an_error(self) -> None:
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            ArgumentLexer("a = b").tokenize()
        assert exc_info.value.position == 2

    def test_parentheses_are_not_supported(self) -> None:
        with pytest.raises(ExpressionSyntaxError):
            ArgumentLexer("f(x)").tokenize()

    def test_unterminated_string(self) -> None:
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            ArgumentLexer('"open').tokenize()
        assert exc_info.value.position == 0
