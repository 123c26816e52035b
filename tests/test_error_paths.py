"""Error-path and malformed input tests.

Tests that exercise error construction, formatting and the exception
hierarchy. Parser-level error cases live in test_parser.py.
"""

import pytest

from plantilla import (
    ConfigError,
    ExpressionSyntaxError,
    NestingTooDeepError,
    PlantillaError,
    TemplateSyntaxError,
    TokenStreamClosedError,
    UnknownTagError,
    UnterminatedBlockError,
    parse,
)

# =========================================================================
# TemplateSyntaxError construction and formatting
# =========================================================================


class TestTemplateSyntaxErrorFormatting:
    """Verify TemplateSyntaxError produces well-formatted messages."""

    def test_message_only(self) -> None:
        err = TemplateSyntaxError("unexpected token")
        assert str(err) == "unexpected token"
        assert err.position is None
        assert err.lineno is None

    def test_with_position(self) -> None:
        err = TemplateSyntaxError("bad", position=12)
        assert str(err) == "@12 bad"

    def test_with_file_and_position(self) -> None:
        err = TemplateSyntaxError("bad", position=12, source_file="page.html")
        assert str(err) == "page.html@12 bad"

    def test_with_line_and_column(self) -> None:
        err = TemplateSyntaxError("bad", position=12, lineno=2, col_offset=5)
        assert str(err) == "2:5 bad"
        assert err.position == 12

    def test_with_source_file(self) -> None:
        err = TemplateSyntaxError("error", lineno=1, col_offset=1, source_file="t.html")
        assert str(err) == "t.html:1:1 error"

    def test_message_attribute(self) -> None:
        assert TemplateSyntaxError("x", position=1).message == "x"


# =========================================================================
# Hierarchy
# =========================================================================


class TestHierarchy:
    """Every library error derives from PlantillaError."""

    @pytest.mark.parametrize(
        "cls",
        [UnterminatedBlockError, UnknownTagError, ExpressionSyntaxError, NestingTooDeepError],
    )
    def test_template_errors(self, cls: type) -> None:
        assert issubclass(cls, TemplateSyntaxError)
        assert issubclass(cls, PlantillaError)

    def test_programmer_errors(self) -> None:
        assert issubclass(ConfigError, PlantillaError)
        assert issubclass(TokenStreamClosedError, PlantillaError)
        assert not issubclass(ConfigError, TemplateSyntaxError)

    def test_subclass_attributes(self) -> None:
        assert UnterminatedBlockError("endfor", position=3).keyword == "endfor"
        assert UnknownTagError("x").name == "x"
        assert NestingTooDeepError(4).max_depth == 4

    def test_subclass_messages(self) -> None:
        assert str(UnterminatedBlockError("endif")) == "Unclosed tag, expecting 'endif'"
        assert str(UnknownTagError("bogus", position=0)) == "@0 Unknown tag 'bogus'"
        assert "maximum depth of 4" in str(NestingTooDeepError(4))


# =========================================================================
# Malformed input
# =========================================================================


class TestMalformedInput:
    """Malformed templates either parse as text or raise a located error."""

    @pytest.mark.parametrize(
        "source",
        ["{{", "}}", "{%", "%}", "{# open", "{{{ }", "{% %", "text {{ a"],
    )
    def test_unclosed_delimiters_are_text(self, source: str) -> None:
        nodes = parse(source)
        assert len(nodes) == 1
        assert nodes[0].content == source

    def test_source_file_in_message(self) -> None:
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            parse("{{ a = b }}", source_file="views/home.html")
        assert str(exc_info.value).startswith("views/home.html:1:6 ")

    def test_empty_block_is_unknown_tag(self) -> None:
        with pytest.raises(UnknownTagError) as exc_info:
            parse("{% %}")
        assert exc_info.value.name == ""

    def test_catch_all_with_base_class(self) -> None:
        with pytest.raises(PlantillaError):
            parse("{{ | }}")
