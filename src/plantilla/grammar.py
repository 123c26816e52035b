"""Grammar table: the compiled patterns shared by every lexer.

The table is built once, eagerly, when this module is imported and is never
mutated afterwards, so concurrent parses can share it without locks. Lexers
receive it by reference (``Lexer(..., grammar=GRAMMAR)``) rather than reading
module globals, which keeps them testable with alternative tables.

Scanner order is part of the grammar, not an implementation detail. The
argument lexer tries the rules of its current mode strictly in the order of
VALUE_RULES / FILTER_RULES and takes the first match:

    value mode:      operator, boolean, named_argument, name, pipe,
                     separator, string, number
    filtering mode:  pipe, separator, filter_end, boolean, named_argument,
                     name, string, number

Consequences worth knowing:
- ``and``/``or``/``not`` are operators, never names (``order`` is a name).
- ``true``/``false`` are booleans, never names.
- ``name: value`` is tried before a bare name, so ``limit:10`` is one token.
- Symbol operators are ordered longest first: ``>=`` is one operator.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from plantilla.errors import ConfigError
from plantilla.tokens import ArgumentTokenType

if TYPE_CHECKING:
    from plantilla.config import ParseConfig

_NAME = r"[a-zA-Z_][a-zA-Z0-9_-]*(?:\.[a-zA-Z0-9_][a-zA-Z0-9_-]*)*"
_NUMBER = r"-?\d+(?:\.\d*)?"
_STRING = r"""(?:"[^"\\]*(?:\\.[^"\\]*)*"|'[^'\\]*(?:\\.[^'\\]*)*')"""
_I18N_STRING = rf"(?:_\(\s*{_STRING}\s*\)|{_STRING})"
# A name directly followed by "(" is the start of a translated string
_BARE_NAME = rf"(?>{_NAME})(?!\()"

# Canonical operator codes; words are lower-cased and kept as-is
OPERATOR_ALIASES: dict[str, str] = {
    "!": "not",
    "!=": "ne",
    "==": "eq",
    ">": "gt",
    "<": "lt",
    "<=": "le",
    ">=": "ge",
}


@dataclass(frozen=True, slots=True)
class Grammar:
    """Immutable table of compiled matchers for the expression language."""

    whitespace: re.Pattern[str]
    separator: re.Pattern[str]
    pipe: re.Pattern[str]
    filter_end: re.Pattern[str]
    operator: re.Pattern[str]
    boolean: re.Pattern[str]
    number: re.Pattern[str]
    string: re.Pattern[str]
    i18n_string: re.Pattern[str]
    name: re.Pattern[str]
    named_argument: re.Pattern[str]

    @classmethod
    def build(cls) -> Grammar:
        """Compile the default grammar."""
        return cls(
            whitespace=re.compile(r"\s+"),
            separator=re.compile(r","),
            pipe=re.compile(r"\|"),
            filter_end=re.compile(r";"),
            operator=re.compile(
                r"(?:>=|<=|!=|==|>|<|!|(?:and|or|not)(?![\w-]))", re.IGNORECASE
            ),
            boolean=re.compile(r"(?:true|false)(?![\w.-])"),
            number=re.compile(_NUMBER),
            string=re.compile(_STRING, re.DOTALL),
            i18n_string=re.compile(_I18N_STRING, re.DOTALL),
            name=re.compile(_BARE_NAME),
            named_argument=re.compile(
                rf"({_NAME})\s*:\s*({_I18N_STRING}|{_NUMBER}|{_BARE_NAME})",
                re.DOTALL,
            ),
        )


# (grammar attribute, token type) in match priority order
VALUE_RULES: tuple[tuple[str, ArgumentTokenType], ...] = (
    ("operator", ArgumentTokenType.OPERATOR),
    ("boolean", ArgumentTokenType.BOOLEAN),
    ("named_argument", ArgumentTokenType.NAMED_ARGUMENT),
    ("name", ArgumentTokenType.NAME),
    ("pipe", ArgumentTokenType.FILTER_START),
    ("separator", ArgumentTokenType.SEPARATOR),
    ("i18n_string", ArgumentTokenType.STRING),
    ("number", ArgumentTokenType.NUMBER),
)

FILTER_RULES: tuple[tuple[str, ArgumentTokenType], ...] = (
    ("pipe", ArgumentTokenType.FILTER_START),
    ("separator", ArgumentTokenType.SEPARATOR),
    ("filter_end", ArgumentTokenType.FILTER_END),
    ("boolean", ArgumentTokenType.BOOLEAN),
    ("named_argument", ArgumentTokenType.NAMED_ARGUMENT),
    ("name", ArgumentTokenType.NAME),
    ("i18n_string", ArgumentTokenType.STRING),
    ("number", ArgumentTokenType.NUMBER),
)

# Process-wide table, built at import time
GRAMMAR: Grammar = Grammar.build()


@lru_cache(maxsize=32)
def region_pattern(config: ParseConfig) -> re.Pattern[str]:
    """Compile the combined region matcher for a delimiter configuration.

    The pattern has a lazy ``text`` group for leading literal text followed by
    exactly one of the ``block``, ``variable`` or ``comment`` alternatives.
    It is meant to be used with ``pattern.match(source, pos)`` so every scan
    resumes exactly where the previous match ended.

    Raises:
        ConfigError: If the delimiters do not produce a valid pattern.
    """
    trim = r"(?:\r?\n)?" if config.trim_tags else ""
    pattern = (
        r"(?P<text>.*?)(?:"
        rf"{re.escape(config.block_start)}(?P<block>.*?){re.escape(config.block_end)}{trim}"
        rf"|{re.escape(config.variable_start)}(?P<variable>.*?){re.escape(config.variable_end)}"
        rf"|{re.escape(config.comment_start)}(?P<comment>.*?){re.escape(config.comment_end)}{trim}"
        r")"
    )
    try:
        return re.compile(pattern, re.DOTALL)
    except re.error as e:
        msg = f"Invalid delimiter configuration: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "FILTER_RULES",
    "GRAMMAR",
    "Grammar",
    "OPERATOR_ALIASES",
    "VALUE_RULES",
    "region_pattern",
]
