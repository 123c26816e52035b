"""Argument lexer for the expression mini-language inside tags.

Scans the inner text of a single block or variable tag into a flat list of
ArgumentToken. Two modes drive the scan (see ``ArgumentMode``): a pipe
switches from VALUE to FILTERING, ``;`` switches back, and a pipe inside
FILTERING closes the current filter and opens the next one. Input that ends
while still filtering gets one implied FILTER_END.

Rule order per mode is defined by ``plantilla.grammar``.

Thread Safety:
ArgumentLexer instances are single-use. The grammar table is shared
read-only.

"""

from __future__ import annotations

import re

from plantilla.errors import ExpressionSyntaxError
from plantilla.grammar import FILTER_RULES, GRAMMAR, OPERATOR_ALIASES, VALUE_RULES, Grammar
from plantilla.lexer.modes import ArgumentMode
from plantilla.tokens import ArgumentToken, ArgumentTokenType


class ArgumentLexer:
    """Two-mode scanner over one tag's expression text.

    Usage:
            >>> ArgumentLexer("x|upper").tokenize()
        [ArgumentToken(NAME, 'x'), ArgumentToken(FILTER_START, '|'),
         ArgumentToken(NAME, 'upper'), ArgumentToken(FILTER_END, '')]

    """

    __slots__ = ("_source", "_source_len", "_pos", "_base_offset", "_source_file", "_grammar", "_mode")

    def __init__(
        self,
        source: str,
        base_offset: int = 0,
        source_file: str | None = None,
        grammar: Grammar = GRAMMAR,
    ) -> None:
        """Initialize lexer with expression text.

        Args:
            source: Expression text (tag content without the tag delimiters)
            base_offset: Absolute offset of source[0] in the template
            source_file: Optional template file name for error messages
            grammar: Compiled grammar table
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._base_offset = base_offset
        self._source_file = source_file
        self._grammar = grammar
        self._mode = ArgumentMode.VALUE

    def tokenize(self) -> list[ArgumentToken]:
        """Scan the whole source.

        Returns:
            Flat list of argument tokens

        Raises:
            ExpressionSyntaxError: On a character no rule of the current mode accepts
        """
        result: list[ArgumentToken] = []
        whitespace = self._grammar.whitespace

        while True:
            self._scan(whitespace)
            if self._pos >= self._source_len:
                break
            start = self._pos
            rules = VALUE_RULES if self._mode is ArgumentMode.VALUE else FILTER_RULES
            for attr, token_type in rules:
                text = self._scan(getattr(self._grammar, attr))
                if text is not None:
                    result.extend(self._emit(token_type, text, start))
                    break
            else:
                char = self._source[start]
                msg = f"Unexpected character {char!r} in expression"
                raise ExpressionSyntaxError(
                    msg, position=self._base_offset + start, source_file=self._source_file
                )

        if self._mode is ArgumentMode.FILTERING:
            result.append(self._token(ArgumentTokenType.FILTER_END, "", self._pos))
        return result

    def _emit(
        self, token_type: ArgumentTokenType, text: str, start: int
    ) -> list[ArgumentToken]:
        """Turn one rule match into tokens, switching mode where needed."""
        match token_type:
            case ArgumentTokenType.FILTER_START if self._mode is ArgumentMode.FILTERING:
                # Chained filter: close the current one, open the next
                return [
                    self._token(ArgumentTokenType.FILTER_END, "", start),
                    self._token(ArgumentTokenType.FILTER_START, text, start),
                ]
            case ArgumentTokenType.FILTER_START:
                self._mode = ArgumentMode.FILTERING
                return [self._token(token_type, text, start)]
            case ArgumentTokenType.FILTER_END:
                self._mode = ArgumentMode.VALUE
                return [self._token(token_type, text, start)]
            case ArgumentTokenType.OPERATOR:
                op = text.lower()
                return [self._token(token_type, OPERATOR_ALIASES.get(op, op), start)]
            case _:
                return [self._token(token_type, text, start)]

    def _token(self, token_type: ArgumentTokenType, value: str, start: int) -> ArgumentToken:
        return ArgumentToken(token_type, value, self._base_offset + start)

    def _scan(self, pattern: re.Pattern[str]) -> str | None:
        """Match pattern anchored at the current position and consume it."""
        m = pattern.match(self._source, self._pos)
        if m is None or m.end() == self._pos:
            return None
        self._pos = m.end()
        return m.group(0)
