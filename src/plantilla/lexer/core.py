"""Region lexer: splits template source into text and tag regions.

A single combined pattern (see ``plantilla.grammar.region_pattern``) is
matched anchored at the scan position, so scanning never backtracks into
text that was already consumed. Each match yields an optional TEXT token for
the leading literal text and one BLOCK, VARIABLE or COMMENT token. Whatever
is left after the last match becomes one final TEXT token, which is also how
an opening delimiter without a matching close ends up as plain text.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; the compiled patterns are shared read-only.

"""

from __future__ import annotations

from plantilla.config import ParseConfig, get_parse_config
from plantilla.grammar import region_pattern
from plantilla.stream import TokenStream
from plantilla.tokens import Token, TokenType

_REGION_TYPES: dict[str, TokenType] = {
    "block": TokenType.BLOCK,
    "variable": TokenType.VARIABLE,
    "comment": TokenType.COMMENT,
}


class Lexer:
    """Region lexer over a whole template.

    Usage:
            >>> stream = Lexer("Hello {{ name }}!").tokenize()
            >>> list(stream)
        [Token(TEXT, 'Hello ', @0), Token(VARIABLE, 'name', @6), Token(TEXT, '!', @16)]

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source) to avoid repeated calls
        "_source_file",
        "_config",
        "_pattern",
        "_pos",
        "_lineno",
        "_col",
    )

    def __init__(
        self,
        source: str,
        config: ParseConfig | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Template source text
            config: Delimiters and trimming; defaults to the active ParseConfig
            source_file: Optional template file name for error messages
        """
        self._source = source
        self._source_len = len(source)
        self._source_file = source_file
        self._config = config if config is not None else get_parse_config()
        self._pattern = region_pattern(self._config)
        self._pos = 0
        self._lineno = 1
        self._col = 1

    def tokenize(self) -> TokenStream:
        """Tokenize source into a closed token stream.

        Returns:
            TokenStream holding every region in source order
        """
        stream = TokenStream()
        source = self._source
        match = self._pattern.match

        while self._pos < self._source_len:
            m = match(source, self._pos)
            if m is None:
                break

            text = m.group("text")
            if text:
                stream.feed(self._make_token(TokenType.TEXT, text, self._pos + len(text)))

            kind = m.lastgroup
            raw = m.group(kind)
            value = raw.strip()
            content_offset = m.start(kind) + (len(raw) - len(raw.lstrip()))
            stream.feed(
                self._make_token(
                    _REGION_TYPES[kind], value, m.end(), content_offset=content_offset
                )
            )

        if self._pos < self._source_len:
            stream.feed(
                self._make_token(TokenType.TEXT, source[self._pos :], self._source_len)
            )

        stream.close()
        return stream

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        end_pos: int,
        *,
        content_offset: int | None = None,
    ) -> Token:
        """Create a token starting at the current position and commit to end_pos."""
        token = Token(
            type=token_type,
            value=value,
            position=self._pos,
            end_offset=end_pos,
            content_offset=content_offset if content_offset is not None else self._pos,
            _lineno=self._lineno,
            _col=self._col,
            _source_file=self._source_file,
        )
        self._commit_to(end_pos)
        return token

    def _commit_to(self, end_pos: int) -> None:
        """Advance position to end_pos, updating line and column.

        Uses C-optimized str.count/rfind on the skipped segment.
        """
        newline_count = self._source.count("\n", self._pos, end_pos)
        if newline_count > 0:
            last_nl = self._source.rfind("\n", self._pos, end_pos)
            self._lineno += newline_count
            self._col = end_pos - last_nl
        else:
            self._col += end_pos - self._pos
        self._pos = end_pos
