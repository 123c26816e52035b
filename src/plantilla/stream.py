"""Forward-only token stream between the region lexer and the parser.

The lexer feeds tokens and closes the stream; the parser then consumes it
exactly once with next(). There is no seek or rewind: nested sub-parses
share the same cursor, which is what lets a parent tag see the stop keyword
a child parse halted on.

Thread Safety:
TokenStream instances are single-use and not thread-safe. Create one per
source string.

"""

from __future__ import annotations

from collections.abc import Iterator

from plantilla.errors import TokenStreamClosedError
from plantilla.tokens import Token


class TokenStream:
    """Single-pass cursor over region tokens.

    Usage:
            >>> stream = Lexer("Hello {{ name }}!").tokenize()
            >>> stream.next()
        Token(TEXT, 'Hello ', @0)
            >>> stream.current
        Token(TEXT, 'Hello ', @0)

    """

    __slots__ = ("_tokens", "_pos", "_current", "_closed")

    def __init__(self) -> None:
        self._tokens: list[Token] = []
        self._pos = 0
        self._current: Token | None = None
        self._closed = False

    def feed(self, token: Token) -> None:
        """Append a token; only legal before close()."""
        if self._closed:
            msg = "Cannot feed a closed token stream"
            raise TokenStreamClosedError(msg)
        self._tokens.append(token)

    def close(self) -> None:
        """Mark the stream complete. Further feeds raise."""
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def next(self) -> Token | None:
        """Advance the cursor and return the token, or None at the end."""
        if self._pos >= len(self._tokens):
            return None
        self._current = self._tokens[self._pos]
        self._pos += 1
        return self._current

    @property
    def current(self) -> Token | None:
        """The token most recently returned by next()."""
        return self._current

    def at_end(self) -> bool:
        """Check if every token has been consumed."""
        return self._pos >= len(self._tokens)

    @property
    def tokens(self) -> tuple[Token, ...]:
        """Snapshot of all fed tokens (does not move the cursor)."""
        return tuple(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        while (token := self.next()) is not None:
            yield token

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"TokenStream({len(self._tokens)} tokens, at {self._pos}, {state})"
