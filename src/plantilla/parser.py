"""Recursive descent parser producing a typed node list.

Consumes the token stream from the region lexer and builds nodes. Block
tags are delegated to the injected TagRegistry; tags that own a body call
``parse()`` again with their stop keywords, so nesting is resolved purely by
keyword matching and never by counting delimiters.

Example:
    {% if user %}Hi {{ user.name }}{% else %}Hello{% endif %}

    parse(())                      top level, stop set empty
      -> IfTag.parse
           parse(("else", "endif")) -> [Text "Hi ", Variable user.name]
           stop_token is "else"
           parse(("endif",))        -> [Text "Hello"]

Thread Safety:
- Parser instances are single-use and not thread-safe
- Configuration is read from ContextVar (thread-local)
- The grammar table is shared read-only

"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from plantilla.config import ParseConfig, get_parse_config
from plantilla.errors import ExpressionSyntaxError, NestingTooDeepError, UnterminatedBlockError
from plantilla.lexer import Lexer
from plantilla.location import SourceLocation
from plantilla.nodes import (
    Argument,
    Comment,
    FilterCall,
    Node,
    NodeList,
    PositionalArgument,
    Symbol,
    Text,
    Variable,
)
from plantilla.parsing.arguments import parse_arguments
from plantilla.tags.registry import TagRegistry
from plantilla.tokens import Token, TokenType
from plantilla.utils.logger import get_logger

logger = get_logger(__name__)

_EMPTY_REGISTRY = TagRegistry()


class Parser:
    """Recursive descent parser for templates.

    Usage:
            >>> parser = Parser("Hello {{ name|upper }}!", registry)
            >>> nodes = parser.parse()
            >>> nodes[1]
        Variable(location=..., expression=Symbol(name='name'),
                 filters=(FilterCall(name='upper', arguments=()),))

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        template. Configuration is read from ContextVar (thread-local).

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_registry",
        "_stream",
        "_stop_token",
        "_depth",
        "_first",
        "_args_offset",
        "storage",
    )

    def __init__(
        self,
        source: str,
        registry: TagRegistry | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parser and tokenize source.

        Configuration is read from ContextVar, not passed as parameters.
        Use set_parse_config() or parse_config_context() before creating
        a Parser if you need non-default delimiters.

        Args:
            source: Template source text
            registry: Tag handlers; defaults to an empty registry
            source_file: Optional template file name for error messages

        """
        self._source = source
        self._source_file = source_file
        self._registry = registry if registry is not None else _EMPTY_REGISTRY
        self._stream = Lexer(source, self._config, source_file).tokenize()
        self._stop_token: Token | None = None
        self._depth = 0
        self._first = True
        # Where the argument text of the tag being resolved starts
        self._args_offset = 0
        # Per-parse scratch space shared by tag handlers
        self.storage: dict[str, Any] = {}

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    @property
    def source_file(self) -> str | None:
        return self._source_file

    @property
    def registry(self) -> TagRegistry:
        return self._registry

    @property
    def current(self) -> Token | None:
        """The token most recently consumed from the stream."""
        return self._stream.current

    @property
    def stop_token(self) -> Token | None:
        """The block token that ended the most recent parse(stop)."""
        return self._stop_token

    @property
    def first(self) -> bool:
        """True until the first node of the template has been appended."""
        return self._first

    @property
    def depth(self) -> int:
        """Current nesting depth of parse() calls."""
        return self._depth

    def parse(self, stop: Iterable[str] | str = ()) -> NodeList:
        """Parse tokens into nodes until a stop keyword or the end of input.

        Args:
            stop: Block tag names that end this parse. The matching token is
                consumed but not turned into a node; it is available as
                ``stop_token``. Empty for a whole-template parse.

        Returns:
            NodeList of the nodes parsed before the stop keyword

        Raises:
            UnterminatedBlockError: Input ended while ``stop`` was non-empty
            UnknownTagError: A block tag has no registered handler
            ExpressionSyntaxError: A tag contains an invalid expression
            NestingTooDeepError: Nesting exceeded ``ParseConfig.max_depth``
        """
        until = (stop,) if isinstance(stop, str) else tuple(stop)
        opener = self._stream.current

        max_depth = self._config.max_depth
        if self._depth >= max_depth:
            raise NestingTooDeepError(max_depth, **self._error_location(opener))

        self._depth += 1
        try:
            nodes = NodeList()
            while (token := self._stream.next()) is not None:
                if token.type is TokenType.BLOCK and token.tag_name in until:
                    logger.debug(
                        "Stop keyword %r at offset %d (depth %d)",
                        token.tag_name,
                        token.position,
                        self._depth,
                    )
                    self._stop_token = token
                    return nodes
                nodes.append(self._parse_token(token))
                self._first = False
        finally:
            self._depth -= 1

        if until:
            raise UnterminatedBlockError(until[0], **self._error_location(opener))
        return nodes

    def skip_to(self, keyword: str) -> None:
        """Consume input up to ``keyword``, discarding the nodes.

        Still a full parse, so tags inside the skipped part stay balanced.
        """
        self.parse((keyword,))

    def parse_arguments(self, source: str, offset: int | None = None) -> tuple[Argument, ...]:
        """Build arguments for expression text found in the current tag.

        Args:
            source: Expression text, normally the ``args`` given to a handler
            offset: Absolute offset of source[0]; defaults to where the argument
                text of the tag being built starts, even after its body was parsed

        Returns:
            Ordered tuple of PositionalArgument / NamedArguments
        """
        if offset is None:
            offset = self._args_offset
        return self._located(source, offset)

    def _parse_token(self, token: Token) -> Node:
        """Build the node for one token."""
        match token.type:
            case TokenType.TEXT:
                return Text(token.location, token.value)
            case TokenType.VARIABLE:
                return self._parse_variable(token)
            case TokenType.COMMENT:
                return Comment(token.location, token.value)
            case TokenType.BLOCK:
                outer = self._args_offset
                self._args_offset = token.args_offset
                try:
                    return self._registry.resolve(
                        token.tag_name, token.tag_args, self, token.location
                    )
                finally:
                    self._args_offset = outer
            case _:
                msg = f"Unexpected token type: {token.type}"
                raise ValueError(msg)

    def _parse_variable(self, token: Token) -> Variable:
        """Build a Variable node from ``{{ expression|filters }}``.

        The first argument is the expression. Further positional names are
        taken as filters without arguments, so ``{{ a, upper }}`` means
        ``{{ a|upper }}``.
        """
        arguments = self._located(token.value, token.content_offset)
        if not arguments:
            raise ExpressionSyntaxError(
                "Empty variable tag", **self._error_location(token)
            )

        head, *rest = arguments
        if not isinstance(head, PositionalArgument):
            raise ExpressionSyntaxError(
                "Variable tag must start with a value, not named arguments",
                **self._error_location(token),
            )

        filters: list[FilterCall] = list(head.filters)
        for argument in rest:
            match argument:
                case PositionalArgument(value=Symbol(name=name), filters=extra):
                    filters.append(FilterCall(name))
                    filters.extend(extra)
                case _:
                    raise ExpressionSyntaxError(
                        "Unexpected value after variable expression",
                        **self._error_location(token),
                    )

        return Variable(token.location, head.value, tuple(filters))

    def _located(self, source: str, offset: int) -> tuple[Argument, ...]:
        """Build arguments, adding line and column to any syntax error.

        The argument lexer only knows absolute offsets; the parser holds the
        whole template and can turn them into a line and column.
        """
        try:
            return parse_arguments(source, offset, self._source_file)
        except ExpressionSyntaxError as e:
            if e.lineno is not None or e.position is None:
                raise
            loc = SourceLocation.from_offset(self._source, e.position, self._source_file)
            raise ExpressionSyntaxError(
                e.message,
                position=e.position,
                lineno=loc.lineno,
                col_offset=loc.col_offset,
                source_file=self._source_file,
            ) from None

    def _error_location(self, token: Token | None) -> dict[str, Any]:
        """Keyword arguments locating an error at token (or end of input)."""
        if token is None:
            return {"position": len(self._source), "source_file": self._source_file}
        return {
            "position": token.position,
            "lineno": token.lineno,
            "col_offset": token.col,
            "source_file": self._source_file,
        }
