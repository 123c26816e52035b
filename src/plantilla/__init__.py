"""
Plantilla: template language front-end for Python

Turns template source with block tags ({% ... %}), variables ({{ ... }}) and
comments ({# ... #}) into a token stream and then a typed node list.
Block tags are built by handlers you register; rendering is up to you.
Zero runtime dependencies.

Quick Start:
    >>> from plantilla import tokenize, parse
    >>> [t.value for t in tokenize("Hello {{ name }}!")]
    ['Hello ', 'name', '!']

    >>> nodes = parse("Hello {{ name|upper }}!")
    >>> nodes[1].filters[0].name
    'upper'

Custom Tags:
    >>> from plantilla import TagRegistryBuilder, parse
    >>>
    >>> builder = TagRegistryBuilder()
    >>> builder.register(MyIfTag())
    >>> nodes = parse("{% if x %}yes{% endif %}", registry=builder.build())

Installation:
    pip install plantilla
"""

from plantilla.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from plantilla.errors import (
    ConfigError,
    ExpressionSyntaxError,
    NestingTooDeepError,
    PlantillaError,
    TemplateSyntaxError,
    TokenStreamClosedError,
    UnknownTagError,
    UnterminatedBlockError,
)
from plantilla.grammar import GRAMMAR, Grammar
from plantilla.lexer import ArgumentLexer, ArgumentMode, Lexer
from plantilla.location import SourceLocation
from plantilla.nodes import (
    Argument,
    Comment,
    FilterCall,
    Literal,
    NamedArguments,
    Node,
    NodeList,
    Operator,
    PositionalArgument,
    Symbol,
    Tag,
    Text,
    Value,
    Variable,
)
from plantilla.parser import Parser
from plantilla.parsing import build_arguments, parse_arguments
from plantilla.stream import TokenStream
from plantilla.tags import TagHandler, TagRegistry, TagRegistryBuilder
from plantilla.tokens import ArgumentToken, ArgumentTokenType, Token, TokenType
from plantilla.visitor import BaseVisitor, walk

__version__ = "0.1.0"


def tokenize(
    source: str,
    config: ParseConfig | None = None,
    *,
    source_file: str | None = None,
) -> TokenStream:
    """Split template source into a closed token stream.

    Args:
        source: Template source text
        config: Delimiters and trimming (uses the active ParseConfig if None)
        source_file: Optional template file name for error messages

    Returns:
        TokenStream of TEXT / BLOCK / VARIABLE / COMMENT tokens

    Example:
        >>> [t.position for t in tokenize("Hello {{ name }}!")]
        [0, 6, 16]
    """
    return Lexer(source, config, source_file).tokenize()


def parse(
    source: str,
    *,
    registry: TagRegistry | None = None,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> NodeList:
    """Parse template source into a node list.

    Args:
        source: Template source text
        registry: Tag handlers (an empty registry if None, so any block tag
            raises UnknownTagError)
        source_file: Optional template file name for error messages
        config: Parse configuration for this call (the active ParseConfig
            is used if None)

    Returns:
        NodeList of top-level nodes

    Example:
        >>> nodes = parse("{# note #}Hi {{ user.name }}")
        >>> [type(n).__name__ for n in nodes]
        ['Comment', 'Text', 'Variable']
    """
    if config is None:
        return Parser(source, registry, source_file).parse()
    with parse_config_context(config):
        return Parser(source, registry, source_file).parse()


__all__ = [
    # Main API
    "parse",
    "tokenize",
    "parse_arguments",
    "build_arguments",
    "Parser",
    "Lexer",
    "ArgumentLexer",
    "ArgumentMode",
    "TokenStream",
    "__version__",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Grammar
    "GRAMMAR",
    "Grammar",
    # Tags
    "TagHandler",
    "TagRegistry",
    "TagRegistryBuilder",
    # Tokens
    "Token",
    "TokenType",
    "ArgumentToken",
    "ArgumentTokenType",
    "SourceLocation",
    # Nodes
    "Node",
    "NodeList",
    "Text",
    "Variable",
    "Comment",
    "Tag",
    # Values and arguments
    "Value",
    "Literal",
    "Symbol",
    "Operator",
    "Argument",
    "PositionalArgument",
    "NamedArguments",
    "FilterCall",
    # Visitor
    "BaseVisitor",
    "walk",
    # Errors
    "PlantillaError",
    "TemplateSyntaxError",
    "UnterminatedBlockError",
    "UnknownTagError",
    "ExpressionSyntaxError",
    "NestingTooDeepError",
    "ConfigError",
    "TokenStreamClosedError",
]
