"""Lexers for Plantilla templates.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, ArgumentLexer, ArgumentMode
├── core.py              # Region lexer (text / block / variable / comment)
├── arguments.py         # Expression mini-language scanner
└── modes.py             # ArgumentMode enum (VALUE, FILTERING)

Usage:
    >>> from plantilla.lexer import Lexer
    >>> list(Lexer("Hello {{ name }}!").tokenize())
[Token(TEXT, 'Hello ', @0), Token(VARIABLE, 'name', @6), Token(TEXT, '!', @16)]

"""

from plantilla.lexer.arguments import ArgumentLexer
from plantilla.lexer.core import Lexer
from plantilla.lexer.modes import ArgumentMode

__all__ = ["ArgumentLexer", "ArgumentMode", "Lexer"]
