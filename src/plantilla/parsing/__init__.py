"""Parsing helpers for Plantilla.

Provides the argument structure builder used by the parser and by tag
handlers:
- build_arguments: fold argument tokens into structured arguments
- parse_arguments: scan and build in one call
"""

from plantilla.parsing.arguments import build_arguments, parse_arguments

__all__ = ["build_arguments", "parse_arguments"]
