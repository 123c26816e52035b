"""Argument lexer operating modes.

This module defines the two states of the expression mini-language scanner.
"""

from __future__ import annotations

from enum import Enum, auto


class ArgumentMode(Enum):
    """Argument lexer operating modes.

    The lexer switches between modes on pipes and filter terminators:
    - VALUE: Scanning an expression or argument list
    - FILTERING: Inside a filter chain, after ``|`` and before ``;``

    """

    VALUE = auto()
    FILTERING = auto()
