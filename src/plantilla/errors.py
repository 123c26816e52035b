"""Exception classes for Plantilla.

Provides standardized exceptions for error handling throughout Plantilla.

Template errors (TemplateSyntaxError and subclasses) are caused by malformed
template source and always carry the source file and absolute offset so the
embedding application can map them back to a line and column. ConfigError and
TokenStreamClosedError are programmer errors and never reach template authors.
"""

from __future__ import annotations


class PlantillaError(Exception):
    """Base exception for all Plantilla errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(PlantillaError, ValueError):
    """Invalid parse configuration (e.g. an empty delimiter)."""

    pass


class TokenStreamClosedError(PlantillaError, RuntimeError):
    """Raised when feeding a token stream that has already been closed."""

    pass


class TemplateSyntaxError(PlantillaError):
    """Error in template source.

    Raised by the lexers and the parser when template source is invalid.
    """

    def __init__(
        self,
        message: str,
        position: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize syntax error with optional location.

        Args:
            message: Error description
            position: Absolute offset into the template source
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Template file name (optional)
        """
        self.message = message
        self.position = position
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        # Build formatted message
        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        elif position is not None:
            location = location.rstrip(":") + f"@{position}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class UnterminatedBlockError(TemplateSyntaxError):
    """Token stream ran out while a closing keyword was still expected."""

    def __init__(
        self,
        keyword: str,
        position: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.keyword = keyword
        super().__init__(
            f"Unclosed tag, expecting '{keyword}'",
            position=position,
            lineno=lineno,
            col_offset=col_offset,
            source_file=source_file,
        )


class UnknownTagError(TemplateSyntaxError):
    """No tag handler is registered for a block tag name."""

    def __init__(
        self,
        name: str,
        position: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.name = name
        super().__init__(
            f"Unknown tag '{name}'",
            position=position,
            lineno=lineno,
            col_offset=col_offset,
            source_file=source_file,
        )


class ExpressionSyntaxError(TemplateSyntaxError):
    """Invalid expression inside a block or variable tag.

    Raised by the argument lexer on an unrecognized character and by the
    argument builder on structurally invalid filter chains.
    """

    pass


class NestingTooDeepError(TemplateSyntaxError):
    """Block tags are nested deeper than ParseConfig.max_depth allows."""

    def __init__(
        self,
        max_depth: int,
        position: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"Block nesting exceeds maximum depth of {max_depth}",
            position=position,
            lineno=lineno,
            col_offset=col_offset,
            source_file=source_file,
        )
