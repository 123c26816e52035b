"""Source location tracking for error messages and debugging.

Provides SourceLocation dataclass for tracking positions in template source.
Used throughout Plantilla for error messages, nodes, and debugging.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    Line and column are 1-indexed. ``offset`` is the absolute position of the
    first character in the template source, ``end_offset`` one past the last.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in source
        end_offset: Absolute end offset in source
        source_file: Template file name (optional)

    Examples:
            >>> loc = SourceLocation(lineno=1, col_offset=7, offset=6)
            >>> str(loc)
            '1:7'

            >>> loc = SourceLocation(3, 1, 40, 52, "page.html")
            >>> str(loc)
            'page.html:3:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "page.html:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(
        cls, source: str, offset: int, source_file: str | None = None
    ) -> SourceLocation:
        """Compute the line and column of an absolute offset in source."""
        offset = max(0, min(offset, len(source)))
        lineno = source.count("\n", 0, offset) + 1
        col = offset - (source.rfind("\n", 0, offset) + 1) + 1
        return cls(
            lineno=lineno,
            col_offset=col,
            offset=offset,
            end_offset=offset,
            source_file=source_file,
        )

