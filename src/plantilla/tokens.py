"""Token definitions for the Plantilla lexers.

The region lexer produces Token objects that the parser consumes; the
argument lexer produces ArgumentToken objects that the argument builder
folds into structured arguments.

Thread Safety:
Token and ArgumentToken are frozen (immutable) and safe to share across
threads. The token type enums are inherently immutable.

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plantilla.location import SourceLocation


class TokenType(Enum):
    """Region kinds produced by the region lexer."""

    TEXT = auto()  # Literal text between tags
    BLOCK = auto()  # {% ... %}
    VARIABLE = auto()  # {{ ... }}
    COMMENT = auto()  # {# ... #}


class ArgumentTokenType(Enum):
    """Token kinds of the expression mini-language inside tags."""

    OPERATOR = auto()  # == != < > <= >= ! and or not
    BOOLEAN = auto()  # true / false
    NAMED_ARGUMENT = auto()  # name: value
    NAME = auto()  # dotted.name
    FILTER_START = auto()  # |
    FILTER_END = auto()  # ; or implied by | and end of input
    SEPARATOR = auto()  # ,
    STRING = auto()  # "..." '...' _("...")
    NUMBER = auto()  # 10, 1.5


@dataclass(frozen=True, slots=True)
class Token:
    """A region token produced by the region lexer.

    Attributes:
        type: The region kind
        value: Stripped inner content for tags, raw text for TEXT
        position: Absolute offset where the raw region starts
        end_offset: Absolute offset one past the raw region
            (includes delimiters and any line break swallowed by trim_tags)
        content_offset: Absolute offset of the first character of ``value``
        _lineno: Start line number (1-indexed)
        _col: Start column offset (1-indexed)
        _source_file: Optional template file name

    """

    type: TokenType
    value: str
    position: int
    end_offset: int
    content_offset: int
    _lineno: int = 1
    _col: int = 1
    _source_file: str | None = None
    # Cache field - excluded from repr and comparison
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from plantilla.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self.position,
            end_offset=self.end_offset,
            source_file=self._source_file,
        )
        # Safe mutation of frozen dataclass cache field (idempotent write)
        object.__setattr__(self, "_location_cache", loc)
        return loc

    @property
    def tag_name(self) -> str:
        """First word of the content (the tag name for BLOCK tokens)."""
        parts = self.value.split(None, 1)
        return parts[0] if parts else ""

    @property
    def tag_args(self) -> str:
        """Content after the tag name, or an empty string."""
        parts = self.value.split(None, 1)
        return parts[1] if len(parts) > 1 else ""

    @property
    def args_offset(self) -> int:
        """Absolute offset where ``tag_args`` starts in the source."""
        args = self.tag_args
        if not args:
            return self.content_offset + len(self.value)
        return self.content_offset + self.value.index(args, len(self.tag_name))

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, @{self.position})"


@dataclass(frozen=True, slots=True)
class ArgumentToken:
    """A token of the expression mini-language.

    ``offset`` is absolute in the template source, so errors raised while
    building arguments can point back at the right character.
    """

    type: ArgumentTokenType
    value: str
    offset: int = 0

    def __repr__(self) -> str:
        return f"ArgumentToken({self.type.name}, {self.value!r})"
