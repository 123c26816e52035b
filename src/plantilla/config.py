"""ContextVar-based parse configuration for Plantilla.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per parse, read by the lexer and all nested sub-parses.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Through the public API
    from plantilla import parse
    nodes = parse(source, registry=registry, config=ParseConfig(trim_tags=True))

    # Direct parser usage (advanced)
    from plantilla.config import set_parse_config, reset_parse_config, ParseConfig

    set_parse_config(ParseConfig(block_start="<%", block_end="%>"))
    try:
        nodes = Parser(source, registry).parse()
    finally:
        reset_parse_config()

    # Or use the context manager
    with parse_config_context(ParseConfig(trim_tags=True)):
        nodes = Parser(source, registry).parse()

"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

from plantilla.errors import ConfigError

_DELIMITER_FIELDS = (
    "block_start",
    "block_end",
    "variable_start",
    "variable_end",
    "comment_start",
    "comment_end",
)


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Frozen dataclass ensures thread-safety (immutable after creation) and
    makes configs hashable, so compiled region patterns can be memoised
    per config.

    Note: source_file is intentionally excluded; it's per-call state,
    not configuration. It remains on the Parser instance.

    Attributes:
        block_start: Opening delimiter of block tags
        block_end: Closing delimiter of block tags
        variable_start: Opening delimiter of variable tags
        variable_end: Closing delimiter of variable tags
        comment_start: Opening delimiter of comments
        comment_end: Closing delimiter of comments
        trim_tags: Swallow one line break after block tags and comments
        max_depth: Maximum block nesting depth accepted by the parser

    """

    block_start: str = "{%"
    block_end: str = "%}"
    variable_start: str = "{{"
    variable_end: str = "}}"
    comment_start: str = "{#"
    comment_end: str = "#}"
    trim_tags: bool = False
    max_depth: int = 128

    def __post_init__(self) -> None:
        for name in _DELIMITER_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                msg = f"{name} must be a non-empty string, got {value!r}"
                raise ConfigError(msg)
        if not isinstance(self.max_depth, int) or self.max_depth < 1:
            msg = f"max_depth must be a positive integer, got {self.max_depth!r}"
            raise ConfigError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Keys are matched case-insensitively, so both ``trim_tags`` and the
        classic ``TRIM_TAGS`` / ``BLOCK_START`` option names work. Unknown
        keys are silently ignored.

        Args:
            config_dict: Dictionary with config values.

        Returns:
            New ParseConfig instance with values from dict.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "BLOCK_START": "<%",
            ...     "BLOCK_END": "%>",
            ...     "TRIM_TAGS": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.block_start
            '<%'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {}
        for key, value in config_dict.items():
            name = key.lower() if isinstance(key, str) else key
            if name in valid_fields:
                filtered[name] = value
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

# Thread-local configuration via ContextVar
_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local).

    Returns:
        The active ParseConfig for this thread/context.

    """
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ParseConfig to use within the context.

    Yields:
        None

    Example:
        >>> with parse_config_context(ParseConfig(trim_tags=True)):
        ...     nodes = Parser("{% now %}\\n", registry).parse()
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
