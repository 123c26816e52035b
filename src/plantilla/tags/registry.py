"""Tag registry for handler lookup and registration.

The registry maps tag names to their handlers and is the single capability
the parser uses to build tag nodes. It is injected into each Parser, never
looked up globally.

Thread Safety:
TagRegistry is immutable after creation. Safe to share.
Use TagRegistryBuilder for mutable construction.

Example:
    >>> builder = TagRegistryBuilder()
    >>> builder.register(IfTag())
    >>> builder.register(ForTag())
    >>> registry = builder.build()
    >>> nodes = Parser(source, registry).parse()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from plantilla.errors import UnknownTagError
from plantilla.utils.logger import get_logger

if TYPE_CHECKING:
    from plantilla.location import SourceLocation
    from plantilla.nodes import Node
    from plantilla.parser import Parser
    from plantilla.tags.protocol import TagHandler

logger = get_logger(__name__)


class TagRegistry:
    """Immutable registry of tag handlers.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_handlers", "_by_name")

    def __init__(
        self,
        handlers: tuple[TagHandler, ...] = (),
        by_name: dict[str, TagHandler] | None = None,
    ) -> None:
        """Initialize registry with pre-built mappings.

        Use TagRegistryBuilder to create instances. ``TagRegistry()`` is the
        empty registry, in which every tag is unknown.
        """
        self._handlers = handlers
        self._by_name = dict(by_name or {})

    def get(self, name: str) -> TagHandler | None:
        """Get handler for tag name, or None if not registered."""
        return self._by_name.get(name)

    def resolve(
        self,
        name: str,
        args: str,
        parser: Parser,
        location: SourceLocation,
    ) -> Node:
        """Build the node for a block tag.

        Args:
            name: Tag name
            args: Raw argument text after the name
            parser: The running parser, handed to the handler
            location: Source location of the tag

        Returns:
            The node built by the registered handler

        Raises:
            UnknownTagError: If no handler is registered for name
        """
        handler = self._by_name.get(name)
        if handler is None:
            raise UnknownTagError(
                name,
                position=location.offset,
                lineno=location.lineno,
                col_offset=location.col_offset,
                source_file=location.source_file,
            )
        logger.debug("Resolving tag %r with %s", name, type(handler).__name__)
        return handler.parse(name, args, parser, location)

    def has(self, name: str) -> bool:
        """Check if tag name is registered."""
        return name in self._by_name

    @property
    def names(self) -> frozenset[str]:
        """Get all registered tag names."""
        return frozenset(self._by_name.keys())

    @property
    def handlers(self) -> tuple[TagHandler, ...]:
        """Get all registered handlers."""
        return self._handlers

    def __contains__(self, name: str) -> bool:
        """Support 'name in registry' syntax."""
        return self.has(name)

    def __len__(self) -> int:
        """Number of registered tag names."""
        return len(self._by_name)


class TagRegistryBuilder:
    """Mutable builder for TagRegistry.

    Use this to register handlers, then call build() to create
    an immutable registry.
    """

    __slots__ = ("_handlers", "_by_name")

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._handlers: list[TagHandler] = []
        self._by_name: dict[str, TagHandler] = {}

    def register(self, handler: TagHandler) -> TagRegistryBuilder:
        """Register a tag handler.

        Args:
            handler: Handler implementing TagHandler protocol

        Returns:
            Self for chaining

        Raises:
            TypeError: If handler lacks ``names`` or a callable ``parse``
            ValueError: If a handler name conflicts with an existing registration
        """
        if not hasattr(handler, "names"):
            msg = f"Handler {type(handler).__name__} missing 'names' attribute"
            raise TypeError(msg)

        if not callable(getattr(handler, "parse", None)):
            msg = f"Handler {type(handler).__name__} missing 'parse' method"
            raise TypeError(msg)

        for name in handler.names:
            if name in self._by_name:
                existing = self._by_name[name]
                msg = f"Tag '{name}' already registered by {type(existing).__name__}"
                raise ValueError(msg)
            self._by_name[name] = handler

        self._handlers.append(handler)
        return self

    def register_all(self, handlers: list[TagHandler]) -> TagRegistryBuilder:
        """Register multiple handlers.

        Args:
            handlers: List of handlers to register

        Returns:
            Self for chaining
        """
        for handler in handlers:
            self.register(handler)
        return self

    def build(self) -> TagRegistry:
        """Build immutable registry from registered handlers."""
        return TagRegistry(
            handlers=tuple(self._handlers),
            by_name=dict(self._by_name),
        )

    def __len__(self) -> int:
        """Number of registered handlers."""
        return len(self._handlers)
