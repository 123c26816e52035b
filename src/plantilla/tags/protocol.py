"""TagHandler protocol for block tags.

Block tags are the extension mechanism of the template language. The parser
knows nothing about concrete tags: for every ``{% name args %}`` it asks the
injected TagRegistry to resolve ``name``, and the registered handler builds
the node. Handlers that own a body call back into the parser with their stop
keywords.

Thread Safety:
Handlers must be stateless. All per-parse state lives on the Parser
(``parser.storage``) or in the returned node.

Example:
    >>> class IfTag:
    ...     names = ("if",)
    ...
    ...     def parse(self, name, args, parser, location):
    ...         body = parser.parse(("else", "endif"))
    ...         branches = ()
    ...         if parser.stop_token.tag_name == "else":
    ...             branches = (("else", parser.parse(("endif",))),)
    ...         return Tag(location, name, args, parser.parse_arguments(args),
    ...                    body=body, branches=branches, parser=parser)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from plantilla.location import SourceLocation
    from plantilla.nodes import Node
    from plantilla.parser import Parser


@runtime_checkable
class TagHandler(Protocol):
    """Protocol for block tag implementations.

    Attributes:
        names: Tuple of tag names this handler responds to.
               Example: ("if",) or ("for", "foreach")
    """

    names: ClassVar[tuple[str, ...]]
    """Tag names this handler responds to."""

    def parse(
        self,
        name: str,
        args: str,
        parser: Parser,
        location: SourceLocation,
    ) -> Node:
        """Build the node for one occurrence of the tag.

        Args:
            name: The tag name used (one of ``names``)
            args: Raw argument text after the name (may be empty)
            parser: The running parser; call ``parser.parse(stop)`` to
                consume a body and ``parser.parse_arguments(args)`` to use
                the expression language; error offsets point into this tag
                whether arguments are built before or after the body
            location: Source location of the tag for error messages

        Returns:
            The node to append to the current node list
        """
        ...
