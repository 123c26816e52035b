"""Typed nodes and expression values for Plantilla.

Nodes are frozen dataclasses with slots. The parser appends them to a
NodeList, which is the only mutable container and is append-only while a
parse is running.

Node Hierarchy:
Node (base)
├── Text        literal text between tags
├── Variable    {{ expression|filter }}
├── Comment     {# ... #}
└── Tag         {% name args %}, built by a tag handler

Expression values:
Value = Literal | Symbol | Operator
Argument = PositionalArgument | NamedArguments   (each carries filters)
FilterCall = name + arguments

Thread Safety:
Nodes and values are frozen (immutable). A finished NodeList is safe to
share for reading.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from plantilla.location import SourceLocation

if TYPE_CHECKING:
    from plantilla.parser import Parser

# =============================================================================
# Expression values
# =============================================================================


@dataclass(frozen=True, slots=True, eq=False)
class Literal:
    """A string, number or boolean literal.

    ``translatable`` marks strings written as ``_("...")``. Equality also
    compares the value type, so ``true``, ``1`` and ``1.0`` stay distinct.
    """

    value: str | int | float | bool
    translatable: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return (type(self.value), self.value, self.translatable) == (
            type(other.value),
            other.value,
            other.translatable,
        )

    def __hash__(self) -> int:
        return hash((type(self.value), self.value, self.translatable))


@dataclass(frozen=True, slots=True)
class Symbol:
    """A dotted name reference such as ``user.profile.name``."""

    name: str

    @property
    def parts(self) -> tuple[str, ...]:
        return tuple(self.name.split("."))


@dataclass(frozen=True, slots=True)
class Operator:
    """A comparison or boolean operator by canonical code (eq, ne, gt, and, ...)."""

    op: str


type Value = Literal | Symbol | Operator


@dataclass(frozen=True, slots=True)
class FilterCall:
    """One filter in a chain: ``|truncate:10`` or ``|date "Y-m-d"``."""

    name: str
    arguments: tuple[Argument, ...] = ()

    @property
    def positional(self) -> tuple[Value, ...]:
        """Values of the positional arguments, in order."""
        return tuple(
            arg.value for arg in self.arguments if isinstance(arg, PositionalArgument)
        )

    @property
    def named(self) -> dict[str, Value]:
        """All named arguments merged in order of appearance."""
        merged: dict[str, Value] = {}
        for arg in self.arguments:
            if isinstance(arg, NamedArguments):
                merged.update(arg.items)
        return merged


@dataclass(frozen=True, slots=True)
class PositionalArgument:
    """A bare value in an argument list, with its attached filter chain."""

    value: Value
    filters: tuple[FilterCall, ...] = ()


@dataclass(frozen=True, slots=True)
class NamedArguments:
    """A run of ``name: value`` pairs, with its attached filter chain.

    Pairs keep insertion order; ``items`` is a tuple so the record stays
    hashable. Use ``mapping`` for dict access.
    """

    items: tuple[tuple[str, Value], ...] = ()
    filters: tuple[FilterCall, ...] = ()

    @property
    def mapping(self) -> dict[str, Value]:
        return dict(self.items)

    def __getitem__(self, name: str) -> Value:
        for key, value in self.items:
            if key == name:
                return value
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self.items)

    def __len__(self) -> int:
        return len(self.items)


type Argument = PositionalArgument | NamedArguments

# =============================================================================
# Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all nodes.

    All nodes track their source location for error messages and debugging.

    """

    location: SourceLocation


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal template text, emitted verbatim."""

    content: str


@dataclass(frozen=True, slots=True)
class Variable(Node):
    """Variable interpolation.

    Template: {{ user.name|upper }}

    """

    expression: Value
    filters: tuple[FilterCall, ...] = ()


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """Comment; content is kept but never rendered."""

    content: str


@dataclass(frozen=True, slots=True)
class Tag(Node):
    """Block tag built by a tag handler.

    Template: {% name args %} ... {% endname %}

    ``args`` is the raw argument text and ``arguments`` its parsed form (empty
    when the handler does not use the expression language). ``body`` holds
    the nodes up to the first stop keyword; ``branches`` holds further bodies
    keyed by the stop keyword that opened them, e.g. ``(("else", nodes),)``.
    ``parser`` is the parser that built the tag and is excluded from
    comparison and repr.

    """

    name: str
    args: str = ""
    arguments: tuple[Argument, ...] = ()
    body: NodeList | None = None
    branches: tuple[tuple[str, NodeList], ...] = ()
    parser: Parser | None = field(default=None, repr=False, compare=False)

    def branch(self, keyword: str) -> NodeList | None:
        """Body that followed ``keyword``, or None."""
        for name, nodes in self.branches:
            if name == keyword:
                return nodes
        return None


class NodeList:
    """Ordered, append-only sequence of nodes produced by one parse."""

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Any = ()) -> None:
        self._nodes: list[Node] = list(nodes)

    def append(self, node: Node) -> None:
        self._nodes.append(node)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NodeList):
            return self._nodes == other._nodes
        if isinstance(other, (list, tuple)):
            return self._nodes == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"NodeList({self._nodes!r})"


__all__ = [
    "Argument",
    "Comment",
    "FilterCall",
    "Literal",
    "NamedArguments",
    "Node",
    "NodeList",
    "Operator",
    "PositionalArgument",
    "Symbol",
    "Tag",
    "Text",
    "Value",
    "Variable",
]
