"""Node visitor for consumers of parsed templates.

Renderers and analysis tools walk the NodeList the parser produces. This
module gives them match-based dispatch over the node variants and an
iterator over every node, descending into tag bodies and branches.

Example, collecting every variable expression:

    class VariableCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.names: list[str] = []

        def visit_variable(self, node: Variable) -> None:
            if isinstance(node.expression, Symbol):
                self.names.append(node.expression.name)

    collector = VariableCollector()
    collector.visit_all(nodes)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. walk() is pure.

"""

from collections.abc import Iterable, Iterator

from plantilla.nodes import Comment, Node, Tag, Text, Variable


class BaseVisitor[T]:
    """Base node visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Tag bodies and
    branches are walked automatically after the ``visit_*`` call.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_all(self, nodes: Iterable[Node]) -> list[T]:
        """Visit each node of a NodeList in order."""
        return [self.visit(node) for node in nodes]

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_variable(self, node: Variable) -> T:
        return self.visit_default(node)

    def visit_comment(self, node: Comment) -> T:
        return self.visit_default(node)

    def visit_tag(self, node: Tag) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        match node:
            case Text():
                return self.visit_text(node)
            case Variable():
                return self.visit_variable(node)
            case Comment():
                return self.visit_comment(node)
            case Tag():
                return self.visit_tag(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        for child in _children(node):
            self.visit(child)


def walk(nodes: Iterable[Node]) -> Iterator[Node]:
    """Yield every node depth-first, parents before their children."""
    for node in nodes:
        yield node
        yield from walk(_children(node))


def _children(node: Node) -> Iterator[Node]:
    match node:
        case Tag(body=body, branches=branches):
            if body is not None:
                yield from body
            for _, branch in branches:
                yield from branch
        case _:
            pass  # Leaf nodes: no children


__all__ = ["BaseVisitor", "walk"]
