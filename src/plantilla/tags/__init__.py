"""Block tag extension points.

Concrete tags live in the embedding application; this package only defines
how the parser reaches them.

- TagHandler: protocol a tag implementation satisfies
- TagRegistry: immutable name -> handler map with resolve()
- TagRegistryBuilder: mutable builder for TagRegistry
"""

from plantilla.tags.protocol import TagHandler
from plantilla.tags.registry import TagRegistry, TagRegistryBuilder

__all__ = ["TagHandler", "TagRegistry", "TagRegistryBuilder"]
