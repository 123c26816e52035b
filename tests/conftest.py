"""Shared tag handlers and fixtures.

The library ships no concrete tags, so tests register small handlers that
exercise each way a tag can use the parser: leaf tags, tags with one or more
bodies, tags that skip their body, and tags that use per-parse state.
"""

import pytest

from plantilla import Tag, TagRegistry, TagRegistryBuilder, TemplateSyntaxError


class NowTag:
    """Leaf tag: {% now "Y-m-d" %}."""

    names = ("now",)

    def parse(self, name, args, parser, location):  # type: ignore[no-untyped-def]
        return Tag(location, name, args, parser.parse_arguments(args), parser=parser)


class IfTag:
    """{% if cond %} ... [{% else %} ...] {% endif %}."""

    names = ("if",)

    def parse(self, name, args, parser, location):  # type: ignore[no-untyped-def]
        arguments = parser.parse_arguments(args)
        body = parser.parse(("endif", "else"))
        branches = ()
        if parser.stop_token.tag_name == "else":
            branches = (("else", parser.parse(("endif",))),)
        return Tag(
            location, name, args, arguments, body=body, branches=branches, parser=parser
        )


class ForTag:
    """{% for item in items %} ... [{% empty %} ...] {% endfor %}."""

    names = ("for", "foreach")

    def parse(self, name, args, parser, location):  # type: ignore[no-untyped-def]
        body = parser.parse(("endfor", "empty"))
        branches = ()
        if parser.stop_token.tag_name == "empty":
            branches = (("empty", parser.parse(("endfor",))),)
        return Tag(location, name, args, body=body, branches=branches, parser=parser)


class CommentTag:
    """{% comment %} ... {% endcomment %}; the body is skipped."""

    names = ("comment",)

    def parse(self, name, args, parser, location):  # type: ignore[no-untyped-def]
        parser.skip_to("endcomment")
        return Tag(location, name, args, parser=parser)


class BlockTag:
    """{% block name %} ... {% endblock %}; records itself in parser.storage."""

    names = ("block",)

    def parse(self, name, args, parser, location):  # type: ignore[no-untyped-def]
        body = parser.parse(("endblock",))
        node = Tag(location, name, args, body=body, parser=parser)
        parser.storage.setdefault("blocks", {})[args] = node
        return node


class WithTag:
    """{% with expr %} ... {% endwith %}; arguments are built after the body."""

    names = ("with",)

    def parse(self, name, args, parser, location):  # type: ignore[no-untyped-def]
        body = parser.parse(("endwith",))
        arguments = parser.parse_arguments(args)
        return Tag(location, name, args, arguments, body=body, parser=parser)


class ExtendsTag:
    """{% extends "base.html" %}; must be the first node of a template."""

    names = ("extends",)

    def parse(self, name, args, parser, location):  # type: ignore[no-untyped-def]
        if not parser.first:
            raise TemplateSyntaxError(
                "extends must be the first tag in a template",
                position=location.offset,
                source_file=location.source_file,
            )
        return Tag(location, name, args, parser.parse_arguments(args), parser=parser)


@pytest.fixture
def registry() -> TagRegistry:
    """Registry with every test handler."""
    return (
        TagRegistryBuilder()
        .register_all(
            [
                NowTag(),
                IfTag(),
                ForTag(),
                CommentTag(),
                BlockTag(),
                ExtendsTag(),
                WithTag(),
            ]
        )
        .build()
    )
