"""Argument structure builder for the expression mini-language.

Folds the flat ArgumentToken list of one tag into an ordered tuple of
Argument values. Values go to the "current target": normally the top-level
result, or the filter buffer between FILTER_START and FILTER_END. A closed,
non-empty filter buffer becomes one FilterCall attached to the top-level
argument written just before the pipe, never to the whole list.

Example:
    >>> parse_arguments("x|upper|truncate:10")
    (PositionalArgument(value=Symbol(name='x'),
        filters=(FilterCall(name='upper', arguments=()),
                 FilterCall(name='truncate', arguments=(PositionalArgument(
                     value=Literal(value=10, translatable=False), filters=()),)))),)

Thread Safety:
All functions are pure.

"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Sequence

from plantilla.errors import ExpressionSyntaxError
from plantilla.lexer.arguments import ArgumentLexer
from plantilla.nodes import (
    Argument,
    FilterCall,
    Literal,
    NamedArguments,
    Operator,
    PositionalArgument,
    Symbol,
    Value,
)
from plantilla.tokens import ArgumentToken, ArgumentTokenType

_ESCAPE = re.compile(r"\\(.)", re.DOTALL)


def parse_arguments(
    source: str,
    base_offset: int = 0,
    source_file: str | None = None,
) -> tuple[Argument, ...]:
    """Scan and build the arguments of one tag in a single call.

    Args:
        source: Expression text
        base_offset: Absolute offset of source[0] in the template
        source_file: Optional template file name for error messages

    Returns:
        Ordered tuple of PositionalArgument / NamedArguments

    Raises:
        ExpressionSyntaxError: If the text is not a valid expression
    """
    tokens = ArgumentLexer(source, base_offset, source_file).tokenize()
    return build_arguments(tokens, source_file=source_file)


def build_arguments(
    tokens: Sequence[ArgumentToken],
    source_file: str | None = None,
) -> tuple[Argument, ...]:
    """Build structured arguments from a flat argument token list.

    Args:
        tokens: Output of ArgumentLexer.tokenize()
        source_file: Optional template file name for error messages

    Returns:
        Ordered tuple of PositionalArgument / NamedArguments
    """
    result: list[Argument] = []
    filter_buffer: list[Argument] = []
    target = result

    for token in tokens:
        match token.type:
            case ArgumentTokenType.FILTER_START:
                filter_buffer = []
                target = filter_buffer
            case ArgumentTokenType.FILTER_END:
                if filter_buffer:
                    if not result:
                        raise ExpressionSyntaxError(
                            "Filter has no value to apply to",
                            position=token.offset,
                            source_file=source_file,
                        )
                    call = _make_filter_call(filter_buffer, token, source_file)
                    last = result[-1]
                    result[-1] = dataclasses.replace(last, filters=last.filters + (call,))
                filter_buffer = []
                target = result
            case ArgumentTokenType.BOOLEAN:
                target.append(PositionalArgument(Literal(token.value == "true")))
            case ArgumentTokenType.NAME:
                target.append(PositionalArgument(Symbol(token.value)))
            case ArgumentTokenType.NUMBER:
                target.append(PositionalArgument(Literal(_to_number(token.value))))
            case ArgumentTokenType.STRING:
                target.append(PositionalArgument(_to_string(token.value)))
            case ArgumentTokenType.OPERATOR:
                target.append(PositionalArgument(Operator(token.value)))
            case ArgumentTokenType.NAMED_ARGUMENT:
                _merge_named(target, token, source_file)
            case ArgumentTokenType.SEPARATOR:
                pass

    return tuple(result)


def _merge_named(
    target: list[Argument], token: ArgumentToken, source_file: str | None
) -> None:
    """Add a ``name: value`` pair to the NamedArguments record at the end of target.

    A new record is started unless the previous element is a record without
    filters. A repeated name replaces the earlier value in place.
    """
    raw = token.value
    colon = raw.index(":")
    name = raw[:colon].strip()
    rest = raw[colon + 1 :]
    value_text = rest.strip()
    value_offset = token.offset + colon + 1 + (len(rest) - len(rest.lstrip()))
    value = _single_value(value_text, value_offset, source_file)

    last = target[-1] if target else None
    if isinstance(last, NamedArguments) and not last.filters:
        items = list(last.items)
        for i, (key, _) in enumerate(items):
            if key == name:
                items[i] = (name, value)
                break
        else:
            items.append((name, value))
        target[-1] = NamedArguments(tuple(items))
    else:
        target.append(NamedArguments(((name, value),)))


def _single_value(source: str, offset: int, source_file: str | None) -> Value:
    """Build the value side of a named argument, which is exactly one value."""
    arguments = parse_arguments(source, offset, source_file)
    if len(arguments) != 1 or not isinstance(arguments[0], PositionalArgument):
        raise ExpressionSyntaxError(
            f"Invalid named argument value {source!r}",
            position=offset,
            source_file=source_file,
        )
    return arguments[0].value


def _make_filter_call(
    buffer: list[Argument], token: ArgumentToken, source_file: str | None
) -> FilterCall:
    """Turn a filter buffer into a FilterCall.

    ``upper``            -> upper()
    ``date "Y", tz: x``  -> date("Y", tz=x)
    ``truncate:10``      -> truncate(10); the first pair of a leading
                            NamedArguments record is the name and first argument
    """
    head, rest = buffer[0], tuple(buffer[1:])
    match head:
        case PositionalArgument(value=Symbol(name=name), filters=()):
            return FilterCall(name, rest)
        case NamedArguments(items=((name, first), *named)):
            arguments: tuple[Argument, ...] = (PositionalArgument(first),)
            if named:
                arguments += (NamedArguments(tuple(named)),)
            return FilterCall(name, arguments + rest)
        case _:
            raise ExpressionSyntaxError(
                "Expected a filter name after '|'",
                position=token.offset,
                source_file=source_file,
            )


def _to_number(text: str) -> int | float:
    if "." in text:
        return float(text)
    return int(text)


def _to_string(text: str) -> Literal:
    """Strip quotes (and a ``_( )`` wrapper) and resolve backslash escapes."""
    translatable = text.startswith("_(")
    if translatable:
        text = text[2:-1].strip()
    return Literal(_ESCAPE.sub(r"\1", text[1:-1]), translatable=translatable)
