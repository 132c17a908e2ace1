"""
Structured value dumper.

Turns any value into indented text lines by walking it with generic
introspection:

- ``None`` renders as ``null``
- a value already being rendered further up renders as ``*Circular Reference*``
- registered type handlers override the rules below, or suppress the value
- scalars render as a single line, integers with thousands separators
- iterables render one entry per element, ``[]`` when empty
- everything else renders attribute by attribute, ``{}`` when it has none

Lines are produced lazily; nothing is held beyond the two-line lookahead
needed to decide whether a child fits on its parent's line.
"""
from __future__ import annotations

import itertools
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Iterable, Iterator

from .handlers import DEFAULT_HANDLERS, HandlerRegistry
from .introspection import is_record, value_attributes

__all__ = [
    "SCALAR_TYPES",
    "dump",
    "format_scalar",
    "header_line",
    "is_scalar",
    "render_value",
]

SCALAR_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    Decimal,
    str,
    bytes,
    bytearray,
    Enum,
    date,
    time,
    timedelta,
)

INDENT = "  "


def is_scalar(value: Any) -> bool:
    return isinstance(value, SCALAR_TYPES)


def format_scalar(value: Any) -> str:
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, int) and not isinstance(value, bool):
        return f"{value:,}"
    return str(value)


def _indentation(depth: int) -> str:
    return INDENT * depth


def _peek(lines: Iterable[str]) -> tuple[list[str], Iterator[str]]:
    """Pull up to two lines so single-line output can be told apart from blocks."""
    rest = iter(lines)
    return list(itertools.islice(rest, 2)), rest


def render_value(
    value: Any,
    ancestors: tuple[Any, ...] = (),
    handlers: HandlerRegistry | None = None,
) -> Iterator[str] | None:
    """
    Render ``value`` as lines indented to ``len(ancestors)`` levels.

    Args:
        value: Anything.
        ancestors: Composite and sequence values enclosing ``value``, outermost first.
        handlers: Type handler registry; defaults to DEFAULT_HANDLERS.

    Returns:
        An iterator of lines, or None when a handler suppressed the value.
    """
    if handlers is None:
        handlers = DEFAULT_HANDLERS
    indent = _indentation(len(ancestors))

    if value is None:
        return iter([f"{indent}null"])

    # Identity, not equality. Scalars never enter the ancestor chain.
    if not is_scalar(value) and any(value is ancestor for ancestor in ancestors):
        return iter([f"{indent}*Circular Reference*"])

    handler = handlers.find(type(value))
    if handler is not None:
        lines = handler.get_lines(value)
        if lines is None:
            return None
        return (f"{indent}{line}" for line in lines)

    if is_scalar(value):
        return iter([f"{indent}{format_scalar(value)}"])

    if not is_record(value) and isinstance(value, Iterable):
        return _render_sequence(value, ancestors, handlers)

    return _render_composite(value, ancestors, handlers)


def _render_sequence(value: Iterable[Any], ancestors: tuple[Any, ...], handlers: HandlerRegistry) -> Iterator[str]:
    indent = _indentation(len(ancestors))
    children = (*ancestors, value)
    emitted = False
    for item in value:
        lines = render_value(item, children, handlers)
        if lines is None:
            continue
        head, rest = _peek(lines)
        if len(head) == 1:
            yield f"{indent}{head[0].strip()}"
        else:
            if emitted:
                yield ""
            yield from head
            yield from rest
        emitted = True

    if not emitted:
        yield f"{indent}[]"


def _render_composite(value: Any, ancestors: tuple[Any, ...], handlers: HandlerRegistry) -> Iterator[str]:
    indent = _indentation(len(ancestors))
    attributes = value_attributes(value)
    if not attributes:
        yield f"{indent}{{}}"
        return

    children = (*ancestors, value)
    for name, member in attributes:
        lines = render_value(member, children, handlers)
        if lines is None:
            continue
        head, rest = _peek(lines)
        if len(head) == 1:
            yield f"{indent}{name}: {head[0].strip()}"
        else:
            yield f"{indent}{name}:"
            yield from head
            yield from rest


def header_line(title: str) -> str:
    return f"= {title} ========----------------------"


def dump(
    value: Any,
    title: str,
    handlers: HandlerRegistry | None = None,
    write_to: Callable[[str], None] | None = None,
) -> None:
    """Write a titled plain-text rendering of ``value``, one sink call per line."""
    write_to = write_to or print
    write_to(header_line(title))
    write_to("")
    for line in render_value(value, (), handlers) or ():
        write_to(line)
