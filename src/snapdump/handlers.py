"""Per-type rendering overrides consulted before the default rules."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, NamedTuple

from .domain_types import ModuleInfo, Snapshot, StackFrame, StackTrace, TypeInfo

__all__ = [
    "CanHandle",
    "DEFAULT_HANDLERS",
    "GetLines",
    "HandlerRegistry",
    "TypeHandler",
    "qualified_name",
    "render_stack_trace",
]

CanHandle = Callable[[type], bool]
GetLines = Callable[[Any], "Iterable[str] | None"]


class TypeHandler(NamedTuple):
    can_handle: CanHandle
    get_lines: GetLines


@dataclass(frozen=True)
class HandlerRegistry:
    """
    Ordered, immutable list of type handlers.

    The first handler whose predicate accepts a value's type governs how that
    value is rendered. A handler returning None suppresses the value entirely.
    """

    handlers: tuple[TypeHandler, ...] = ()

    def find(self, value_type: type) -> TypeHandler | None:
        for handler in self.handlers:
            if handler.can_handle(value_type):
                return handler
        return None

    def with_handlers(self, *handlers: TypeHandler, first: bool = True) -> HandlerRegistry:
        """Return a new registry with ``handlers`` ahead of (or after) the current ones."""
        extra = tuple(TypeHandler(*h) for h in handlers)
        combined = extra + self.handlers if first else self.handlers + extra
        return HandlerRegistry(combined)


def qualified_name(cls: type) -> str:
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def render_stack_trace(frames: Iterable[StackFrame]) -> list[str]:
    """
    Render call frames one per line.

    Runs of frames with neither a signature nor a frame name collapse into a
    single "Unknown" / "{n}x Unknown" line.
    """
    lines: list[str] = []
    unknown = 0
    seen_any = False

    def flush() -> None:
        nonlocal unknown
        if unknown:
            lines.append(f"{unknown}x Unknown" if unknown > 1 else "Unknown")
            unknown = 0

    for frame in frames:
        seen_any = True
        if frame.is_unknown:
            unknown += 1
            continue
        flush()
        lines.append(f"{frame.signature or frame.frame_name} [{frame.kind}]")
    flush()

    if not seen_any:
        return ["None available"]
    return lines


def _is_subclass(*bases: type) -> CanHandle:
    return lambda value_type: isinstance(value_type, type) and issubclass(value_type, bases)


DEFAULT_HANDLERS = HandlerRegistry(
    (
        TypeHandler(_is_subclass(type), lambda value: [qualified_name(value)]),
        # Opaque root, reported section by section instead.
        TypeHandler(_is_subclass(Snapshot), lambda value: None),
        TypeHandler(_is_subclass(ModuleInfo), lambda value: [str(value)]),
        TypeHandler(_is_subclass(TypeInfo), lambda value: [str(value)]),
        TypeHandler(_is_subclass(StackTrace), render_stack_trace),
    )
)
