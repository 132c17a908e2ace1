from dataclasses import dataclass

from ..domain_types import HeapObject
from .base import Projection


@dataclass(frozen=True)
class LargeObjectRow:
    display: str
    size: int


class LargeObjectProjection(Projection):
    """Largest entries of the large-object segments; strings are shown by value."""

    def __init__(self, limit: int = 100):
        self.limit = limit
        self.entries: list[LargeObjectRow] = []

    def feed(self, obj: HeapObject) -> None:
        if obj.type is None or obj.type.is_free:
            return
        if obj.type.is_string and obj.value is not None:
            display = obj.value
        else:
            display = str(obj.type)
        self.entries.append(LargeObjectRow(display=display, size=obj.size))

    def rows(self) -> list[LargeObjectRow]:
        return sorted(self.entries, key=lambda row: row.size, reverse=True)[: self.limit]
