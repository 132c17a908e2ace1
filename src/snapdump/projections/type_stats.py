from dataclasses import dataclass

from ..domain_types import HeapObject
from .base import Projection


@dataclass(frozen=True)
class TypeSizeRow:
    bytes: int
    count: int
    type: str


@dataclass(frozen=True)
class TypeCountRow:
    count: int
    bytes: int
    type: str


class TypeStatsProjection(Projection):
    def __init__(self):
        # type name -> [bytes, count]
        self.totals: dict[str, list[int]] = {}

    def feed(self, obj: HeapObject) -> None:
        if obj.type is None or obj.type.name is None:
            # Types generated at runtime may have no name
            return
        entry = self.totals.setdefault(obj.type.name, [0, 0])
        entry[0] += obj.size
        entry[1] += 1

    def rows(self) -> list[TypeSizeRow]:
        return self.top_by_size(len(self.totals))

    def top_by_size(self, limit: int) -> list[TypeSizeRow]:
        ranked = sorted(self.totals.items(), key=lambda item: item[1][0], reverse=True)
        return [TypeSizeRow(bytes=b, count=c, type=name) for name, (b, c) in ranked[:limit]]

    def top_by_count(self, limit: int) -> list[TypeCountRow]:
        ranked = sorted(self.totals.items(), key=lambda item: item[1][1], reverse=True)
        return [TypeCountRow(count=c, bytes=b, type=name) for name, (b, c) in ranked[:limit]]
