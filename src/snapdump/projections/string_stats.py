from collections import Counter
from dataclasses import dataclass

from ..domain_types import HeapObject
from .base import Projection

MAX_DISPLAYED_STRING_LENGTH = 10_000


@dataclass(frozen=True)
class StringCountRow:
    count: int
    value: str


@dataclass(frozen=True)
class LargeStringRow:
    count: int
    size: str
    value: str


class StringStatsProjection(Projection):
    def __init__(self):
        self.counts: Counter = Counter()
        self.object_count = 0
        self.total_size = 0

    def feed(self, obj: HeapObject) -> None:
        if obj.type is None or not obj.type.is_string:
            return
        self.object_count += 1
        if obj.value is None:
            # Unreadable contents still count as a string object
            return
        self.total_size += obj.size
        self.counts[obj.value] += 1

    def rows(self) -> list[StringCountRow]:
        return self.most_common(len(self.counts))

    def most_common(self, limit: int) -> list[StringCountRow]:
        return [StringCountRow(count=c, value=text) for text, c in self.counts.most_common(limit)]

    def largest(self, limit: int) -> list[LargeStringRow]:
        ranked = sorted(self.counts.items(), key=lambda item: len(item[0]), reverse=True)
        out = []
        for text, c in ranked[:limit]:
            shown = text if len(text) <= MAX_DISPLAYED_STRING_LENGTH else text[:MAX_DISPLAYED_STRING_LENGTH] + "..."
            out.append(LargeStringRow(count=c, size=f"{len(text):,}", value=shown))
        return out

    def summary(self) -> str:
        megabytes = self.total_size / 1024.0 / 1024.0
        return (
            f'Overall {self.object_count:,} "str" objects take up '
            f"{self.total_size:,} bytes ({megabytes:,.2f} MB)"
        )
