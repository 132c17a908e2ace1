from dataclasses import dataclass
from typing import Iterable

from ..domain_types import HeapSegment


@dataclass(frozen=True)
class MemoryRegionRow:
    heap: int
    size: int


def memory_regions(segments: Iterable[HeapSegment]) -> list[MemoryRegionRow]:
    """Total segment length per logical heap, ordered by heap number."""
    totals: dict[int, int] = {}
    for segment in segments:
        totals[segment.heap] = totals.get(segment.heap, 0) + segment.length
    return [MemoryRegionRow(heap=heap, size=size) for heap, size in sorted(totals.items())]
