from .base import Projection
from .large_objects import LargeObjectProjection, LargeObjectRow
from .memory_regions import MemoryRegionRow, memory_regions
from .paused_methods import PausedMethodRow, paused_methods
from .string_stats import LargeStringRow, StringCountRow, StringStatsProjection
from .threads import ThreadSummary, ThreadSummaryDetails, thread_summaries
from .type_stats import TypeCountRow, TypeSizeRow, TypeStatsProjection

__all__ = [
    "LargeObjectProjection",
    "LargeObjectRow",
    "LargeStringRow",
    "MemoryRegionRow",
    "PausedMethodRow",
    "Projection",
    "StringCountRow",
    "StringStatsProjection",
    "ThreadSummary",
    "ThreadSummaryDetails",
    "TypeCountRow",
    "TypeSizeRow",
    "TypeStatsProjection",
    "memory_regions",
    "paused_methods",
    "thread_summaries",
]
