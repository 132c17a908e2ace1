"""Full diagnostic report over one snapshot, as plain text or HTML."""
from __future__ import annotations

import html as html_lib
import logging
import time
from typing import Any, Callable, Sequence

from .domain_types import Snapshot
from .dumper import dump
from .html_dumper import dump_html, dump_html_table
from .projections import (
    LargeObjectProjection,
    LargeObjectRow,
    LargeStringRow,
    MemoryRegionRow,
    PausedMethodRow,
    StringCountRow,
    StringStatsProjection,
    TypeCountRow,
    TypeSizeRow,
    TypeStatsProjection,
    memory_regions,
    paused_methods,
    thread_summaries,
)
from .snapshot_source import SnapshotSource

logger = logging.getLogger(__name__)

WriteTo = Callable[[str], None]

TOP_N = 100
NONE_AVAILABLE = "None Available"


class _Report:
    def __init__(self, write_to: WriteTo, html: bool) -> None:
        self.write_to = write_to
        self.html = html
        self.started = time.perf_counter()

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started

    def line(self, content: str = "") -> None:
        if self.html:
            content = f"<p>{html_lib.escape(content)}</p>" if content else "<br>"
        self.write_to(content)

    def value(self, value: Any, title: str) -> None:
        if isinstance(value, (list, tuple)) and not value:
            value = NONE_AVAILABLE
        if self.html:
            dump_html(value, title, write_to=self.write_to)
        else:
            dump(value, title, write_to=self.write_to)

    def table(self, rows: Sequence[Any], title: str, record_type: type) -> None:
        if not rows:
            self.value(NONE_AVAILABLE, title)
        elif self.html:
            dump_html_table(rows, title, record_type, write_to=self.write_to)
        else:
            dump(rows, title, write_to=self.write_to)


def runtime_info(snapshot: Snapshot) -> dict[str, Any]:
    runtime = snapshot.runtime
    return {
        "Version": runtime.version,
        "Implementation": runtime.implementation,
        "GcEnabled": "Yes" if runtime.gc_enabled else "No",
        "Architecture": runtime.architecture,
        "TargetPlatform": runtime.platform,
        "Bitness": "x64" if runtime.pointer_size == 8 else "x86",
        "CapturedAt": snapshot.captured_at,
        "ModuleCount": len(snapshot.modules),
        "Threads": len(snapshot.threads),
        "Heaps": snapshot.heap_count,
        "Modules": snapshot.modules,
    }


def _print_runtime_info(report: _Report, snapshot: Snapshot) -> None:
    report.value(runtime_info(snapshot), "Runtime Info")


def _print_memory_regions(report: _Report, snapshot: Snapshot) -> None:
    report.table(memory_regions(snapshot.segments), "Memory Region Information", MemoryRegionRow)


def _print_heap_analysis(report: _Report, snapshot: Snapshot) -> None:
    types = TypeStatsProjection()
    strings = StringStatsProjection()
    for obj in snapshot.objects():
        types.feed(obj)
        strings.feed(obj)

    report.table(types.top_by_size(TOP_N), f"Top {TOP_N} Types (By Size)", TypeSizeRow)
    report.line()
    report.table(types.top_by_count(TOP_N), f"Top {TOP_N} Types (By Count)", TypeCountRow)
    report.line()
    report.table(strings.most_common(TOP_N), f"Top {TOP_N} Most Common Strings", StringCountRow)
    report.line()
    report.table(strings.largest(TOP_N), f"Top {TOP_N} Largest Strings", LargeStringRow)
    report.line()
    report.value(strings.summary(), "Total String Storage Space")
    report.line()

    large = LargeObjectProjection(limit=TOP_N)
    for segment in snapshot.segments:
        if segment.is_large_object:
            for obj in segment.objects:
                large.feed(obj)
    report.table(large.rows(), f"Top {TOP_N} Largest Large-Object Entries", LargeObjectRow)


def _print_paused_methods(report: _Report, snapshot: Snapshot) -> None:
    report.table(paused_methods(snapshot.threads), "Paused Methods", PausedMethodRow)


def _print_threads(report: _Report, snapshot: Snapshot, only_with_exception: bool) -> None:
    title = "Threads with Exceptions" if only_with_exception else "All Threads"
    report.value(thread_summaries(snapshot.threads, only_with_exception), title)


def generate(source: SnapshotSource, write_to: WriteTo, html: bool) -> None:
    """
    Load a snapshot and write every report section to ``write_to``.

    Each section is followed by its cumulative timing line. Errors raised while
    loading or rendering propagate to the caller.
    """
    report = _Report(write_to, html)
    report.line(f"[{report.elapsed:0.2f}s] Loading: {source.location}")
    snapshot = source.load()
    report.line(f"[{report.elapsed:0.2f}s] Loaded")
    report.line()

    sections: list[tuple[str, Callable[[], None]]] = [
        ("runtime", lambda: _print_runtime_info(report, snapshot)),
        ("memory regions", lambda: _print_memory_regions(report, snapshot)),
        ("heap", lambda: _print_heap_analysis(report, snapshot)),
        ("paused methods", lambda: _print_paused_methods(report, snapshot)),
        ("threads", lambda: _print_threads(report, snapshot, only_with_exception=False)),
        ("thread exceptions", lambda: _print_threads(report, snapshot, only_with_exception=True)),
    ]
    for name, section in sections:
        logger.debug("Rendering %s section", name)
        section()
        report.line(f"^ Done after {report.elapsed:0.2f}s")
        report.line()

    report.line(f"[{report.elapsed:0.2f}s] Done!")


def generate_summary_html(source: SnapshotSource) -> str:
    lines: list[str] = []
    generate(source, lines.append, html=True)
    return "\n".join(lines) + "\n"


def write_summary_to_console(source: SnapshotSource, write_to: WriteTo = print) -> None:
    generate(source, write_to, html=False)
