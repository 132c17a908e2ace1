from .analysis import generate, generate_summary_html, write_summary_to_console
from .domain_types import (
    ExceptionRecord,
    HeapObject,
    HeapSegment,
    ModuleInfo,
    RuntimeInfo,
    Snapshot,
    StackFrame,
    StackTrace,
    ThreadDetails,
    ThreadRecord,
    TypeInfo,
)
from .dumper import dump, render_value
from .handlers import DEFAULT_HANDLERS, HandlerRegistry, TypeHandler, render_stack_trace
from .html_dumper import dump_html, dump_html_table
from .http_snapshot_source import HttpSnapshotSource
from .live_capture import LiveProcessSource, capture_snapshot
from .snapshot_source import FakeSnapshotSource, FileSnapshotSource, SnapshotLoadError, SnapshotSource

__all__ = [
    "DEFAULT_HANDLERS",
    "ExceptionRecord",
    "FakeSnapshotSource",
    "FileSnapshotSource",
    "HandlerRegistry",
    "HeapObject",
    "HeapSegment",
    "HttpSnapshotSource",
    "LiveProcessSource",
    "ModuleInfo",
    "RuntimeInfo",
    "Snapshot",
    "SnapshotLoadError",
    "SnapshotSource",
    "StackFrame",
    "StackTrace",
    "ThreadDetails",
    "ThreadRecord",
    "TypeHandler",
    "TypeInfo",
    "capture_snapshot",
    "dump",
    "dump_html",
    "dump_html_table",
    "generate",
    "generate_summary_html",
    "render_stack_trace",
    "render_value",
    "write_summary_to_console",
]
