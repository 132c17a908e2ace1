"""Snapshot of the running interpreter."""
from __future__ import annotations

import gc
import logging
import platform
import struct
import sys
import threading
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from types import FrameType, TracebackType
from typing import Any

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
from .handlers import qualified_name

logger = logging.getLogger(__name__)

# Objects at least this big are reported in the large-object segment of their generation.
LARGE_OBJECT_THRESHOLD = 85_000

GC_GENERATIONS = 3


def _frame_signature(summary: traceback.FrameSummary) -> str:
    return f"{summary.name} ({summary.filename}:{summary.lineno})"


def _stack_from_summaries(summaries: traceback.StackSummary) -> StackTrace:
    # Innermost frame first
    return StackTrace(
        StackFrame(signature=_frame_signature(s) if s.name else None) for s in reversed(summaries)
    )


def _stack_from_frame(frame: FrameType | None) -> StackTrace:
    if frame is None:
        return StackTrace()
    return _stack_from_summaries(traceback.extract_stack(frame))


def _stack_from_traceback(tb: TracebackType | None) -> StackTrace:
    if tb is None:
        return StackTrace()
    return _stack_from_summaries(traceback.extract_tb(tb))


def _exception_record(exc: BaseException | None, seen: set[int] | None = None) -> ExceptionRecord | None:
    if exc is None:
        return None
    seen = seen if seen is not None else set()
    if id(exc) in seen:
        return None
    seen.add(id(exc))
    inner = exc.__cause__
    if inner is None and not exc.__suppress_context__:
        inner = exc.__context__
    return ExceptionRecord(
        type_name=qualified_name(type(exc)),
        message=str(exc),
        address=id(exc),
        inner=_exception_record(inner, seen),
        stack_trace=_stack_from_traceback(exc.__traceback__),
    )


def _heap_object(obj: Any) -> HeapObject:
    is_string = isinstance(obj, str)
    return HeapObject(
        address=id(obj),
        size=sys.getsizeof(obj, 0),
        type=TypeInfo(name=qualified_name(type(obj)), is_string=is_string),
        value=obj if is_string else None,
    )


def _segment(generation: int, objects: list[HeapObject], large: bool) -> HeapSegment:
    return HeapSegment(
        heap=generation,
        start=min((o.address for o in objects), default=0),
        length=sum(o.size for o in objects),
        is_large_object=large,
        objects=tuple(objects),
    )


def capture_segments() -> tuple[HeapSegment, ...]:
    """
    Describe gc-tracked objects, one small and one large segment per generation.

    Strings are not tracked by the collector; those referenced directly by a
    tracked object are attributed to the generation of their first referrer.
    """
    seen: set[int] = set()
    segments: list[HeapSegment] = []
    for generation in range(GC_GENERATIONS):
        tracked = gc.get_objects(generation=generation)
        small: list[HeapObject] = []
        large: list[HeapObject] = []

        def add(obj: Any) -> None:
            if id(obj) in seen:
                return
            seen.add(id(obj))
            entry = _heap_object(obj)
            (large if entry.size >= LARGE_OBJECT_THRESHOLD else small).append(entry)

        for obj in tracked:
            add(obj)
        for referent in gc.get_referents(*tracked):
            if isinstance(referent, str):
                add(referent)

        segments.append(_segment(generation, small, large=False))
        if large:
            segments.append(_segment(generation, large, large=True))
    return tuple(segments)


def capture_threads() -> tuple[ThreadRecord, ...]:
    frames = sys._current_frames()
    exceptions = sys._current_exceptions()
    known = {t.ident: t for t in threading.enumerate()}
    main_ident = threading.main_thread().ident

    records = []
    for ident, frame in frames.items():
        thread = known.get(ident)
        records.append(
            ThreadRecord(
                ident=ident,
                native_id=getattr(thread, "native_id", None),
                name=thread.name if thread is not None else None,
                is_alive=thread.is_alive() if thread is not None else True,
                address=id(thread) if thread is not None else 0,
                details=ThreadDetails(
                    is_main=ident == main_ident,
                    is_daemon=bool(thread is not None and thread.daemon),
                    is_dummy=isinstance(thread, threading._DummyThread),
                ),
                current_exception=_exception_record(exceptions.get(ident)),
                stack_trace=_stack_from_frame(frame),
            )
        )
    return tuple(sorted(records, key=lambda r: r.ident))


def capture_snapshot() -> Snapshot:
    logger.info("Capturing snapshot of process %s", platform.python_implementation())
    runtime = RuntimeInfo(
        implementation=platform.python_implementation(),
        version=platform.python_version(),
        platform=sys.platform,
        architecture=platform.machine() or "unknown",
        pointer_size=struct.calcsize("P"),
        gc_enabled=gc.isenabled(),
    )
    modules = tuple(
        ModuleInfo(name=name, file_name=getattr(module, "__file__", None))
        for name, module in sorted(sys.modules.items())
        if module is not None
    )
    return Snapshot(
        runtime=runtime,
        modules=modules,
        segments=capture_segments(),
        threads=capture_threads(),
        captured_at=datetime.now(timezone.utc),
    )


@dataclass
class LiveProcessSource:
    location: str = "live"

    def load(self) -> Snapshot:
        return capture_snapshot()
