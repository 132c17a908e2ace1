from __future__ import annotations

from datetime import datetime, timezone

import pytest

from snapdump.domain_types import (
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

DICT = TypeInfo(name="dict")
STR = TypeInfo(name="str", is_string=True)
FREE = TypeInfo(name="Free", is_free=True)


@pytest.fixture
def sample_snapshot() -> Snapshot:
    small = HeapSegment(
        heap=0,
        start=0x1000,
        length=4096,
        objects=(
            HeapObject(address=0x1000, size=1024, type=DICT),
            HeapObject(address=0x1400, size=1024, type=DICT),
            HeapObject(address=0x1800, size=55, type=STR, value="hello"),
            HeapObject(address=0x1840, size=55, type=STR, value="hello"),
            HeapObject(address=0x1880, size=61, type=STR, value="<script>"),
            HeapObject(address=0x18c0, size=16, type=None),
            HeapObject(address=0x18d0, size=16, type=TypeInfo(name=None)),
        ),
    )
    large = HeapSegment(
        heap=0,
        start=0x9000,
        length=200_000,
        is_large_object=True,
        objects=(
            HeapObject(address=0x9000, size=120_000, type=TypeInfo(name="bytearray")),
            HeapObject(address=0xa000, size=90_000, type=FREE),
        ),
    )
    other = HeapSegment(heap=1, start=0x20000, length=8192)

    error = ExceptionRecord(
        type_name="ValueError",
        message="bad value",
        address=0xbeef,
        inner=ExceptionRecord(type_name="KeyError", message="'k'", address=0xcafe),
        stack_trace=StackTrace([StackFrame(signature="parse (app.py:10)")]),
    )
    worker = ThreadRecord(
        ident=2,
        native_id=202,
        name="worker",
        is_alive=True,
        address=0xabc,
        details=ThreadDetails(is_daemon=True),
        current_exception=error,
        stack_trace=StackTrace(
            [
                StackFrame(signature=None),
                StackFrame(signature="wait (threading.py:320)"),
                StackFrame(signature="run (worker.py:5)"),
            ]
        ),
    )
    main = ThreadRecord(
        ident=1,
        native_id=101,
        name="MainThread",
        is_alive=True,
        address=0xdef,
        details=ThreadDetails(is_main=True),
        stack_trace=StackTrace([StackFrame(signature="wait (threading.py:320)")]),
    )
    idle = ThreadRecord(ident=3, native_id=None, name=None, is_alive=False, address=0)

    return Snapshot(
        runtime=RuntimeInfo(
            implementation="CPython",
            version="3.12.1",
            platform="linux",
            architecture="x86_64",
            pointer_size=8,
            gc_enabled=True,
        ),
        modules=(ModuleInfo(name="json", file_name="/usr/lib/python3.12/json/__init__.py"), ModuleInfo(name="sys")),
        segments=(small, large, other),
        threads=(main, worker, idle),
        captured_at=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
    )
