from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Iterator, Mapping

FORMAT_VERSION = 1


@dataclass(frozen=True)
class TypeInfo:
    name: str | None
    is_string: bool = False
    is_free: bool = False

    def __str__(self) -> str:
        return self.name or "<unnamed>"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> TypeInfo | None:
        if data is None:
            return None
        return cls(
            name=data.get("name"),
            is_string=bool(data.get("is_string", False)),
            is_free=bool(data.get("is_free", False)),
        )


@dataclass(frozen=True)
class ModuleInfo:
    name: str
    file_name: str | None = None
    size: int = 0

    def __str__(self) -> str:
        return self.file_name or self.name

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ModuleInfo:
        return cls(name=data["name"], file_name=data.get("file_name"), size=int(data.get("size", 0)))


@dataclass(frozen=True)
class HeapObject:
    address: int
    size: int
    type: TypeInfo | None
    value: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HeapObject:
        return cls(
            address=int(data["address"]),
            size=int(data["size"]),
            type=TypeInfo.from_dict(data.get("type")),
            value=data.get("value"),
        )


@dataclass(frozen=True)
class HeapSegment:
    heap: int
    start: int
    length: int
    is_large_object: bool = False
    objects: tuple[HeapObject, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HeapSegment:
        return cls(
            heap=int(data["heap"]),
            start=int(data.get("start", 0)),
            length=int(data["length"]),
            is_large_object=bool(data.get("is_large_object", False)),
            objects=tuple(HeapObject.from_dict(o) for o in data.get("objects", ())),
        )


@dataclass(frozen=True)
class StackFrame:
    signature: str | None
    frame_name: str | None = None
    kind: str = "Python"

    @property
    def is_unknown(self) -> bool:
        return self.signature is None and self.frame_name is None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StackFrame:
        return cls(
            signature=data.get("signature"),
            frame_name=data.get("frame_name"),
            kind=data.get("kind", "Python"),
        )


class StackTrace(tuple):
    """Call frames of one thread or exception, innermost first."""

    @classmethod
    def from_list(cls, frames: Iterable[Mapping[str, Any]] | None) -> StackTrace:
        return cls(StackFrame.from_dict(f) for f in frames or ())


@dataclass(frozen=True)
class ExceptionRecord:
    type_name: str
    message: str
    address: int
    inner: ExceptionRecord | None = None
    stack_trace: StackTrace = StackTrace()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ExceptionRecord | None:
        if data is None:
            return None
        return cls(
            type_name=data["type_name"],
            message=data.get("message", ""),
            address=int(data.get("address", 0)),
            inner=cls.from_dict(data.get("inner")),
            stack_trace=StackTrace.from_list(data.get("stack_trace")),
        )


@dataclass(frozen=True)
class ThreadDetails:
    is_main: bool = False
    is_daemon: bool = False
    is_dummy: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ThreadDetails:
        data = data or {}
        return cls(
            is_main=bool(data.get("is_main", False)),
            is_daemon=bool(data.get("is_daemon", False)),
            is_dummy=bool(data.get("is_dummy", False)),
        )


@dataclass(frozen=True)
class ThreadRecord:
    ident: int
    native_id: int | None
    name: str | None
    is_alive: bool
    address: int
    details: ThreadDetails = ThreadDetails()
    current_exception: ExceptionRecord | None = None
    stack_trace: StackTrace = StackTrace()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThreadRecord:
        return cls(
            ident=int(data["ident"]),
            native_id=data.get("native_id"),
            name=data.get("name"),
            is_alive=bool(data.get("is_alive", True)),
            address=int(data.get("address", 0)),
            details=ThreadDetails.from_dict(data.get("details")),
            current_exception=ExceptionRecord.from_dict(data.get("current_exception")),
            stack_trace=StackTrace.from_list(data.get("stack_trace")),
        )


@dataclass(frozen=True)
class RuntimeInfo:
    implementation: str
    version: str
    platform: str
    architecture: str
    pointer_size: int = 8
    gc_enabled: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RuntimeInfo:
        return cls(
            implementation=data.get("implementation", "unknown"),
            version=data.get("version", "unknown"),
            platform=data.get("platform", "unknown"),
            architecture=data.get("architecture", "unknown"),
            pointer_size=int(data.get("pointer_size", 8)),
            gc_enabled=bool(data.get("gc_enabled", True)),
        )


@dataclass(frozen=True)
class Snapshot:
    runtime: RuntimeInfo
    modules: tuple[ModuleInfo, ...] = ()
    segments: tuple[HeapSegment, ...] = ()
    threads: tuple[ThreadRecord, ...] = ()
    captured_at: datetime | None = None

    @property
    def heap_count(self) -> int:
        return len({segment.heap for segment in self.segments})

    def objects(self) -> Iterator[HeapObject]:
        for segment in self.segments:
            yield from segment.objects

    @classmethod
    def empty(cls) -> Snapshot:
        return cls(runtime=RuntimeInfo("unknown", "unknown", "unknown", "unknown"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Snapshot:
        if not isinstance(data, Mapping):
            raise RuntimeError(f"Snapshot document must be a JSON object, got {type(data).__name__}")
        version = data.get("format_version")
        if version != FORMAT_VERSION:
            raise RuntimeError(f"Snapshot format mismatch. Expected {FORMAT_VERSION}, got {version}")
        captured_at = data.get("captured_at")
        return cls(
            runtime=RuntimeInfo.from_dict(data.get("runtime", {})),
            modules=tuple(ModuleInfo.from_dict(m) for m in data.get("modules", ())),
            segments=tuple(HeapSegment.from_dict(s) for s in data.get("segments", ())),
            threads=tuple(ThreadRecord.from_dict(t) for t in data.get("threads", ())),
            captured_at=datetime.fromisoformat(captured_at) if captured_at else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        data["format_version"] = FORMAT_VERSION
        data["captured_at"] = self.captured_at.isoformat() if self.captured_at else None
        return data
