from dataclasses import dataclass
from typing import Iterable

from ..domain_types import ExceptionRecord, StackTrace, ThreadRecord


@dataclass(frozen=True)
class ThreadSummaryDetails:
    is_main: bool
    is_daemon: bool
    is_dummy: bool


@dataclass(frozen=True)
class ThreadSummary:
    is_alive: bool
    native_id: int | None
    ident: int
    name: str | None
    address: str
    details: ThreadSummaryDetails
    current_exception: ExceptionRecord | None
    stack_trace: StackTrace


def thread_summaries(threads: Iterable[ThreadRecord], only_with_exception: bool = False) -> list[ThreadSummary]:
    out = []
    for t in threads:
        if not t.stack_trace:
            continue
        if only_with_exception and t.current_exception is None:
            continue
        out.append(
            ThreadSummary(
                is_alive=t.is_alive,
                native_id=t.native_id,
                ident=t.ident,
                name=t.name,
                address=f"{t.address:x}",
                details=ThreadSummaryDetails(
                    is_main=t.details.is_main,
                    is_daemon=t.details.is_daemon,
                    is_dummy=t.details.is_dummy,
                ),
                current_exception=t.current_exception,
                stack_trace=t.stack_trace,
            )
        )
    return out
