from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from ..domain_types import ThreadRecord


@dataclass(frozen=True)
class PausedMethodRow:
    count: int
    signature: str


def paused_methods(threads: Iterable[ThreadRecord]) -> list[PausedMethodRow]:
    """Group threads by the innermost frame that has a signature, most common first."""
    counts: Counter = Counter()
    for thread in threads:
        signature = next((f.signature for f in thread.stack_trace if f.signature is not None), None)
        if signature is not None:
            counts[signature] += 1
    return [PausedMethodRow(count=c, signature=sig) for sig, c in counts.most_common()]
