from abc import ABC, abstractmethod
from typing import Any, Sequence

from ..domain_types import HeapObject


class Projection(ABC):
    """Base class for single-pass aggregations over the objects of a heap snapshot."""

    @abstractmethod
    def feed(self, obj: HeapObject) -> None:
        """Process a single heap object to update internal state."""
        pass

    @abstractmethod
    def rows(self) -> Sequence[Any]:
        """Return the aggregated records, ready for rendering."""
        pass
