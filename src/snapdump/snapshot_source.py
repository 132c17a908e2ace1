from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Protocol

from .domain_types import Snapshot

logger = logging.getLogger(__name__)


class SnapshotLoadError(RuntimeError):
    """A snapshot could not be read or decoded."""


class SnapshotSource(Protocol):
    @property
    def location(self) -> str: ...

    def load(self) -> Snapshot: ...


@dataclass
class FakeSnapshotSource:
    location: str = "fake"

    def load(self) -> Snapshot:
        return Snapshot.empty()


@dataclass
class FileSnapshotSource:
    path: str

    @property
    def location(self) -> str:
        return self.path

    def load(self) -> Snapshot:
        if not os.path.isfile(self.path):
            raise SnapshotLoadError(f"Specified file path does not exist: {self.path}")
        logger.info("Reading snapshot file %s", self.path)
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
            return Snapshot.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, RuntimeError) as exc:
            raise SnapshotLoadError(f"Unable to read snapshot {self.path}: {exc}") from exc
