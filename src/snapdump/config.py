from __future__ import annotations

import os
from dataclasses import dataclass

from .http_snapshot_source import HttpSnapshotSource
from .live_capture import LiveProcessSource
from .snapshot_source import FileSnapshotSource, SnapshotSource

LIVE_LOCATION = "live"


@dataclass(frozen=True)
class Settings:
    http_token: str | None = None
    http_timeout_secs: float = 15.0


def load_settings() -> Settings:
    token = os.getenv("SNAPDUMP_HTTP_TOKEN", "").strip() or None
    raw_timeout = os.getenv("SNAPDUMP_HTTP_TIMEOUT_SECS", "15.0").strip()
    try:
        timeout = float(raw_timeout)
    except ValueError:
        timeout = 15.0
    return Settings(http_token=token, http_timeout_secs=timeout)


def build_source(location: str, settings: Settings | None = None) -> SnapshotSource:
    """Pick a snapshot source for a file path, an http(s) URL or ``live``."""
    settings = settings or load_settings()
    location = location.strip()
    if location == LIVE_LOCATION:
        return LiveProcessSource()
    if location.startswith(("http://", "https://")):
        return HttpSnapshotSource(url=location, token=settings.http_token, timeout_secs=settings.http_timeout_secs)
    return FileSnapshotSource(path=location)
