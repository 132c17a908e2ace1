from __future__ import annotations

import logging
from typing import Optional

import httpx

from .domain_types import FORMAT_VERSION, Snapshot
from .snapshot_source import SnapshotLoadError

logger = logging.getLogger(__name__)


class HttpSnapshotSource:
    """Fetches a JSON snapshot document published by a remote capture agent."""

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        timeout_secs: float = 15.0,
    ) -> None:
        self.url = url
        self.token = token
        self.timeout = timeout_secs
        self.headers = {"Accept": "application/json"}
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"

    @property
    def location(self) -> str:
        return self.url

    def load(self) -> Snapshot:
        logger.info("Fetching snapshot from %s", self.url)
        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.get(self.url, headers=self.headers)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as exc:
            raise SnapshotLoadError(f"Unable to fetch snapshot from {self.url}: {exc}") from exc
        except ValueError as exc:
            raise SnapshotLoadError(f"Snapshot from {self.url} is not valid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise SnapshotLoadError(
                f"Snapshot document from {self.url} must be a JSON object, got {type(data).__name__}"
            )

        # Admission gate: refuse documents we cannot interpret
        if data.get("format_version") != FORMAT_VERSION:
            raise SnapshotLoadError(
                f"Snapshot format mismatch. Expected {FORMAT_VERSION}, got {data.get('format_version')}"
            )
        try:
            return Snapshot.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise SnapshotLoadError(f"Malformed snapshot from {self.url}: {exc}") from exc
