from __future__ import annotations

import json
from unittest.mock import patch

import httpx
from fastapi.testclient import TestClient

from snapdump.web import create_app


def test_missing_path_returns_plain_message() -> None:
    client = TestClient(create_app())
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.text == "No 'path' specified in Query String"


def test_report_for_snapshot_file(tmp_path, sample_snapshot) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(sample_snapshot.to_dict()), encoding="utf-8")

    client = TestClient(create_app())
    resp = client.get("/", params={"path": str(path)})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert resp.text.startswith("<!DOCTYPE html>")
    assert "<h1>Memory Snapshot Analysis</h1>" in resp.text
    assert "<h2>Runtime Info</h2>" in resp.text
    assert "<h2>Threads with Exceptions</h2>" in resp.text


def test_unknown_file_is_not_found(tmp_path) -> None:
    client = TestClient(create_app())
    resp = client.get("/", params={"path": str(tmp_path / "missing.json")})
    assert resp.status_code == 404
    assert "does not exist" in resp.json()["detail"]


def test_path_is_always_read_as_a_file() -> None:
    client = TestClient(create_app())
    with patch("snapdump.live_capture.capture_snapshot") as capture, patch.object(httpx.Client, "get") as mock_get:
        for path in ("live", "http://localhost:8010/snapshot"):
            resp = client.get("/", params={"path": path})
            assert resp.status_code == 404
            assert "does not exist" in resp.json()["detail"]
    capture.assert_not_called()
    mock_get.assert_not_called()
