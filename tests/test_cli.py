from __future__ import annotations

import json
import sys
from unittest.mock import patch

import pytest

from snapdump.app_cli import main


def run_cli(*argv: str) -> None:
    with patch.object(sys, "argv", ["snapdump", *argv]):
        main()


def write_snapshot(tmp_path, snapshot) -> str:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot.to_dict()), encoding="utf-8")
    return str(path)


def test_report_without_location_exits(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        run_cli("report")
    assert exc_info.value.code == 1
    assert "No file specified" in capsys.readouterr().out


def test_report_missing_file_exits(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        run_cli("report", str(tmp_path / "missing.json"))
    assert exc_info.value.code == 1
    assert "Specified file path does not exist" in capsys.readouterr().err


def test_text_report_to_stdout(tmp_path, sample_snapshot, capsys) -> None:
    run_cli("report", write_snapshot(tmp_path, sample_snapshot), "--color", "never")
    out = capsys.readouterr().out
    assert "= Runtime Info ========----------------------" in out
    assert "Implementation: CPython" in out
    assert "\x1b[" not in out


def test_colored_report_highlights_headers(tmp_path, sample_snapshot, capsys) -> None:
    run_cli("report", write_snapshot(tmp_path, sample_snapshot), "--color", "always")
    out = capsys.readouterr().out
    assert "\x1b[1;36m= Runtime Info ========----------------------\x1b[0m" in out


def test_html_report_to_file(tmp_path, sample_snapshot) -> None:
    target = tmp_path / "report.html"
    run_cli("report", write_snapshot(tmp_path, sample_snapshot), "--html", "--output", str(target))
    content = target.read_text(encoding="utf-8")
    assert "<h2>Runtime Info</h2>" in content
    assert "<table>" in content


def test_text_report_to_file_is_uncolored(tmp_path, sample_snapshot) -> None:
    target = tmp_path / "report.txt"
    run_cli("report", write_snapshot(tmp_path, sample_snapshot), "--output", str(target), "--color", "always")
    content = target.read_text(encoding="utf-8")
    assert "= Paused Methods ========----------------------" in content
    assert "\x1b[" not in content
