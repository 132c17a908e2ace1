from __future__ import annotations

import io
import os
from unittest.mock import patch

from snapdump.console import ColorMode, console_writer, detect_color_mode, style, style_report_line

ON = ColorMode(enabled=True)
OFF = ColorMode(enabled=False)


class TtyStream(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_detect_color_mode_explicit() -> None:
    assert detect_color_mode("always").enabled is True
    assert detect_color_mode("never").enabled is False


def test_detect_color_mode_auto() -> None:
    assert detect_color_mode("auto", io.StringIO()).enabled is False
    with patch.dict(os.environ, {}, clear=True):
        assert detect_color_mode("auto", TtyStream()).enabled is True
    with patch.dict(os.environ, {"NO_COLOR": "1"}, clear=True):
        assert detect_color_mode("auto", TtyStream()).enabled is False


def test_style_disabled_returns_text() -> None:
    assert style("plain", mode=OFF, bold=True) == "plain"
    assert style("plain", mode=ON) == "plain"


def test_report_lines_are_styled_by_kind() -> None:
    header = "= Runtime Info ========----------------------"
    assert style_report_line(header, ON) == f"\x1b[1;36m{header}\x1b[0m"
    assert style_report_line("[1.25s] Loaded", ON) == "\x1b[2;90m[1.25s] Loaded\x1b[0m"
    assert style_report_line("^ Done after 0.10s", ON).startswith("\x1b[2;90m")
    assert style_report_line("Version: 3.12.1", ON) == "Version: 3.12.1"


def test_console_writer_prints_one_line_per_call() -> None:
    stream = io.StringIO()
    write = console_writer(OFF, stream)
    write("first")
    write("")
    assert stream.getvalue() == "first\n\n"
