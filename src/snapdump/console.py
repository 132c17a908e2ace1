"""ANSI styling for reports written to a terminal."""
from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from typing import Callable, TextIO

__all__ = [
    "ColorMode",
    "console_writer",
    "detect_color_mode",
    "style",
    "style_report_line",
]

CSI = "\x1b["

# Foreground colors
FG_CYAN = 36
FG_GRAY = 90

_TIMING_RE = re.compile(r"^(\[\d+\.\d{2}s\] |\^ Done after )")


@dataclass(frozen=True)
class ColorMode:
    """Color mode configuration."""

    enabled: bool


def detect_color_mode(mode: str, stream: TextIO | None = None) -> ColorMode:
    """
    Detect whether colors should be enabled.

    Args:
        mode: "auto", "always", or "never"
        stream: Output stream checked for a terminal in auto mode (stdout by default)
    """
    m = (mode or "auto").lower().strip()

    if m == "never":
        return ColorMode(enabled=False)
    if m == "always":
        return ColorMode(enabled=True)

    stream = stream or sys.stdout
    if not stream.isatty():
        return ColorMode(enabled=False)

    if os.getenv("NO_COLOR"):
        return ColorMode(enabled=False)

    return ColorMode(enabled=True)


def _sgr(*codes: int) -> str:
    return f"{CSI}{';'.join(str(c) for c in codes)}m"


def style(
    text: str,
    *,
    mode: ColorMode,
    fg: int | None = None,
    bold: bool = False,
    dim: bool = False,
) -> str:
    """Apply ANSI styles to text, or return it unchanged when colors are disabled."""
    if not mode.enabled:
        return text

    codes: list[int] = []
    if bold:
        codes.append(1)
    if dim:
        codes.append(2)
    if fg is not None:
        codes.append(fg)

    if not codes:
        return text

    return f"{_sgr(*codes)}{text}{_sgr(0)}"


def style_report_line(line: str, mode: ColorMode) -> str:
    """Highlight section headers and dim timing lines of a plain-text report."""
    if line.startswith("= ") and line.endswith("-"):
        return style(line, mode=mode, fg=FG_CYAN, bold=True)
    if _TIMING_RE.match(line):
        return style(line, mode=mode, fg=FG_GRAY, dim=True)
    return line


def console_writer(mode: ColorMode, stream: TextIO | None = None) -> Callable[[str], None]:
    stream = stream or sys.stdout

    def write(line: str) -> None:
        print(style_report_line(line, mode), file=stream)

    return write
