"""HTML output for the structured value dumper."""
from __future__ import annotations

import html
from typing import Any, Callable, Iterable

from .dumper import is_scalar, render_value
from .handlers import HandlerRegistry, qualified_name
from .introspection import MISSING, type_attributes

__all__ = ["dump_html", "dump_html_table", "escape_line"]


def escape_line(line: str) -> str:
    """HTML-escape one rendered line, turning embedded line breaks into ``<br>``."""
    encoded = html.escape(line)
    return encoded.replace("\r\n", "\n").replace("\r", "\n").replace("\n", "<br>")


def dump_html(
    value: Any,
    title: str,
    handlers: HandlerRegistry | None = None,
    write_to: Callable[[str], None] | None = None,
) -> None:
    """Write ``value`` as an ``<h2>`` heading followed by a ``<pre>`` block."""
    write_to = write_to or print
    write_to(f"<h2>{html.escape(title)}</h2>")
    write_to("")
    write_to("<pre>")
    for line in render_value(value, (), handlers) or ():
        write_to(escape_line(line))
    write_to("</pre>")


def _render_cell(value: Any, handlers: HandlerRegistry | None) -> str:
    lines = list(render_value(value, (), handlers) or ())

    if value is not None and is_scalar(value) and len(lines) == 1:
        line = lines[0]
        if html.escape(line) == line and "\r" not in line and "\n" not in line:
            return line

    return f"<pre>{'<br>'.join(escape_line(line) for line in lines)}</pre>"


def dump_html_table(
    values: Iterable[Any],
    title: str,
    record_type: type,
    handlers: HandlerRegistry | None = None,
    write_to: Callable[[str], None] | None = None,
) -> None:
    """
    Write records of one type as an HTML table.

    Args:
        values: Records, all instances of ``record_type``.
        title: Heading written above the table.
        record_type: Declares the columns: its fields, then its properties.
        handlers: Type handler registry used for every cell.
        write_to: Line sink, ``print`` by default.
    """
    write_to = write_to or print
    columns = type_attributes(record_type)

    write_to(f"<h2>{html.escape(title)}</h2>")
    write_to("")
    if not columns:
        write_to(f"No fields or properties to query on type {html.escape(qualified_name(record_type))}")
        return

    write_to("<table>")
    write_to("<thead>")
    write_to("<tr>")
    for name in columns:
        write_to(f"<td>{html.escape(name)}</td>")
    write_to("</tr>")
    write_to("</thead>")
    write_to("<tbody>")
    row_count = 0
    for record in values:
        write_to("<tr>")
        for name in columns:
            cell = getattr(record, name, MISSING)
            # Unassigned fields leave an empty cell.
            write_to("<td></td>" if cell is MISSING else f"<td>{_render_cell(cell, handlers)}</td>")
        write_to("</tr>")
        row_count += 1
    if not row_count:
        write_to(f'<tr><td colspan="{len(columns)}">No items to display</td></tr>')
    write_to("</tbody>")
    write_to("</table>")
