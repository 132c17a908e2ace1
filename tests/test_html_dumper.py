from __future__ import annotations

from dataclasses import dataclass

from snapdump.html_dumper import dump_html, dump_html_table, escape_line
from snapdump.projections import TypeSizeRow


@dataclass
class Entry:
    name: str
    values: list


class Bare:
    pass


def collect(fn, *args, **kwargs) -> list[str]:
    out: list[str] = []
    fn(*args, write_to=out.append, **kwargs)
    return out


def test_escape_line_converts_line_breaks() -> None:
    assert escape_line("a < b") == "a &lt; b"
    assert escape_line("one\r\ntwo\rthree\nfour") == "one<br>two<br>three<br>four"


def test_document_mode_escapes_every_line() -> None:
    out = collect(dump_html, {"tag": "<b>&</b>"}, "Tags & <Things>")
    assert out == [
        "<h2>Tags &amp; &lt;Things&gt;</h2>",
        "",
        "<pre>",
        "tag: &lt;b&gt;&amp;&lt;/b&gt;",
        "</pre>",
    ]


def test_table_mode_rows_and_columns() -> None:
    rows = [TypeSizeRow(bytes=1024, count=2, type="dict"), TypeSizeRow(bytes=10, count=1, type="<lambda>")]
    out = collect(dump_html_table, rows, "Types", TypeSizeRow)
    assert out == [
        "<h2>Types</h2>",
        "",
        "<table>",
        "<thead>",
        "<tr>",
        "<td>bytes</td>",
        "<td>count</td>",
        "<td>type</td>",
        "</tr>",
        "</thead>",
        "<tbody>",
        "<tr>",
        "<td>1,024</td>",
        "<td>2</td>",
        "<td>dict</td>",
        "</tr>",
        "<tr>",
        "<td>10</td>",
        "<td>1</td>",
        "<td><pre>&lt;lambda&gt;</pre></td>",
        "</tr>",
        "</tbody>",
        "</table>",
    ]


def test_table_cell_with_multiple_lines_is_preformatted() -> None:
    out = collect(dump_html_table, [Entry(name="multi\nline", values=[1, "<x>"])], "Entries", Entry)
    assert "<td><pre>multi<br>line</pre></td>" in out
    assert "<td><pre>1<br>&lt;x&gt;</pre></td>" in out


def test_table_cell_for_missing_value() -> None:
    out = collect(dump_html_table, [Entry(name="n", values=None)], "Entries", Entry)
    assert "<td><pre>null</pre></td>" in out


def test_empty_table_has_full_width_placeholder() -> None:
    out = collect(dump_html_table, [], "Types", TypeSizeRow)
    assert '<tr><td colspan="3">No items to display</td></tr>' in out
    assert out.count("<tr>") == 1


def test_type_without_attributes_skips_table() -> None:
    out = collect(dump_html_table, [Bare()], "Bare", Bare)
    assert out[0] == "<h2>Bare</h2>"
    assert out[2].startswith("No fields or properties to query on type ")
    assert out[2].endswith("Bare")
    assert "<table>" not in out


def test_no_raw_markup_from_source_text() -> None:
    payload = "<script>alert('x') & more</script>"
    out = collect(dump_html, [payload, {"k": payload}], "Payload")
    body = out[3:-1]
    for line in body:
        assert "<" not in line.replace("<br>", "")
        assert ">" not in line.replace("<br>", "")
        assert "& " not in line


class Pair:
    __slots__ = ("left", "right")


def test_table_leaves_unassigned_fields_empty() -> None:
    record = Pair()
    record.left = 7

    out = collect(dump_html_table, [record], "Pairs", Pair)

    body = out[out.index("<tbody>") + 1 : out.index("</tbody>")]
    assert body == ["<tr>", "<td>7</td>", "<td></td>", "</tr>"]
