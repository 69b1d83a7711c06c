from __future__ import annotations

import datetime as dt
import io

import pytest
from docx import Document
from openpyxl import Workbook

from intelliconvert.core.exceptions import ParseError, UnsupportedFormatError
from intelliconvert.formats import parse
from intelliconvert.formats.locators import FirstArrayLocator, PathLocator
from intelliconvert.formats.readers.xml import read_xml


def test_csv_header_and_string_values() -> None:
    table = parse(b"name,age\nAlice,30\nBob,25\n", "csv")

    assert table.columns == ("name", "age")
    assert table.rows == ({"name": "Alice", "age": "30"}, {"name": "Bob", "age": "25"})


def test_csv_strips_bom_and_handles_quotes() -> None:
    table = parse('\ufeffid,note\n1,"a, ""quoted"" value"\n'.encode("utf-8"), "csv")

    assert table.columns == ("id", "note")
    assert table.rows[0]["note"] == 'a, "quoted" value'


def test_csv_short_and_long_records() -> None:
    table = parse("a,b\n1\n2,3,4\n", "csv")

    assert table.rows == ({"a": "1", "b": ""}, {"a": "2", "b": "3", "column_2": "4"})
    assert table.columns == ("a", "b", "column_2")


def test_csv_duplicate_and_blank_headers() -> None:
    table = parse("x,x,,y\n1,2,3,4\n", "csv")

    assert table.columns == ("x", "x_1", "column_2", "y")


def test_csv_skips_blank_lines() -> None:
    table = parse("\n\na\n1\n\n2\n", "csv")

    assert [row["a"] for row in table] == ["1", "2"]


def test_csv_header_only_keeps_columns() -> None:
    table = parse("a,b\n", "csv")

    assert table.rows == ()
    assert table.columns == ("a", "b")


def test_empty_csv() -> None:
    table = parse(b"", "csv")

    assert table.rows == ()
    assert table.columns == ()


def test_invalid_utf8_raises_parse_error() -> None:
    with pytest.raises(ParseError):
        parse(b"a,b\n\xff\xfe\xfa,1\n", "csv")


def test_tsv() -> None:
    table = parse("a\tb\n1\t2\n", "tsv")

    assert table.rows == ({"a": "1", "b": "2"},)


def test_text_sniffs_delimiters() -> None:
    assert parse("a\tb\n1\t2\n", "txt").columns == ("a", "b")
    assert parse("a,b\n1,2\n", "txt").columns == ("a", "b")


def test_text_falls_back_to_lines() -> None:
    table = parse("first line\nsecond line", "text")

    assert table.columns == ("line", "content")
    assert table.rows == (
        {"line": 1, "content": "first line"},
        {"line": 2, "content": "second line"},
    )


def test_empty_text_has_no_columns() -> None:
    assert parse("", "txt").columns == ()


def test_json_array_and_object() -> None:
    assert parse('[{"a": 1}, {"b": true}]', "json").columns == ("a", "b")
    single = parse('{"a": 1, "b": null}', "json")
    assert single.rows == ({"a": 1, "b": None},)


def test_json_scalars_in_array_become_value_rows() -> None:
    table = parse("[1, 2]", "json")

    assert table.rows == ({"value": 1}, {"value": 2})


@pytest.mark.parametrize("content", ['"text"', "[1,", "42"])
def test_invalid_json(content: str) -> None:
    with pytest.raises(ParseError):
        parse(content, "json")


def test_yaml_list_and_alias_extension() -> None:
    table = parse("- name: Ada\n  age: 36\n- name: Alan\n", "yml")

    assert table.columns == ("name", "age")
    assert table.rows[1] == {"name": "Alan"}


def test_yaml_without_document_is_empty() -> None:
    assert parse("# only a comment\n", "yaml").rows == ()


def test_invalid_yaml() -> None:
    with pytest.raises(ParseError):
        parse("a: [1, 2\n", "yaml")


def test_xml_first_repeated_element() -> None:
    content = """<?xml version="1.0"?>
    <catalog>
      <book id="1"><title>Dune</title><year>1965</year></book>
      <book id="2"><title>Emma</title></book>
    </catalog>"""

    table = parse(content, "xml")

    assert table.columns == ("@_id", "title", "year")
    assert table.rows[0] == {"@_id": "1", "title": "Dune", "year": "1965"}
    assert table.rows[1] == {"@_id": "2", "title": "Emma"}


def test_xml_declared_encoding_is_honoured() -> None:
    content = (
        '<?xml version="1.0" encoding="ISO-8859-1"?>'
        "<people><person><name>Zo\u00eb</name></person><person><name>Jos\u00e9</name></person></people>"
    ).encode("latin-1")

    table = parse(content, "xml")

    assert [row["name"] for row in table.rows] == ["Zo\u00eb", "Jos\u00e9"]


def test_xml_bytes_with_utf8_bom() -> None:
    table = parse("\ufeff<r><i>1</i><i>2</i></r>".encode("utf-8"), "xml")

    assert table.rows == ({"value": "1"}, {"value": "2"})


def test_xml_mixed_text_is_kept() -> None:
    table = parse('<r><i lang="en">hello<b>x</b></i><i>y</i></r>', "xml")

    assert table.rows[0] == {"@_lang": "en", "b": "x", "#text": "hello"}
    assert table.rows[1] == {"value": "y"}


def test_xml_without_array_falls_back_to_single_row() -> None:
    table = parse("<config><name>demo</name><port>80</port></config>", "xml")

    assert table.rows == ({"config": {"name": "demo", "port": "80"}},)


def test_xml_strict_locator_rejects_missing_array() -> None:
    with pytest.raises(ParseError):
        read_xml("<config><name>demo</name></config>", locator=FirstArrayLocator(fallback=False))


def test_xml_fallback_follows_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INTELLICONVERT_XML_FALLBACK", "false")

    with pytest.raises(ParseError):
        parse("<config><name>demo</name></config>", "xml")


def test_xml_path_locator() -> None:
    content = "<root><meta><item>skip</item><item>me</item></meta><rows><row><a>1</a></row></rows></root>"

    table = read_xml(content, locator=PathLocator("root", "rows", "row"))

    assert table.rows == ({"a": "1"},)


def test_invalid_xml() -> None:
    with pytest.raises(ParseError):
        parse("<root><unclosed></root>", "xml")


def test_html_uses_thead() -> None:
    content = """
    <html><body>
      <table>
        <thead><tr><th>Name</th><th>Age</th></tr></thead>
        <tbody><tr><td>Ada</td><td>36</td><td>extra</td></tr></tbody>
      </table>
      <table><tr><th>ignored</th></tr></table>
    </body></html>
    """

    table = parse(content, "htm")

    assert table.columns == ("Name", "Age", "column_2")
    assert table.rows == ({"Name": "Ada", "Age": "36", "column_2": "extra"},)


def test_html_first_row_header() -> None:
    table = parse("<table><tr><td>a</td><td></td></tr><tr><td>1</td><td>2</td></tr></table>", "html")

    assert table.rows == ({"a": "1", "column_1": "2"},)


def test_html_without_table() -> None:
    assert parse("<p>no table here</p>", "html").rows == ()


def test_xlsx_reads_first_sheet() -> None:
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["name", "joined", None])
    sheet.append(["Ada", dt.date(2020, 1, 2), 5])
    sheet.append([None, None, None])
    sheet.append(["Alan", None, None])
    workbook.create_sheet("Other").append(["ignored"])
    buffer = io.BytesIO()
    workbook.save(buffer)

    table = parse(buffer.getvalue(), "xlsx")

    assert table.columns == ("name", "joined", "column_2")
    assert table.rows[0]["joined"].startswith("2020-01-02")
    assert table.rows[0]["column_2"] == 5
    assert table.rows[1] == {"name": "Alan", "joined": "", "column_2": ""}


def test_invalid_xlsx() -> None:
    with pytest.raises(ParseError):
        parse(b"not a workbook", "xlsx")


def test_docx_paragraphs() -> None:
    document = Document()
    document.add_paragraph("First")
    document.add_paragraph("   ")
    document.add_paragraph("Second")
    buffer = io.BytesIO()
    document.save(buffer)

    table = parse(buffer.getvalue(), "docx")

    assert table.columns == ("paragraph", "content")
    assert table.rows == ({"paragraph": 1, "content": "First"}, {"paragraph": 2, "content": "Second"})


def test_ini_sections_and_root_keys() -> None:
    content = 'name = demo\n[server]\nport=8080\nhost = "localhost"\n; comment\n[empty]\n'

    table = parse(content, "ini")

    assert table.columns == ("section", "key", "value")
    assert table.rows == (
        {"section": "root", "key": "name", "value": "demo"},
        {"section": "server", "key": "port", "value": "8080"},
        {"section": "server", "key": "host", "value": "localhost"},
    )


def test_ini_scenario() -> None:
    table = parse("[server]\nport=8080", "ini")

    assert table.rows == ({"section": "server", "key": "port", "value": "8080"},)


def test_ini_empty() -> None:
    assert parse("", "ini").columns == ()


@pytest.mark.parametrize("fmt", ["md", "pdf", "bmp"])
def test_unreadable_formats(fmt: str) -> None:
    with pytest.raises(UnsupportedFormatError):
        parse(b"data", fmt)
