from __future__ import annotations

import json
from pathlib import Path

import pytest

from intelliconvert.convert import (
    SourceFile,
    convert,
    convert_batch,
    convert_file,
    output_filename,
    parse_file,
    write_result,
)
from intelliconvert.core.exceptions import ErrorKind, UnsupportedFormatError
from intelliconvert.table import Table


@pytest.fixture()
def people_csv(tmp_path: Path) -> Path:
    path = tmp_path / "people.csv"
    path.write_text("name,age,city\nAlice,30,Paris\nBob,25,Rome\n", encoding="utf-8")
    return path


def test_parse_file_picks_reader_by_extension(people_csv: Path) -> None:
    parsed = parse_file(people_csv)

    assert parsed.name == "people.csv"
    assert parsed.format == "csv"
    assert parsed.table.row_count == 2


def test_parse_file_without_extension() -> None:
    with pytest.raises(UnsupportedFormatError):
        parse_file(SourceFile(name="README", data=b"text"))


def test_parse_file_rejects_write_only_format() -> None:
    with pytest.raises(UnsupportedFormatError):
        parse_file(SourceFile(name="notes.md", data=b"| a |"))


@pytest.mark.parametrize(
    ("original", "target", "expected"),
    [
        ("people.csv", "json", "people.json"),
        ("archive.tar.csv", "yml", "archive.tar.yaml"),
        ("dir/report.xlsx", "markdown", "report.md"),
        ("noext", "pdf", "noext.pdf"),
    ],
)
def test_output_filename(original: str, target: str, expected: str) -> None:
    assert output_filename(original, target) == expected


def test_convert_projects_columns() -> None:
    table = Table.from_rows([{"name": "Alice", "age": "30", "city": "Paris"}])

    result = convert(table, ["city", "name"], "json", "people.csv")

    assert json.loads(result.data) == [{"city": "Paris", "name": "Alice"}]
    assert result.filename == "people.json"
    assert result.size == len(result.data)
    assert (result.row_count, result.column_count) == (1, 2)
    assert table.column_count == 3


def test_convert_file(people_csv: Path) -> None:
    result = convert_file(people_csv, "md", columns=["name"])

    assert result.data.decode() == "| name |\n| --- |\n| Alice |\n| Bob |\n"
    assert result.mime_type.startswith("text/markdown")


def test_convert_batch_captures_failures(people_csv: Path, tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    unknown = tmp_path / "image.bmp"
    unknown.write_bytes(b"BM")
    calls: list[tuple[int, int, str]] = []

    items = convert_batch(
        [people_csv, broken, SourceFile(name="inline.tsv", data=b"a\tb\n1\t2\n"), unknown],
        "yaml",
        progress=lambda index, total, name: calls.append((index, total, name)),
    )

    assert [item.ok for item in items] == [True, False, True, False]
    assert items[0].result.filename == "people.yaml"
    assert items[1].error_kind is ErrorKind.PARSE
    assert items[1].source_format is None
    assert items[3].error_kind is ErrorKind.UNSUPPORTED_FORMAT
    assert calls == [
        (1, 4, "people.csv"),
        (2, 4, "broken.json"),
        (3, 4, "inline.tsv"),
        (4, 4, "image.bmp"),
    ]


def test_convert_batch_rejects_unknown_target(people_csv: Path) -> None:
    with pytest.raises(UnsupportedFormatError):
        convert_batch([people_csv], "bmp")


def test_write_result(people_csv: Path, tmp_path: Path) -> None:
    result = convert_file(people_csv, "tsv")

    destination = write_result(result, tmp_path / "out")

    assert destination == (tmp_path / "out" / "people.tsv").resolve()
    assert destination.read_bytes() == result.data
