"""CSV, TSV and plain text readers."""

from __future__ import annotations

import csv
import io

from ...core.exceptions import ParseError
from ...table import Row, Table
from ..registry import RawContent, register_reader


def decode_text(content: RawContent) -> str:
    """Decode *content* as UTF-8, dropping a leading byte order mark."""

    if isinstance(content, str):
        return content.lstrip("\ufeff")
    try:
        return bytes(content).decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Content is not valid UTF-8 text: {exc}") from exc


def _unique_headers(header: list[str]) -> list[str]:
    seen: dict[str, int] = {}
    unique: list[str] = []
    for index, raw in enumerate(header):
        name = raw if raw.strip() else f"column_{index}"
        if name in seen:
            seen[name] += 1
            candidate = f"{name}_{seen[name]}"
            while candidate in seen:
                seen[name] += 1
                candidate = f"{name}_{seen[name]}"
            name = candidate
        seen.setdefault(name, 0)
        unique.append(name)
    return unique


def read_delimited(content: RawContent, delimiter: str) -> Table:
    """Parse delimited text whose first non-empty record is the header.

    Values are kept as strings. Missing trailing cells become ``""`` and cells
    past the header are stored under ``column_{index}``.
    """

    text = decode_text(content)
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    header: list[str] | None = None
    rows: list[Row] = []
    try:
        for record in reader:
            if not record or all(not cell for cell in record):
                continue
            if header is None:
                header = _unique_headers(record)
                continue
            row: Row = {}
            for index, column in enumerate(header):
                row[column] = record[index] if index < len(record) else ""
            for index in range(len(header), len(record)):
                row[f"column_{index}"] = record[index]
            rows.append(row)
    except csv.Error as exc:
        raise ParseError(f"Malformed delimited data at line {reader.line_num}: {exc}") from exc

    if header is None:
        return Table.empty()
    return Table.from_rows(rows, columns=header)


@register_reader("csv")
def read_csv(content: RawContent) -> Table:
    return read_delimited(content, ",")


@register_reader("tsv")
def read_tsv(content: RawContent) -> Table:
    return read_delimited(content, "\t")


@register_reader("txt")
def read_text(content: RawContent) -> Table:
    """Sniff plain text: tab separated, comma separated or one row per line."""

    text = decode_text(content)
    lines = text.splitlines()
    first_line = lines[0] if lines else ""
    if "\t" in first_line:
        return read_delimited(text, "\t")
    if "," in first_line:
        return read_delimited(text, ",")
    rows = [{"line": number, "content": line} for number, line in enumerate(lines, start=1)]
    return Table.from_rows(rows, columns=("line", "content") if rows else None)


__all__ = ["decode_text", "read_csv", "read_delimited", "read_text", "read_tsv"]
