"""Excel workbook reader."""

from __future__ import annotations

import datetime as dt
import io
from typing import Any

from openpyxl import load_workbook

from ...core.exceptions import ParseError
from ...table import Row, Table
from ..registry import RawContent, register_reader


def _cell_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, dt.timedelta):
        return str(value)
    return value


def _header(values: tuple[Any, ...]) -> list[str]:
    header: list[str] = []
    for index, value in enumerate(values):
        name = "" if value is None else str(_cell_value(value)).strip()
        if not name or name in header:
            name = f"column_{index}" if not name else f"{name}_{index}"
        header.append(name)
    return header


@register_reader("xlsx")
def read_xlsx(content: RawContent) -> Table:
    """Read the first worksheet; the first non-blank row is the header."""

    if isinstance(content, str):
        raise ParseError("Excel content must be binary")
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except Exception as exc:
        raise ParseError(f"Invalid Excel workbook: {exc}") from exc

    try:
        if not workbook.worksheets:
            return Table.empty()
        sheet = workbook.worksheets[0]
        header: list[str] | None = None
        rows: list[Row] = []
        for values in sheet.iter_rows(values_only=True):
            if all(value is None or value == "" for value in values):
                continue
            if header is None:
                header = _header(values)
                continue
            row: Row = {column: "" for column in header}
            for index, value in enumerate(values):
                if index < len(header):
                    row[header[index]] = _cell_value(value)
                elif value is not None:
                    row[f"column_{index}"] = _cell_value(value)
            rows.append(row)
    finally:
        workbook.close()

    if header is None:
        return Table.empty()
    return Table.from_rows(rows, columns=header)


__all__ = ["read_xlsx"]
