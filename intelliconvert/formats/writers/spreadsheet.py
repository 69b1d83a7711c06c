"""Excel workbook writer."""

from __future__ import annotations

import io
from typing import Any, Sequence

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from ...table import Table, stringify
from ..registry import register_writer

SHEET_TITLE = "Data"
FORMULA_PREFIX = "="


def _cell(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return stringify(value)


def _append(sheet: Worksheet, values: Sequence[Any]) -> None:
    sheet.append(values)
    # openpyxl stores "=..." strings as formulas.
    for cell in sheet[sheet.max_row]:
        if isinstance(cell.value, str) and cell.value.startswith(FORMULA_PREFIX):
            cell.data_type = "s"


@register_writer("xlsx")
def write_xlsx(table: Table) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE
    if table.columns:
        _append(sheet, list(table.columns))
        for row in table.rows:
            _append(sheet, [_cell(value) for value in table.values(row)])
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


__all__ = ["SHEET_TITLE", "write_xlsx"]
