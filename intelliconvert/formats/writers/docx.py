"""Word document writer."""

from __future__ import annotations

import io

from docx import Document

from ...table import Table, stringify
from ..registry import register_writer

HEADING = "Converted Data"
TABLE_STYLE = "Table Grid"


@register_writer("docx")
def write_docx(table: Table) -> bytes:
    """Write a heading followed by a grid table with a bold header row."""

    document = Document()
    document.add_heading(HEADING, level=1)
    if table.columns:
        grid = document.add_table(rows=1, cols=len(table.columns))
        grid.style = TABLE_STYLE
        for cell, column in zip(grid.rows[0].cells, table.columns):
            cell.paragraphs[0].add_run(column).bold = True
        for row in table.rows:
            cells = grid.add_row().cells
            for cell, value in zip(cells, table.values(row)):
                cell.text = stringify(value)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


__all__ = ["HEADING", "write_docx"]
