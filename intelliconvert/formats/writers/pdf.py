"""PDF writer rendering a table as text with reportlab.

Tables shaped like extracted documents (a ``content`` column) are rendered as
a word-wrapped paragraph flow; anything else becomes a truncated text grid.
Pages are laid out first so the footer can carry the final page count.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from ...table import Table, stringify
from ..registry import register_writer

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 40.0
FOOTER_Y = 20.0
BOTTOM_LIMIT = 50.0

MAX_GRID_COLUMNS = 5
HEADER_CHARS = 15
CELL_CHARS = 20

TITLE = "Converted Data"
FOOTER_FORMAT = "Page {page} of {total}"


@dataclass(slots=True)
class _TextOp:
    x: float
    y: float
    text: str
    font: str
    size: float


@dataclass(slots=True)
class _Layout:
    pages: list[list[_TextOp]] = field(default_factory=lambda: [[]])
    y: float = PAGE_HEIGHT - MARGIN

    def draw(self, x: float, text: str, font: str, size: float) -> None:
        self.pages[-1].append(_TextOp(x, self.y, text, font, size))

    def advance(self, amount: float) -> None:
        self.y -= amount

    def new_page(self) -> None:
        self.pages.append([])
        self.y = PAGE_HEIGHT - MARGIN

    def ensure_space(self, amount: float) -> bool:
        if self.y - amount < BOTTOM_LIMIT:
            self.new_page()
            return True
        return False


def _layout_paragraphs(table: Table) -> _Layout:
    layout = _Layout()
    width = PAGE_WIDTH - 2 * MARGIN
    font, size, leading = "Helvetica", 11.0, 15.0
    layout.draw(MARGIN, TITLE, "Helvetica-Bold", 16.0)
    layout.advance(28.0)
    for row in table.rows:
        text = stringify(row.get("content"))
        if not text.strip():
            continue
        for line in simpleSplit(text, font, size, width):
            layout.ensure_space(leading)
            layout.draw(MARGIN, line, font, size)
            layout.advance(leading)
        layout.advance(leading / 2)
    return layout


def _layout_grid(table: Table) -> _Layout:
    layout = _Layout()
    columns = table.columns[:MAX_GRID_COLUMNS]
    column_width = (PAGE_WIDTH - 2 * MARGIN) / max(len(columns), 1)
    row_height = 18.0

    def draw_header() -> None:
        for index, column in enumerate(columns):
            layout.draw(MARGIN + index * column_width, column[:HEADER_CHARS], "Helvetica-Bold", 10.0)
        layout.advance(row_height)

    layout.draw(MARGIN, TITLE, "Helvetica-Bold", 16.0)
    layout.advance(28.0)
    if not columns:
        return layout
    draw_header()
    for row in table.rows:
        if layout.ensure_space(row_height):
            draw_header()
        for index, column in enumerate(columns):
            text = stringify(row.get(column))[:CELL_CHARS]
            layout.draw(MARGIN + index * column_width, text, "Helvetica", 9.0)
        layout.advance(row_height)
    return layout


def render_layout(layout: _Layout) -> bytes:
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(TITLE)
    total = len(layout.pages)
    for number, ops in enumerate(layout.pages, start=1):
        for op in ops:
            pdf.setFont(op.font, op.size)
            pdf.drawString(op.x, op.y, op.text)
        pdf.setFont("Helvetica", 9.0)
        pdf.drawCentredString(PAGE_WIDTH / 2, FOOTER_Y, FOOTER_FORMAT.format(page=number, total=total))
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


@register_writer("pdf")
def write_pdf(table: Table) -> bytes:
    if "content" in table.columns:
        layout = _layout_paragraphs(table)
    else:
        layout = _layout_grid(table)
    return render_layout(layout)


__all__ = ["CELL_CHARS", "HEADER_CHARS", "MAX_GRID_COLUMNS", "render_layout", "write_pdf"]
