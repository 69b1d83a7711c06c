"""Text overlays drawn on every page: watermarks and page numbers.

Each overlay is drawn with reportlab on a blank page of the same size and
merged onto the target page with :meth:`pypdf.PageObject.merge_page`.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Callable

from pypdf import PageObject, PdfReader, PdfWriter
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from ..core.utils import get_logger
from .utils import PdfSource, load_reader, writer_to_bytes

LOGGER = get_logger("intelliconvert.pdf")

Color = tuple[float, float, float]

HORIZONTAL_MARGIN = 40.0
BOTTOM_MARGIN = 30.0
TOP_MARGIN = 40.0

POSITIONS = (
    "top-left",
    "top-center",
    "top-right",
    "bottom-left",
    "bottom-center",
    "bottom-right",
)


@dataclass(frozen=True, slots=True)
class WatermarkOptions:
    font_size: float = 50.0
    opacity: float = 0.3
    rotation: float = -45.0
    color: Color = (0.5, 0.5, 0.5)
    font: str = "Helvetica"

    def __post_init__(self) -> None:
        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError(f"Opacity must be between 0 and 1, got {self.opacity}")
        if self.font_size <= 0:
            raise ValueError("Font size must be positive")


@dataclass(frozen=True, slots=True)
class PageNumberOptions:
    position: str = "bottom-center"
    font_size: float = 12.0
    format: str = "Page {n} of {total}"
    color: Color = (0.3, 0.3, 0.3)
    font: str = "Helvetica"

    def __post_init__(self) -> None:
        if self.position not in POSITIONS:
            raise ValueError(f"Unknown position {self.position!r}; expected one of {', '.join(POSITIONS)}")
        if self.font_size <= 0:
            raise ValueError("Font size must be positive")


def _overlay(width: float, height: float, draw: Callable[[canvas.Canvas], None]) -> PageObject:
    buffer = io.BytesIO()
    sheet = canvas.Canvas(buffer, pagesize=(width, height))
    draw(sheet)
    sheet.showPage()
    sheet.save()
    return PdfReader(io.BytesIO(buffer.getvalue())).pages[0]


def _page_box(page: PageObject) -> tuple[float, float, float, float]:
    box = page.mediabox
    return float(box.left), float(box.bottom), float(box.width), float(box.height)


def add_watermark(source: PdfSource, text: str, options: WatermarkOptions | None = None) -> bytes:
    """Draw *text* centred on every page."""

    if not text:
        raise ValueError("Watermark text must not be empty")
    options = options or WatermarkOptions()
    text_width = stringWidth(text, options.font, options.font_size)

    writer = PdfWriter(clone_from=load_reader(source))
    for page in writer.pages:
        left, bottom, width, height = _page_box(page)

        def draw(sheet: canvas.Canvas) -> None:
            sheet.setFillColorRGB(*options.color)
            sheet.setFillAlpha(options.opacity)
            sheet.setFont(options.font, options.font_size)
            sheet.translate(left + width / 2, bottom + height / 2)
            sheet.rotate(options.rotation)
            sheet.drawString(-text_width / 2, -options.font_size * 0.35, text)

        page.merge_page(_overlay(left + width, bottom + height, draw))

    LOGGER.info("Watermarked %d pages", len(writer.pages))
    return writer_to_bytes(writer)


def page_number_position(
    position: str,
    width: float,
    height: float,
    text_width: float,
) -> tuple[float, float]:
    """Return the text origin for an anchor on a ``width`` x ``height`` page."""

    vertical, horizontal = position.split("-")
    y = BOTTOM_MARGIN if vertical == "bottom" else height - TOP_MARGIN
    if horizontal == "left":
        x = HORIZONTAL_MARGIN
    elif horizontal == "right":
        x = width - text_width - HORIZONTAL_MARGIN
    else:
        x = (width - text_width) / 2
    return x, y


def add_page_numbers(source: PdfSource, options: PageNumberOptions | None = None) -> bytes:
    """Stamp ``options.format`` with ``{n}`` and ``{total}`` on every page."""

    options = options or PageNumberOptions()
    writer = PdfWriter(clone_from=load_reader(source))
    total = len(writer.pages)
    for number, page in enumerate(writer.pages, start=1):
        left, bottom, width, height = _page_box(page)
        label = options.format.replace("{n}", str(number)).replace("{total}", str(total))
        x, y = page_number_position(
            options.position,
            width,
            height,
            stringWidth(label, options.font, options.font_size),
        )

        def draw(sheet: canvas.Canvas) -> None:
            sheet.setFillColorRGB(*options.color)
            sheet.setFont(options.font, options.font_size)
            sheet.drawString(left + x, bottom + y, label)

        page.merge_page(_overlay(left + width, bottom + height, draw))

    LOGGER.info("Numbered %d pages", total)
    return writer_to_bytes(writer)


__all__ = [
    "POSITIONS",
    "PageNumberOptions",
    "WatermarkOptions",
    "add_page_numbers",
    "add_watermark",
    "page_number_position",
]
