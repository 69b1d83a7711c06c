from __future__ import annotations

import io
from pathlib import Path

import pytest
from pypdf import PageObject, PdfReader
from reportlab.pdfbase.pdfmetrics import stringWidth

from intelliconvert.pdf import PageNumberOptions, WatermarkOptions, add_page_numbers, add_watermark
from intelliconvert.pdf.overlay import page_number_position


def test_watermark_every_page(sample_pdf: Path) -> None:
    before = sample_pdf.read_bytes()

    reader = PdfReader(io.BytesIO(add_watermark(sample_pdf, "CONFIDENTIAL")))

    assert len(reader.pages) == 5
    assert all(b"CONFIDENTIAL" in page.get_contents().get_data() for page in reader.pages)
    assert sample_pdf.read_bytes() == before


def _multiply(m: list[float], n: list[float]) -> list[float]:
    return [
        m[0] * n[0] + m[1] * n[2],
        m[0] * n[1] + m[1] * n[3],
        m[2] * n[0] + m[3] * n[2],
        m[2] * n[1] + m[3] * n[3],
        m[4] * n[0] + m[5] * n[2] + n[4],
        m[4] * n[1] + m[5] * n[3] + n[5],
    ]


def _text_origin(page: PageObject) -> tuple[float, float]:
    """Page space origin of the first text matrix drawn on *page*."""

    ctm = [1.0, 0.0, 0.0, 1.0, 0.0, 0.0]
    saved: list[list[float]] = []
    for operands, operator in page.get_contents().operations:
        if operator == b"q":
            saved.append(ctm)
        elif operator == b"Q":
            ctm = saved.pop()
        elif operator == b"cm":
            ctm = _multiply([float(value) for value in operands], ctm)
        elif operator == b"Tm":
            origin = _multiply([float(value) for value in operands], ctm)
            return origin[4], origin[5]
    raise AssertionError("no text drawn")


def test_watermark_is_centred_on_measured_width(sample_pdf: Path) -> None:
    options = WatermarkOptions(font_size=20, rotation=0)

    page = PdfReader(io.BytesIO(add_watermark(sample_pdf, "CONFIDENTIAL", options))).pages[0]

    x, y = _text_origin(page)
    assert x == pytest.approx((200 - stringWidth("CONFIDENTIAL", "Helvetica", 20)) / 2, abs=0.01)
    assert y == pytest.approx(100 - 20 * 0.35, abs=0.01)


def test_watermark_requires_text(sample_pdf: Path) -> None:
    with pytest.raises(ValueError):
        add_watermark(sample_pdf, "")


def test_watermark_options_validation() -> None:
    with pytest.raises(ValueError):
        WatermarkOptions(opacity=1.5)


def test_page_numbers_default_format(pdf_factory) -> None:
    source = pdf_factory("three.pdf", pages=3, width=300, height=300)

    reader = PdfReader(io.BytesIO(add_page_numbers(source)))

    texts = [page.extract_text() for page in reader.pages]
    assert "Page 1 of 3" in texts[0]
    assert "Page 3 of 3" in texts[2]


def test_page_numbers_custom_format(pdf_factory) -> None:
    source = pdf_factory("two.pdf", pages=2, width=300, height=300)
    options = PageNumberOptions(position="top-right", format="{n}/{total}")

    reader = PdfReader(io.BytesIO(add_page_numbers(source, options)))

    assert "2/2" in reader.pages[1].extract_text()


def test_unknown_position() -> None:
    with pytest.raises(ValueError):
        PageNumberOptions(position="middle")


@pytest.mark.parametrize(
    ("position", "expected"),
    [
        ("bottom-left", (40.0, 30.0)),
        ("bottom-center", (250.0, 30.0)),
        ("bottom-right", (460.0, 30.0)),
        ("top-left", (40.0, 560.0)),
        ("top-center", (250.0, 560.0)),
        ("top-right", (460.0, 560.0)),
    ],
)
def test_page_number_position(position: str, expected: tuple[float, float]) -> None:
    assert page_number_position(position, 600, 600, 100) == expected
