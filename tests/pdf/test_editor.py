from __future__ import annotations

import io
from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfReader, PdfWriter

from intelliconvert.core.exceptions import PageRangeError, PDFLoadError
from intelliconvert.pdf import (
    extract_pages,
    get_pdf_info,
    merge_pdfs,
    rotate_pdf,
    split_pdf,
    split_ranges,
)


def _reader(data: bytes) -> PdfReader:
    return PdfReader(io.BytesIO(data))


def _sized_pdf(widths: list[int]) -> bytes:
    """One page per width so pages can be told apart after copying."""

    writer = PdfWriter()
    for width in widths:
        writer.add_blank_page(width=width, height=100)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def _widths(data: bytes) -> list[int]:
    return [int(page.mediabox.width) for page in _reader(data).pages]


def test_merge_keeps_input_order(pdf_factory: Callable[..., Path]) -> None:
    first = pdf_factory("one.pdf", width=100)
    second = pdf_factory("two.pdf", width=200)

    merged = merge_pdfs([first, second])

    assert _widths(merged) == [100, 200]


def test_merge_accepts_bytes() -> None:
    merged = merge_pdfs([_sized_pdf([10, 20]), _sized_pdf([30])])

    assert _widths(merged) == [10, 20, 30]


def test_merge_rejects_corrupt_input(pdf_factory: Callable[..., Path]) -> None:
    with pytest.raises(PDFLoadError):
        merge_pdfs([pdf_factory("ok.pdf"), b"%PDF-1.4 garbage"])


def test_merge_requires_inputs() -> None:
    with pytest.raises(PDFLoadError):
        merge_pdfs([])


def test_merge_rejects_empty_document() -> None:
    buffer = io.BytesIO()
    PdfWriter().write(buffer)

    with pytest.raises(PDFLoadError):
        merge_pdfs([buffer.getvalue()])


def test_split_pdf_per_page() -> None:
    result = split_pdf(_sized_pdf([10, 20, 30]))

    assert result.total_pages == 3
    assert [page.name for page in result.pages] == ["page_1.pdf", "page_2.pdf", "page_3.pdf"]
    assert [_widths(page.data) for page in result.pages] == [[10], [20], [30]]


def test_split_ranges() -> None:
    result = split_ranges(_sized_pdf([10, 20, 30, 40, 50]), "1-3,5")

    assert [page.name for page in result.pages] == ["split_pages_1-3.pdf", "split_page_5.pdf"]
    assert _widths(result.pages[0].data) == [10, 20, 30]
    assert _widths(result.pages[1].data) == [50]


def test_split_ranges_out_of_bounds() -> None:
    with pytest.raises(PageRangeError):
        split_ranges(_sized_pdf([10, 20]), "2-3")


def test_extract_drops_out_of_range_pages(sample_pdf: Path) -> None:
    source = _sized_pdf([10, 20, 30, 40, 50])

    extracted = extract_pages(source, [2, 4, 8])

    assert _widths(extracted) == [20, 40]


def test_extract_keeps_order_and_duplicates() -> None:
    extracted = extract_pages(_sized_pdf([10, 20, 30]), [3, 1, 3])

    assert _widths(extracted) == [30, 10, 30]


def test_extract_strict_mode() -> None:
    with pytest.raises(PageRangeError) as excinfo:
        extract_pages(_sized_pdf([10, 20]), [1, 0, 5], strict=True)

    assert excinfo.value.pages == [0, 5]
    assert excinfo.value.total_pages == 2


def test_extract_strict_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INTELLICONVERT_STRICT_PAGES", "1")

    with pytest.raises(PageRangeError):
        extract_pages(_sized_pdf([10]), [2])


def test_extract_does_not_touch_source(sample_pdf: Path) -> None:
    before = sample_pdf.read_bytes()

    extract_pages(sample_pdf, [1])

    assert sample_pdf.read_bytes() == before


def test_rotate_four_times_returns_to_start() -> None:
    data = _sized_pdf([10])
    for _ in range(4):
        data = rotate_pdf(data, 90)

    assert _reader(data).pages[0].rotation == 0


def test_rotate_is_additive_and_normalised() -> None:
    once = rotate_pdf(_sized_pdf([10]), 270)
    twice = rotate_pdf(once, 180)

    assert _reader(once).pages[0].rotation == 270
    assert _reader(twice).pages[0].rotation == 90


def test_rotate_selected_pages_only() -> None:
    rotated = rotate_pdf(_sized_pdf([10, 20, 30]), -90, page_numbers=[2, 9])

    assert [page.rotation for page in _reader(rotated).pages] == [0, 270, 0]


def test_rotate_rejects_odd_angles() -> None:
    with pytest.raises(ValueError):
        rotate_pdf(_sized_pdf([10]), 45)


def test_get_pdf_info(sample_pdf: Path) -> None:
    info = get_pdf_info(sample_pdf)

    assert info.page_count == 5
    assert info.title == "Sample"
    assert info.author == ""


def test_encrypted_with_empty_password_is_readable() -> None:
    writer = PdfWriter()
    writer.add_blank_page(width=50, height=50)
    writer.encrypt(user_password="", owner_password="owner")
    buffer = io.BytesIO()
    writer.write(buffer)

    assert get_pdf_info(buffer.getvalue()).page_count == 1


def test_encrypted_with_password_is_rejected() -> None:
    writer = PdfWriter()
    writer.add_blank_page(width=50, height=50)
    writer.encrypt(user_password="secret", owner_password="owner")
    buffer = io.BytesIO()
    writer.write(buffer)

    with pytest.raises(PDFLoadError):
        split_pdf(buffer.getvalue())
