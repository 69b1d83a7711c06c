"""Page level PDF operations: merge, split, extract, rotate and info.

Every operation loads its own in-memory copy of the input and returns fresh
bytes, so the caller's document is never modified.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from pypdf import PdfReader, PdfWriter

from ..core.config import load_settings
from ..core.exceptions import PageRangeError, PDFLoadError
from ..core.utils import get_logger
from .ranges import PageRange, parse_page_ranges
from .utils import PdfSource, load_reader, writer_to_bytes

LOGGER = get_logger("intelliconvert.pdf")

RIGHT_ANGLE = 90


@dataclass(frozen=True, slots=True)
class PageDocument:
    """A generated single document with its suggested file name."""

    data: bytes
    name: str


@dataclass(frozen=True, slots=True)
class SplitResult:
    pages: list[PageDocument]
    total_pages: int


@dataclass(frozen=True, slots=True)
class DocumentInfo:
    page_count: int
    title: str = ""
    author: str = ""
    subject: str = ""
    creator: str = ""


def _copy_pages(reader: PdfReader, indices: Iterable[int]) -> bytes:
    writer = PdfWriter()
    for index in indices:
        writer.add_page(reader.pages[index])
    return writer_to_bytes(writer)


def merge_pdfs(sources: Sequence[PdfSource]) -> bytes:
    """Concatenate every page of *sources* in input order."""

    if not sources:
        raise PDFLoadError("No input PDFs provided")

    writer = PdfWriter()
    for position, source in enumerate(sources, start=1):
        reader = load_reader(source)
        LOGGER.debug("Adding %d pages from input %d", len(reader.pages), position)
        for page in reader.pages:
            writer.add_page(page)

    data = writer_to_bytes(writer)
    LOGGER.info("Merged %d PDFs into %d pages", len(sources), len(writer.pages))
    return data


def split_pdf(source: PdfSource) -> SplitResult:
    """Produce one single-page document per source page."""

    reader = load_reader(source)
    total_pages = len(reader.pages)
    pages = [
        PageDocument(data=_copy_pages(reader, [index]), name=f"page_{index + 1}.pdf")
        for index in range(total_pages)
    ]
    LOGGER.info("Split PDF into %d pages", total_pages)
    return SplitResult(pages=pages, total_pages=total_pages)


def split_ranges(source: PdfSource, ranges: str | Sequence[object]) -> SplitResult:
    """Produce one document per page range, e.g. ``"1-3,5"``."""

    reader = load_reader(source)
    total_pages = len(reader.pages)
    page_ranges: list[PageRange] = parse_page_ranges(ranges, total_pages=total_pages)
    pages = [
        PageDocument(
            data=_copy_pages(reader, (number - 1 for number in page_range.pages())),
            name=f"split_{page_range.label()}.pdf",
        )
        for page_range in page_ranges
    ]
    LOGGER.info("Split PDF into %d ranges", len(pages))
    return SplitResult(pages=pages, total_pages=total_pages)


def extract_pages(
    source: PdfSource,
    page_numbers: Sequence[int],
    *,
    strict: bool | None = None,
) -> bytes:
    """Copy the 1-based *page_numbers* in the order given.

    Duplicates are kept. Out-of-range numbers are dropped in lenient mode and
    raise :class:`PageRangeError` in strict mode; the default comes from
    ``INTELLICONVERT_STRICT_PAGES``.
    """

    if strict is None:
        strict = load_settings().strict_pages
    reader = load_reader(source)
    total_pages = len(reader.pages)
    numbers = [int(number) for number in page_numbers]
    invalid = [number for number in numbers if not 1 <= number <= total_pages]
    if invalid:
        if strict:
            raise PageRangeError(invalid, total_pages)
        LOGGER.warning("Ignoring out-of-range pages %s (document has %d)", invalid, total_pages)
    valid = [number for number in numbers if 1 <= number <= total_pages]
    LOGGER.info("Extracting pages %s", valid)
    return _copy_pages(reader, (number - 1 for number in valid))


def rotate_pdf(
    source: PdfSource,
    degrees: int = RIGHT_ANGLE,
    page_numbers: Sequence[int] | None = None,
) -> bytes:
    """Add *degrees* to the rotation of the targeted pages.

    Rotation accumulates on the current angle and is stored normalised to
    ``0``, ``90``, ``180`` or ``270``. All pages are targeted when
    *page_numbers* is ``None``; numbers outside the document are ignored.
    """

    if degrees % RIGHT_ANGLE:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {degrees}")

    reader = load_reader(source)
    writer = PdfWriter(clone_from=reader)
    total_pages = len(writer.pages)
    if page_numbers is None:
        targets = range(total_pages)
    else:
        targets = [number - 1 for number in page_numbers if 1 <= number <= total_pages]

    for index in dict.fromkeys(targets):
        page = writer.pages[index]
        page.rotation = (page.rotation + degrees) % 360
        LOGGER.debug("Page %d rotation set to %d", index + 1, page.rotation)

    return writer_to_bytes(writer)


def _metadata_text(value: object) -> str:
    return "" if value is None else str(value)


def get_pdf_info(source: PdfSource) -> DocumentInfo:
    """Read page count and document information without modifying anything."""

    reader = load_reader(source, require_pages=False)
    metadata = reader.metadata
    if metadata is None:
        return DocumentInfo(page_count=len(reader.pages))
    return DocumentInfo(
        page_count=len(reader.pages),
        title=_metadata_text(metadata.title),
        author=_metadata_text(metadata.author),
        subject=_metadata_text(metadata.subject),
        creator=_metadata_text(metadata.creator),
    )


__all__ = [
    "DocumentInfo",
    "PageDocument",
    "SplitResult",
    "extract_pages",
    "get_pdf_info",
    "merge_pdfs",
    "rotate_pdf",
    "split_pdf",
    "split_ranges",
]
