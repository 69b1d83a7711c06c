"""Loading and saving helpers shared by the PDF tools."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Union

from pypdf import PdfReader, PdfWriter

from ..core.exceptions import PDFLoadError
from ..core.utils import get_logger

LOGGER = get_logger("intelliconvert.pdf")

PdfSource = Union[bytes, bytearray, str, Path]


def read_source(source: PdfSource) -> bytes:
    """Return the raw bytes of *source*, reading it from disk when needed."""

    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    path = Path(source).expanduser()
    try:
        return path.read_bytes()
    except OSError as exc:
        raise PDFLoadError(f"Unable to read PDF: {path}") from exc


def load_reader(source: PdfSource, *, require_pages: bool = True) -> PdfReader:
    """Open *source* as a private in-memory :class:`PdfReader`.

    Encrypted documents are opened with the empty user password. Anything
    that cannot be parsed or decrypted raises :class:`PDFLoadError`.
    """

    data = read_source(source)
    try:
        reader = PdfReader(io.BytesIO(data))
    except Exception as exc:
        LOGGER.error("Failed to read PDF: %s", exc)
        raise PDFLoadError(f"Unable to read PDF: {exc}") from exc

    if reader.is_encrypted:
        LOGGER.debug("Attempting to decrypt encrypted PDF")
        try:
            decrypted = reader.decrypt("")
        except Exception as exc:
            raise PDFLoadError("Encrypted PDF cannot be decrypted") from exc
        if not decrypted:
            raise PDFLoadError("Encrypted PDF requires a password")

    try:
        page_count = len(reader.pages)
    except Exception as exc:
        raise PDFLoadError(f"PDF page tree is unreadable: {exc}") from exc
    if require_pages and page_count == 0:
        raise PDFLoadError("PDF contains no pages")
    return reader


def writer_to_bytes(writer: PdfWriter) -> bytes:
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


__all__ = ["PdfSource", "load_reader", "read_source", "writer_to_bytes"]
