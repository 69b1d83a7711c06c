"""Exception hierarchy shared by the conversion core and the PDF tools."""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class ErrorKind(str, Enum):
    """Discriminates the failure categories reported to callers."""

    UNSUPPORTED_FORMAT = "unsupported_format"
    PARSE = "parse"
    SERIALIZATION = "serialization"
    PDF_LOAD = "pdf_load"
    IMAGE_EMBED = "image_embed"
    PAGE_RANGE = "page_range"
    COMPRESSION = "compression"


class IntelliConvertError(Exception):
    """Base exception for all intelliconvert errors."""

    kind: ErrorKind


class UnsupportedFormatError(IntelliConvertError):
    """Raised when a file extension or target format has no reader/writer."""

    kind = ErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, fmt: str, *, operation: str = "convert") -> None:
        self.format = fmt
        self.operation = operation
        super().__init__(f"Unsupported format for {operation}: {fmt!r}")


class ParseError(IntelliConvertError):
    """Raised when content does not match the grammar of its format."""

    kind = ErrorKind.PARSE


class SerializationError(IntelliConvertError):
    """Raised when an encoding library fails to produce output."""

    kind = ErrorKind.SERIALIZATION


class PDFLoadError(IntelliConvertError):
    """Raised when a PDF is corrupt, empty or cannot be decrypted."""

    kind = ErrorKind.PDF_LOAD


class ImageEmbedError(IntelliConvertError):
    """Raised when an image cannot be embedded into a PDF page."""

    kind = ErrorKind.IMAGE_EMBED


class PageRangeError(IntelliConvertError):
    """Raised when requested page numbers fall outside the document."""

    kind = ErrorKind.PAGE_RANGE

    def __init__(self, pages: Iterable[object], total_pages: int | None = None) -> None:
        self.pages = list(pages)
        self.total_pages = total_pages
        message = f"Invalid page numbers: {self.pages!r}"
        if total_pages is not None:
            message += f" (document has {total_pages} pages)"
        super().__init__(message)


class CompressionError(IntelliConvertError):
    """Raised when a compressed document cannot be written."""

    kind = ErrorKind.COMPRESSION


__all__ = [
    "ErrorKind",
    "IntelliConvertError",
    "UnsupportedFormatError",
    "ParseError",
    "SerializationError",
    "PDFLoadError",
    "ImageEmbedError",
    "PageRangeError",
    "CompressionError",
]
