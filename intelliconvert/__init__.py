"""Tabular file conversion and PDF editing toolkit."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from . import convert as conversion
from . import formats, pdf
from .convert import BatchItem, ConversionResult, ParsedFile, SourceFile, convert, convert_batch, convert_file, parse_file
from .core.config import Settings, load_settings
from .core.exceptions import (
    CompressionError,
    ErrorKind,
    ImageEmbedError,
    IntelliConvertError,
    PageRangeError,
    ParseError,
    PDFLoadError,
    SerializationError,
    UnsupportedFormatError,
)
from .formats import FORMATS, FormatSpec, readable_formats, resolve_format, writable_formats
from .pdf import (
    CompressionLevel,
    CompressionResult,
    DocumentInfo,
    compress_pdf,
    extract_pages,
    get_compression_info,
    get_pdf_info,
    merge_pdfs,
    rotate_pdf,
    split_pdf,
)
from .table import Row, Table
from .tools import load_builtin_plugins
from .tools.common.interfaces import ConversionContext
from .tools.common.pipeline import ToolRegistry, register_tool, registry

__version__ = "1.0.0"

load_builtin_plugins()

__all__ = [
    "conversion",
    "formats",
    "pdf",
    "BatchItem",
    "ConversionResult",
    "ParsedFile",
    "SourceFile",
    "convert",
    "convert_batch",
    "convert_file",
    "parse_file",
    "Settings",
    "load_settings",
    "CompressionError",
    "ErrorKind",
    "ImageEmbedError",
    "IntelliConvertError",
    "PageRangeError",
    "ParseError",
    "PDFLoadError",
    "SerializationError",
    "UnsupportedFormatError",
    "FORMATS",
    "FormatSpec",
    "readable_formats",
    "resolve_format",
    "writable_formats",
    "CompressionLevel",
    "CompressionResult",
    "DocumentInfo",
    "compress_pdf",
    "extract_pages",
    "get_compression_info",
    "get_pdf_info",
    "merge_pdfs",
    "rotate_pdf",
    "split_pdf",
    "Row",
    "Table",
    "ConversionContext",
    "ToolRegistry",
    "registry",
    "register_tool",
    "convert_documents",
    "merge_documents",
    "split_document",
    "extract_document_pages",
    "compress_document",
]


def convert_documents(
    inputs: Iterable[str | Path],
    output_dir: str | Path,
    target_format: str,
    *,
    columns: Sequence[str] | None = None,
) -> list[BatchItem]:
    """Convenience wrapper around the convert plugin."""

    context = ConversionContext(
        output_path=output_dir,
        config={"inputs": list(inputs), "format": target_format, "columns": columns},
    )
    return registry.run("convert", context)


def merge_documents(inputs: Iterable[str | Path], output: str | Path) -> Path:
    """Convenience wrapper around the merge plugin."""

    context = ConversionContext(output_path=output, config={"inputs": list(inputs)})
    return registry.run("merge", context)


def split_document(
    input: str | Path,
    output_dir: str | Path,
    *,
    ranges: str | None = None,
) -> list[Path]:
    """Convenience wrapper around the split plugin."""

    context = ConversionContext(input_path=input, output_path=output_dir, config={"ranges": ranges})
    return registry.run("split", context)


def extract_document_pages(
    input: str | Path,
    page_numbers: Sequence[int],
    output: str | Path,
) -> Path:
    """Convenience wrapper around the extract plugin."""

    context = ConversionContext(input_path=input, output_path=output, config={"pages": page_numbers})
    return registry.run("extract", context)


def compress_document(
    input: str | Path,
    output: str | Path,
    *,
    level: str | None = None,
) -> CompressionResult:
    """Convenience wrapper around the compression plugin."""

    context = ConversionContext(input_path=input, output_path=output, config={"level": level})
    return registry.run("compress", context)
