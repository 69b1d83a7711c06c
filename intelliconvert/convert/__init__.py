"""Conversion orchestration between the format readers and writers."""

from __future__ import annotations

from .orchestrator import (
    BatchItem,
    ConversionResult,
    ParsedFile,
    SourceFile,
    convert,
    convert_batch,
    convert_file,
    output_filename,
    parse_file,
    write_result,
)

__all__ = [
    "BatchItem",
    "ConversionResult",
    "ParsedFile",
    "SourceFile",
    "convert",
    "convert_batch",
    "convert_file",
    "output_filename",
    "parse_file",
    "write_result",
]
