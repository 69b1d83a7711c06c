"""PDF editing, rendering and compression on in-memory documents."""

from __future__ import annotations

from .compressor import (
    LEVELS,
    CompressionInfo,
    CompressionLevel,
    CompressionResult,
    ImageOutcome,
    SkipReason,
    compress_pdf,
    get_compression_info,
)
from .editor import (
    DocumentInfo,
    PageDocument,
    SplitResult,
    extract_pages,
    get_pdf_info,
    merge_pdfs,
    rotate_pdf,
    split_pdf,
    split_ranges,
)
from .images import ImageInput, RenderedPage, images_to_pdf, pdf_to_images
from .overlay import POSITIONS, PageNumberOptions, WatermarkOptions, add_page_numbers, add_watermark
from .ranges import PageRange, parse_page_ranges
from .raster import RecompressedImage, recompress, recompress_image
from .utils import PdfSource

__all__ = [
    "LEVELS",
    "POSITIONS",
    "CompressionInfo",
    "CompressionLevel",
    "CompressionResult",
    "DocumentInfo",
    "ImageInput",
    "ImageOutcome",
    "PageDocument",
    "PageNumberOptions",
    "PageRange",
    "PdfSource",
    "RecompressedImage",
    "RenderedPage",
    "SkipReason",
    "SplitResult",
    "WatermarkOptions",
    "add_page_numbers",
    "add_watermark",
    "compress_pdf",
    "extract_pages",
    "get_compression_info",
    "get_pdf_info",
    "images_to_pdf",
    "merge_pdfs",
    "parse_page_ranges",
    "pdf_to_images",
    "recompress",
    "recompress_image",
    "rotate_pdf",
    "split_pdf",
    "split_ranges",
]
