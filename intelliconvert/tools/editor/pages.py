"""Tools that rewrite every page: rotate, watermark, page numbers, info."""

from __future__ import annotations

from pathlib import Path

from ...core.utils import ensure_parent_dir, get_logger
from ...pdf import (
    DocumentInfo,
    PageNumberOptions,
    WatermarkOptions,
    add_page_numbers,
    add_watermark,
    get_pdf_info,
    rotate_pdf,
)
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("intelliconvert.tools.pages")


@register_tool("rotate")
class RotateTool(BaseTool):
    """Rotate pages by a multiple of 90 degrees."""

    def run(self) -> Path:
        context = self.context
        source = context.require_input("Rotate")
        output = ensure_parent_dir(context.require_output("Rotate"))
        degrees = int(context.config.get("degrees", 90))
        pages = context.config.get("pages")

        LOGGER.debug("Rotating %s by %d degrees (pages=%s)", source, degrees, pages)
        output.write_bytes(rotate_pdf(source, degrees, pages))
        return output


@register_tool("watermark")
class WatermarkTool(BaseTool):
    """Stamp a text watermark across the centre of every page."""

    def run(self) -> Path:
        context = self.context
        source = context.require_input("Watermark")
        output = ensure_parent_dir(context.require_output("Watermark"))
        text = context.config.get("text")
        if not text:
            raise ValueError("Watermark requires text")

        options = context.config.get("options") or WatermarkOptions()
        output.write_bytes(add_watermark(source, text, options))
        return output


@register_tool("page-numbers")
class PageNumbersTool(BaseTool):
    """Number every page at one of six anchor positions."""

    def run(self) -> Path:
        context = self.context
        source = context.require_input("Page numbering")
        output = ensure_parent_dir(context.require_output("Page numbering"))

        options = context.config.get("options")
        if options is None:
            options = PageNumberOptions(position=context.config.get("position", "bottom-center"))
        output.write_bytes(add_page_numbers(source, options))
        return output


@register_tool("info")
class InfoTool(BaseTool):
    """Report the page count and document metadata of a PDF."""

    def run(self) -> DocumentInfo:
        context = self.context
        info = get_pdf_info(context.require_input("Info"))
        return info
