"""Split and extract tools writing page documents to disk."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ...core.utils import ensure_parent_dir, get_logger
from ...pdf import extract_pages, split_pdf, split_ranges
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("intelliconvert.tools.split")


@register_tool("split")
class SplitTool(BaseTool):
    """Split a PDF into single pages or page ranges."""

    def run(self) -> list[Path]:
        context = self.context
        source = context.require_input("Split")
        output_dir = context.require_output("Split")
        output_dir.mkdir(parents=True, exist_ok=True)

        ranges = context.config.get("ranges")
        result = split_ranges(source, ranges) if ranges else split_pdf(source)

        written: list[Path] = []
        for document in result.pages:
            destination = output_dir / f"{source.stem}_{document.name}"
            LOGGER.debug("Writing %s", destination)
            destination.write_bytes(document.data)
            written.append(destination)

        return written


@register_tool("extract")
class ExtractTool(BaseTool):
    """Copy selected pages, in order, into a new PDF."""

    def run(self) -> Path:
        context = self.context
        source = context.require_input("Extract")
        output = ensure_parent_dir(context.require_output("Extract"))

        pages: Sequence[int] | None = context.config.get("pages")
        if pages is None:
            raise ValueError("pages configuration is required for extraction")

        LOGGER.debug("Extracting pages %s to %s", list(pages), output)
        output.write_bytes(extract_pages(source, [int(page) for page in pages], strict=context.config.get("strict")))
        return output
