"""Image to PDF and PDF to image tools."""

from __future__ import annotations

from pathlib import Path

from ...core.utils import ensure_parent_dir, get_logger
from ...pdf import ImageInput, images_to_pdf, pdf_to_images
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("intelliconvert.tools.images")


@register_tool("images-to-pdf")
class ImagesToPdfTool(BaseTool):
    """Build a PDF with one page per JPEG or PNG image."""

    def run(self) -> Path:
        context = self.context
        output = ensure_parent_dir(context.require_output("Images to PDF"))
        inputs = context.inputs()
        if not inputs:
            raise ValueError("Images to PDF requires at least one image")

        LOGGER.debug("Embedding %d images into %s", len(inputs), output)
        output.write_bytes(images_to_pdf(ImageInput.from_path(path) for path in inputs))
        return output


@register_tool("pdf-to-images")
class PdfToImagesTool(BaseTool):
    """Render every page of a PDF to PNG."""

    def run(self) -> list[Path]:
        context = self.context
        source = context.require_input("PDF to images")
        output_dir = context.require_output("PDF to images")
        output_dir.mkdir(parents=True, exist_ok=True)

        written: list[Path] = []
        for page in pdf_to_images(source, scale=context.config.get("scale")):
            destination = output_dir / f"{source.stem}_{page.name}"
            destination.write_bytes(page.data)
            written.append(destination)

        LOGGER.debug("Wrote %d page images to %s", len(written), output_dir)
        return written
