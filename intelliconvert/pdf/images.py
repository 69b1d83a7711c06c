"""Conversions between PDF pages and raster images."""

from __future__ import annotations

import base64
import io
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Iterable

import pypdfium2 as pdfium
from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..core.config import load_settings
from ..core.exceptions import ImageEmbedError, PDFLoadError
from ..core.utils import PathLike, get_logger, resolve_path
from .utils import PdfSource, read_source

LOGGER = get_logger("intelliconvert.pdf")

_KIND_BY_MIME = {"image/jpeg": "jpeg", "image/jpg": "jpeg", "image/png": "png"}
_KIND_BY_EXTENSION = {".jpg": "jpeg", ".jpeg": "jpeg", ".png": "png"}
_PIL_FORMATS = {"jpeg": {"JPEG", "MPO"}, "png": {"PNG"}}


@dataclass(frozen=True, slots=True)
class ImageInput:
    """An image file to place on its own PDF page."""

    name: str
    data: bytes
    mime_type: str | None = None

    @classmethod
    def from_path(cls, path: PathLike) -> "ImageInput":
        resolved = resolve_path(path)
        return cls(name=resolved.name, data=resolved.read_bytes())

    @property
    def kind(self) -> str | None:
        """``"jpeg"``/``"png"`` from the MIME type or extension, else ``None``."""

        if self.mime_type and self.mime_type.lower() in _KIND_BY_MIME:
            return _KIND_BY_MIME[self.mime_type.lower()]
        return _KIND_BY_EXTENSION.get(PurePath(self.name).suffix.lower())


@dataclass(frozen=True, slots=True)
class RenderedPage:
    data: bytes
    name: str

    @property
    def data_url(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.data).decode("ascii")


def _probe(image: ImageInput, kind: str) -> tuple[int, int]:
    try:
        with Image.open(io.BytesIO(image.data)) as probe:
            detected = probe.format
            size = probe.size
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageEmbedError(f"Cannot decode {image.name}: {exc}") from exc
    if detected not in _PIL_FORMATS[kind]:
        raise ImageEmbedError(f"{image.name} is declared as {kind} but contains {detected} data")
    return size


def images_to_pdf(images: Iterable[ImageInput | str | Path]) -> bytes:
    """Place every JPEG/PNG image on a page matching its pixel size.

    Images whose type is neither JPEG nor PNG are skipped.
    """

    buffer = io.BytesIO()
    document = canvas.Canvas(buffer)
    embedded = 0
    for item in images:
        image = item if isinstance(item, ImageInput) else ImageInput.from_path(item)
        kind = image.kind
        if kind is None:
            LOGGER.warning("Skipping unsupported image %s", image.name)
            continue
        width, height = _probe(image, kind)
        document.setPageSize((width, height))
        try:
            document.drawImage(ImageReader(io.BytesIO(image.data)), 0, 0, width=width, height=height, mask="auto")
        except Exception as exc:
            raise ImageEmbedError(f"Cannot embed {image.name}: {exc}") from exc
        document.showPage()
        embedded += 1

    if embedded == 0:
        raise ImageEmbedError("No JPEG or PNG images to embed")
    document.save()
    LOGGER.info("Embedded %d images into PDF", embedded)
    return buffer.getvalue()


def pdf_to_images(source: PdfSource, scale: float | None = None) -> list[RenderedPage]:
    """Rasterize every page to PNG at *scale* times the 72 dpi page size.

    The scale defaults to ``INTELLICONVERT_RENDER_SCALE`` (2.0).
    """

    if scale is None:
        scale = load_settings().render_scale
    if scale <= 0:
        raise ValueError("Scale must be positive")
    data = read_source(source)
    try:
        document = pdfium.PdfDocument(data)
    except pdfium.PdfiumError as exc:
        raise PDFLoadError(f"Unable to open PDF for rendering: {exc}") from exc

    rendered: list[RenderedPage] = []
    try:
        for index in range(len(document)):
            page = document[index]
            bitmap = page.render(scale=scale)
            image = bitmap.to_pil()
            output = io.BytesIO()
            image.save(output, format="PNG")
            rendered.append(RenderedPage(data=output.getvalue(), name=f"page_{index + 1}.png"))
    finally:
        document.close()

    LOGGER.info("Rendered %d pages at scale %.2f", len(rendered), scale)
    return rendered


__all__ = ["ImageInput", "RenderedPage", "images_to_pdf", "pdf_to_images"]
