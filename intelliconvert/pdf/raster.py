"""Downsample and re-encode raster images as JPEG."""

from __future__ import annotations

import io
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from ..core.utils import get_logger

LOGGER = get_logger("intelliconvert.compress")

_MIN_QUALITY = 1
_MAX_QUALITY = 95


@dataclass(frozen=True, slots=True)
class RecompressedImage:
    data: bytes
    width: int
    height: int
    mode: str


def jpeg_quality(quality: float) -> int:
    """Map a ``0.0``-``1.0`` quality onto Pillow's JPEG scale."""

    return max(_MIN_QUALITY, min(_MAX_QUALITY, round(quality * 100)))


def target_size(width: int, height: int, max_width: int | None) -> tuple[int, int]:
    """Scale ``(width, height)`` down to *max_width* keeping the aspect ratio."""

    if max_width is None or width <= max_width:
        return width, height
    ratio = max_width / width
    return max_width, max(1, round(height * ratio))


def _flatten(image: Image.Image) -> Image.Image:
    if image.mode in {"RGB", "L"}:
        return image
    if image.mode in {"RGBA", "LA", "P", "PA"}:
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if image.mode in {"1", "I;16", "I", "F"}:
        return image.convert("L")
    return image.convert("RGB")


def recompress_image(image: Image.Image, quality: float, max_width: int | None) -> RecompressedImage:
    """Resize *image* to fit *max_width* and encode it as JPEG."""

    flattened = _flatten(image)
    size = target_size(flattened.width, flattened.height, max_width)
    if size != flattened.size:
        flattened = flattened.resize(size, Image.Resampling.LANCZOS)
    output = io.BytesIO()
    flattened.save(output, format="JPEG", quality=jpeg_quality(quality), optimize=True)
    return RecompressedImage(
        data=output.getvalue(),
        width=flattened.width,
        height=flattened.height,
        mode=flattened.mode,
    )


def recompress(data: bytes, quality: float, max_width: int | None) -> bytes | None:
    """Decode *data*, downsample and re-encode it; ``None`` when undecodable."""

    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            return recompress_image(image, quality, max_width).data
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        LOGGER.debug("Unable to decode image for recompression: %s", exc)
        return None


__all__ = ["RecompressedImage", "jpeg_quality", "recompress", "recompress_image", "target_size"]
