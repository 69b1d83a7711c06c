"""Image based PDF compression.

The document is cloned into a :class:`pypdf.PdfWriter`, whose indirect objects
form an arena indexed by object number. Every image XObject in that arena is
decoded, downsampled and re-encoded as JPEG according to the chosen
:class:`CompressionLevel`; the new stream only replaces the old one when it is
strictly smaller. Failures on a single image are recorded in its
:class:`ImageOutcome` and never abort the document.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, Literal

from PIL import Image, UnidentifiedImageError
from pypdf import PdfWriter
from pypdf.generic import ArrayObject, IndirectObject, NameObject, NumberObject, StreamObject

from ..core.config import load_settings
from ..core.exceptions import CompressionError
from ..core.utils import get_logger
from .raster import RecompressedImage, recompress_image
from .utils import PdfSource, load_reader, read_source, writer_to_bytes

LOGGER = get_logger("intelliconvert.compress")

CompressionLevelName = Literal["low", "medium", "extreme"]
ProgressCallback = Callable[[str], None]

# Quality at or above this value is treated as "leave the image alone".
NO_OP_QUALITY = 0.9

_RAW_MODES = {"/DeviceRGB": "RGB", "/DeviceGray": "L", "/DeviceCMYK": "CMYK"}
_ENCODED_IMAGE_FILTERS = {"/DCTDecode", "/JPXDecode"}


@dataclass(frozen=True, slots=True)
class CompressionLevel:
    """JPEG quality and width cap applied to every image."""

    name: str
    quality: float
    max_width: int | None
    strip_metadata: bool = False

    def touches(self, width: int) -> bool:
        """Whether an image *width* pixels wide needs recompression."""

        too_wide = self.max_width is not None and width > self.max_width
        return too_wide or self.quality < NO_OP_QUALITY


LEVELS: dict[str, CompressionLevel] = {
    "low": CompressionLevel("low", quality=1.0, max_width=None),
    "medium": CompressionLevel("medium", quality=0.7, max_width=2000),
    "extreme": CompressionLevel("extreme", quality=0.4, max_width=1200, strip_metadata=True),
}


class SkipReason(str, Enum):
    """Why an image kept its original stream."""

    NOT_NEEDED = "not_needed"
    MASK = "mask"
    UNSUPPORTED = "unsupported"
    DECODE_FAILED = "decode_failed"
    NOT_SMALLER = "not_smaller"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ImageOutcome:
    object_id: int
    original_size: int
    new_size: int
    reason: SkipReason | None = None
    detail: str | None = None

    @property
    def compressed(self) -> bool:
        return self.reason is None


@dataclass(frozen=True, slots=True)
class CompressionResult:
    data: bytes
    level: str
    original_size: int
    compressed_size: int
    images_found: int
    outcomes: list[ImageOutcome] = field(default_factory=list)

    @property
    def bytes_saved(self) -> int:
        return max(self.original_size - self.compressed_size, 0)

    @property
    def compression_ratio(self) -> float:
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size

    @property
    def reduction(self) -> int:
        """Size reduction in percent, never negative."""

        if self.original_size == 0:
            return 0
        return round(max(0.0, 1 - self.compressed_size / self.original_size) * 100)

    @property
    def images_compressed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.compressed)


def resolve_level(level: str | CompressionLevel | None) -> CompressionLevel:
    """Look up a preset; ``None`` uses ``INTELLICONVERT_COMPRESSION_LEVEL``."""

    if isinstance(level, CompressionLevel):
        return level
    if level is None:
        level = load_settings().compression_level
    try:
        return LEVELS[level.lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown compression level: {level}") from exc


def iter_image_objects(writer: PdfWriter) -> Iterator[tuple[int, StreamObject]]:
    """Yield ``(object_number, stream)`` for every image XObject."""

    for object_id, obj in enumerate(writer._objects, start=1):
        if isinstance(obj, StreamObject) and obj.get("/Subtype") == "/Image":
            yield object_id, obj


def _mask_ids(images: list[tuple[int, StreamObject]]) -> set[int]:
    masks: set[int] = set()
    for _, stream in images:
        for key in ("/SMask", "/Mask"):
            ref = stream.raw_get(key) if key in stream else None
            if isinstance(ref, IndirectObject):
                masks.add(ref.idnum)
    return masks


def _filters(stream: StreamObject) -> list[str]:
    value = stream.get("/Filter")
    if value is None:
        return []
    if isinstance(value, ArrayObject):
        return [str(item) for item in value]
    return [str(value)]


def is_decodable(stream: StreamObject) -> bool:
    """Whether :func:`decode_image_stream` knows this stream's encoding."""

    filters = _filters(stream)
    if filters and filters[-1] in _ENCODED_IMAGE_FILTERS:
        return True
    return int(stream.get("/BitsPerComponent", 8)) == 8 and stream.get("/ColorSpace") in _RAW_MODES


def decode_image_stream(stream: StreamObject) -> Image.Image | None:
    """Decode an image XObject into a Pillow image, ``None`` on failure."""

    try:
        data = stream.get_data()
    except Exception as exc:
        LOGGER.debug("Unable to decode image stream filters: %s", exc)
        return None

    filters = _filters(stream)
    try:
        if filters and filters[-1] in _ENCODED_IMAGE_FILTERS:
            image = Image.open(io.BytesIO(data))
            image.load()
            return image
        mode = _RAW_MODES[stream["/ColorSpace"]]
        size = (int(stream["/Width"]), int(stream["/Height"]))
        return Image.frombytes(mode, size, data)
    except (UnidentifiedImageError, OSError, ValueError, KeyError) as exc:
        LOGGER.debug("Unable to decode image pixels: %s", exc)
        return None


def replace_image_stream(stream: StreamObject, image: RecompressedImage) -> None:
    """Swap the stream payload for *image*, keeping the dictionary consistent."""

    stream._data = image.data
    for key in ("/DecodeParms", "/Decode"):
        if key in stream:
            del stream[key]
    stream[NameObject("/Filter")] = NameObject("/DCTDecode")
    stream[NameObject("/Length")] = NumberObject(len(image.data))
    stream[NameObject("/Width")] = NumberObject(image.width)
    stream[NameObject("/Height")] = NumberObject(image.height)
    stream[NameObject("/ColorSpace")] = NameObject("/DeviceGray" if image.mode == "L" else "/DeviceRGB")
    stream[NameObject("/BitsPerComponent")] = NumberObject(8)


def compress_image(object_id: int, stream: StreamObject, level: CompressionLevel) -> ImageOutcome:
    """Recompress one image stream in place, reporting what happened."""

    original_size = len(stream._data)
    if stream.get("/ImageMask"):
        return ImageOutcome(object_id, original_size, original_size, SkipReason.MASK)
    if not level.touches(int(stream.get("/Width", 0))):
        return ImageOutcome(object_id, original_size, original_size, SkipReason.NOT_NEEDED)
    if not is_decodable(stream):
        return ImageOutcome(object_id, original_size, original_size, SkipReason.UNSUPPORTED)

    image = decode_image_stream(stream)
    if image is None:
        return ImageOutcome(object_id, original_size, original_size, SkipReason.DECODE_FAILED)

    recompressed = recompress_image(image, level.quality, level.max_width)
    if len(recompressed.data) >= original_size:
        return ImageOutcome(object_id, original_size, original_size, SkipReason.NOT_SMALLER)

    replace_image_stream(stream, recompressed)
    return ImageOutcome(object_id, original_size, len(recompressed.data))


def _strip_metadata(writer: PdfWriter) -> None:
    writer.metadata = None
    if "/Metadata" in writer.root_object:
        del writer.root_object["/Metadata"]


def compress_pdf(
    source: PdfSource,
    level: str | CompressionLevel | None = None,
    *,
    progress: ProgressCallback | None = None,
) -> CompressionResult:
    """Recompress the images of *source* and repack the document."""

    level_config = resolve_level(level)
    original = read_source(source)
    writer = PdfWriter(clone_from=load_reader(original))

    images = list(iter_image_objects(writer))
    masks = _mask_ids(images)
    total = len(images)
    LOGGER.debug("Found %d image objects (%d masks)", total, len(masks))

    outcomes: list[ImageOutcome] = []
    for position, (object_id, stream) in enumerate(images, start=1):
        if progress is not None:
            progress(f"Optimizing image {position}/{total}...")
        if object_id in masks:
            size = len(stream._data)
            outcomes.append(ImageOutcome(object_id, size, size, SkipReason.MASK))
            continue
        try:
            outcome = compress_image(object_id, stream, level_config)
        except Exception as exc:
            LOGGER.warning("Skipping image object %d: %s", object_id, exc)
            size = len(stream._data)
            outcome = ImageOutcome(object_id, size, size, SkipReason.ERROR, detail=str(exc))
        outcomes.append(outcome)

    for page in writer.pages:
        try:
            page.compress_content_streams()
        except Exception as exc:
            LOGGER.warning("Failed to compress content streams: %s", exc)

    if level_config.strip_metadata:
        _strip_metadata(writer)

    try:
        writer.compress_identical_objects(remove_identicals=True)
        data = writer_to_bytes(writer)
    except Exception as exc:
        raise CompressionError(f"Compression failed: {exc}") from exc

    result = CompressionResult(
        data=data,
        level=level_config.name,
        original_size=len(original),
        compressed_size=len(data),
        images_found=total,
        outcomes=outcomes,
    )
    LOGGER.info(
        "Compressed PDF at level %s: %d -> %d bytes (%d%%), %d/%d images recompressed",
        result.level,
        result.original_size,
        result.compressed_size,
        result.reduction,
        result.images_compressed,
        total,
    )
    return result


@dataclass(frozen=True, slots=True)
class CompressionInfo:
    """Metrics describing how much a PDF could benefit from compression."""

    file_size_bytes: int
    page_count: int
    image_count: int
    average_image_dpi: float | None


def _page_image_sizes(page) -> Iterator[tuple[int, int]]:
    resources = page.get("/Resources")
    xobjects = resources.get("/XObject") if resources else None
    if not xobjects:
        return
    for ref in xobjects.values():
        obj = ref.get_object()
        if obj.get("/Subtype") == "/Image":
            yield int(obj.get("/Width", 0)), int(obj.get("/Height", 0))


def get_compression_info(source: PdfSource) -> CompressionInfo:
    """Count image objects and estimate their effective resolution."""

    data = read_source(source)
    reader = load_reader(data)
    dpi_values: list[float] = []
    for page in reader.pages:
        width_inch = max(float(page.mediabox.width) / 72.0, 1e-6)
        height_inch = max(float(page.mediabox.height) / 72.0, 1e-6)
        for width_px, height_px in _page_image_sizes(page):
            dpi_values.append((width_px / width_inch + height_px / height_inch) / 2.0)

    image_count = sum(1 for _ in iter_image_objects(PdfWriter(clone_from=reader)))
    info = CompressionInfo(
        file_size_bytes=len(data),
        page_count=len(reader.pages),
        image_count=image_count,
        average_image_dpi=sum(dpi_values) / len(dpi_values) if dpi_values else None,
    )
    LOGGER.debug("Compression info: %s", info)
    return info


__all__ = [
    "LEVELS",
    "NO_OP_QUALITY",
    "CompressionInfo",
    "CompressionLevel",
    "CompressionResult",
    "ImageOutcome",
    "SkipReason",
    "compress_image",
    "compress_pdf",
    "decode_image_stream",
    "get_compression_info",
    "is_decodable",
    "iter_image_objects",
    "replace_image_stream",
    "resolve_level",
]
