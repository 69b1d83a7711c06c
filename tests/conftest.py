from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Callable
import sys

import pytest
from PIL import Image
from pypdf import PdfWriter
from pypdf.generic import DecodedStreamObject, DictionaryObject, NameObject, NumberObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def _write(writer: PdfWriter, path: Path) -> Path:
    with path.open("wb") as stream:
        writer.write(stream)
    return path


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(5):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "intelliconvert-tests", "/Title": "Sample"})
    return _write(writer, pdf_path)


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, pages: int = 1, width: float = 72, height: float = 72, title: str | None = None) -> Path:
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=width, height=height)
        if title is not None:
            writer.add_metadata({"/Title": title})
        return _write(writer, tmp_path / filename)

    return _create


@pytest.fixture()
def png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGBA", (40, 30), (255, 0, 0, 128)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture()
def jpeg_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (64, 48), (0, 128, 255)).save(buffer, format="JPEG")
    return buffer.getvalue()


def noise_image(width: int, height: int, mode: str = "RGB") -> Image.Image:
    channels = {"RGB": 3, "L": 1}[mode]
    return Image.frombytes(mode, (width, height), os.urandom(width * height * channels))


@pytest.fixture()
def jpeg_image_pdf(tmp_path: Path) -> Path:
    """A single page PDF holding a 3000x400 DCT encoded noise image."""

    path = tmp_path / "photo.pdf"
    noise_image(3000, 400).save(path, format="PDF", resolution=72.0, quality=95, title="Photo")
    return path


@pytest.fixture()
def masked_image_pdf(tmp_path: Path) -> Path:
    """A page with a raw RGB image whose soft mask is a separate image stream."""

    width, height = 3000, 10
    writer = PdfWriter()
    page = writer.add_blank_page(width=300, height=100)

    def image_stream(data: bytes, color_space: str) -> DecodedStreamObject:
        stream = DecodedStreamObject()
        stream.set_data(data)
        stream.update(
            {
                NameObject("/Type"): NameObject("/XObject"),
                NameObject("/Subtype"): NameObject("/Image"),
                NameObject("/Width"): NumberObject(width),
                NameObject("/Height"): NumberObject(height),
                NameObject("/ColorSpace"): NameObject(color_space),
                NameObject("/BitsPerComponent"): NumberObject(8),
            }
        )
        return stream

    smask_ref = writer._add_object(image_stream(bytes(width * height), "/DeviceGray"))
    image = image_stream(noise_image(width, height).tobytes(), "/DeviceRGB")
    image[NameObject("/SMask")] = smask_ref
    image_ref = writer._add_object(image)
    page[NameObject("/Resources")] = DictionaryObject(
        {NameObject("/XObject"): DictionaryObject({NameObject("/Im0"): image_ref})}
    )
    return _write(writer, tmp_path / "masked.pdf")
