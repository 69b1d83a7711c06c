"""Format readers and writers for the canonical table model."""

from __future__ import annotations

from ..table import Table
from .registry import (
    FORMATS,
    FormatSpec,
    RawContent,
    SerializedOutput,
    readable_formats,
    register_reader,
    register_writer,
    registry,
    resolve_format,
    writable_formats,
)


def load_builtin_formats() -> None:
    from . import readers, writers  # noqa: F401  # register built-in formats


def parse(content: RawContent, format_hint: str) -> Table:
    """Parse raw *content* using the reader selected by *format_hint*."""

    return registry.parse(content, format_hint)


def serialize(table: Table, fmt: str, filename_hint: str | None = None) -> SerializedOutput:
    """Serialize *table* into *fmt*."""

    return registry.serialize(table, fmt, filename_hint)


load_builtin_formats()

__all__ = [
    "FORMATS",
    "FormatSpec",
    "RawContent",
    "SerializedOutput",
    "load_builtin_formats",
    "parse",
    "readable_formats",
    "register_reader",
    "register_writer",
    "registry",
    "resolve_format",
    "serialize",
    "writable_formats",
]
