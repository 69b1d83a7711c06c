"""Format table and reader/writer registry.

Readers turn raw bytes into a :class:`~intelliconvert.table.Table`; writers
turn a table back into bytes. Both are registered by format key through the
:func:`register_reader` and :func:`register_writer` decorators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Union

from ..core.exceptions import IntelliConvertError, ParseError, SerializationError, UnsupportedFormatError
from ..core.utils import get_logger
from ..table import Table

LOGGER = get_logger("intelliconvert.formats")

RawContent = Union[bytes, str]
Reader = Callable[[RawContent], Table]
Writer = Callable[[Table], Union[bytes, str]]


@dataclass(frozen=True, slots=True)
class FormatSpec:
    """Describes one supported file format."""

    key: str
    name: str
    extension: str
    mime_type: str
    readable: bool = True
    writable: bool = True


@dataclass(frozen=True, slots=True)
class SerializedOutput:
    """Bytes produced by a writer plus reporting metadata."""

    data: bytes
    mime_type: str
    extension: str
    row_count: int
    column_count: int

    @property
    def size(self) -> int:
        return len(self.data)


FORMATS: dict[str, FormatSpec] = {
    spec.key: spec
    for spec in (
        FormatSpec("csv", "CSV", "csv", "text/csv;charset=utf-8"),
        FormatSpec(
            "xlsx",
            "Excel",
            "xlsx",
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        ),
        FormatSpec("json", "JSON", "json", "application/json;charset=utf-8"),
        FormatSpec("xml", "XML", "xml", "application/xml;charset=utf-8"),
        FormatSpec("tsv", "TSV", "tsv", "text/tab-separated-values;charset=utf-8"),
        FormatSpec("yaml", "YAML", "yaml", "application/x-yaml;charset=utf-8"),
        FormatSpec("html", "HTML", "html", "text/html;charset=utf-8"),
        FormatSpec("md", "Markdown", "md", "text/markdown;charset=utf-8", readable=False),
        FormatSpec("txt", "Plain text", "txt", "text/plain;charset=utf-8"),
        FormatSpec(
            "docx",
            "Word",
            "docx",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        ),
        FormatSpec("ini", "INI", "ini", "text/plain;charset=utf-8"),
        FormatSpec("pdf", "PDF", "pdf", "application/pdf", readable=False),
    )
}

ALIASES: dict[str, str] = {
    "yml": "yaml",
    "htm": "html",
    "markdown": "md",
    "text": "txt",
}


def resolve_format(name: str, *, operation: str = "convert") -> FormatSpec:
    """Return the :class:`FormatSpec` for an extension or format key."""

    key = name.strip().lower().lstrip(".")
    key = ALIASES.get(key, key)
    try:
        return FORMATS[key]
    except KeyError as exc:
        raise UnsupportedFormatError(name, operation=operation) from exc


class FormatRegistry:
    """Registry storing the reader and writer for each format key."""

    def __init__(self) -> None:
        self._readers: Dict[str, Reader] = {}
        self._writers: Dict[str, Writer] = {}

    def register_reader(self, key: str, reader: Reader) -> None:
        if key in self._readers:
            raise ValueError(f"Reader '{key}' is already registered")
        self._readers[key] = reader

    def register_writer(self, key: str, writer: Writer) -> None:
        if key in self._writers:
            raise ValueError(f"Writer '{key}' is already registered")
        self._writers[key] = writer

    def reader_for(self, fmt: str) -> Reader:
        spec = resolve_format(fmt, operation="read")
        reader = self._readers.get(spec.key)
        if reader is None or not spec.readable:
            raise UnsupportedFormatError(fmt, operation="read")
        return reader

    def writer_for(self, fmt: str) -> tuple[FormatSpec, Writer]:
        spec = resolve_format(fmt, operation="write")
        writer = self._writers.get(spec.key)
        if writer is None or not spec.writable:
            raise UnsupportedFormatError(fmt, operation="write")
        return spec, writer

    def readers(self) -> Iterable[str]:
        return sorted(self._readers)

    def writers(self) -> Iterable[str]:
        return sorted(self._writers)

    def parse(self, content: RawContent, format_hint: str) -> Table:
        """Parse *content* with the reader registered for *format_hint*."""

        reader = self.reader_for(format_hint)
        LOGGER.debug("Parsing %d bytes as %s", len(content), format_hint)
        try:
            table = reader(content)
        except IntelliConvertError:
            raise
        except Exception as exc:
            raise ParseError(f"Failed to parse {format_hint} content: {exc}") from exc
        LOGGER.debug("Parsed %d rows x %d columns", table.row_count, table.column_count)
        return table

    def serialize(self, table: Table, fmt: str, filename_hint: str | None = None) -> SerializedOutput:
        """Serialize *table* into *fmt*.

        The writer builds the complete buffer before anything is returned, so a
        failure never yields truncated output.
        """

        spec, writer = self.writer_for(fmt)
        LOGGER.debug("Serializing %d rows to %s (%s)", table.row_count, spec.key, filename_hint)
        try:
            payload = writer(table)
        except IntelliConvertError:
            raise
        except Exception as exc:
            raise SerializationError(f"Failed to write {spec.name}: {exc}") from exc
        data = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
        return SerializedOutput(
            data=data,
            mime_type=spec.mime_type,
            extension=spec.extension,
            row_count=table.row_count,
            column_count=table.column_count,
        )


registry = FormatRegistry()


def register_reader(key: str):
    def decorator(func: Reader) -> Reader:
        registry.register_reader(key, func)
        return func

    return decorator


def register_writer(key: str):
    def decorator(func: Writer) -> Writer:
        registry.register_writer(key, func)
        return func

    return decorator


def readable_formats() -> list[FormatSpec]:
    return [spec for spec in FORMATS.values() if spec.readable]


def writable_formats() -> list[FormatSpec]:
    return [spec for spec in FORMATS.values() if spec.writable]


__all__ = [
    "ALIASES",
    "FORMATS",
    "FormatRegistry",
    "FormatSpec",
    "RawContent",
    "SerializedOutput",
    "readable_formats",
    "register_reader",
    "register_writer",
    "registry",
    "resolve_format",
    "writable_formats",
]
