"""Parse, project and serialize tabular files.

The orchestrator picks the reader from the file extension, applies the column
projection and hands the table to the writer of the requested target format.
Batches are processed strictly one file after another; each item's failure is
captured alongside the successes instead of aborting the batch.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Callable, Iterable, Sequence, Union

from ..core.exceptions import ErrorKind, IntelliConvertError, UnsupportedFormatError
from ..core.utils import PathLike, ensure_parent_dir, get_logger, resolve_path
from ..formats import registry, resolve_format
from ..table import Table

LOGGER = get_logger("intelliconvert.convert")

ProgressCallback = Callable[[int, int, str], None]


@dataclass(frozen=True, slots=True)
class SourceFile:
    """Raw file contents together with the name that selects the format."""

    name: str
    data: bytes

    @classmethod
    def from_path(cls, path: PathLike) -> "SourceFile":
        resolved = resolve_path(path)
        return cls(name=resolved.name, data=resolved.read_bytes())

    @property
    def extension(self) -> str:
        return PurePath(self.name).suffix.lstrip(".").lower()


Source = Union[SourceFile, str, Path]


@dataclass(frozen=True, slots=True)
class ParsedFile:
    name: str
    format: str
    table: Table


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Serialized output ready to be handed to a download or write step."""

    data: bytes
    mime_type: str
    filename: str
    size: int
    row_count: int
    column_count: int


@dataclass(frozen=True, slots=True)
class BatchItem:
    """Outcome of one file inside :func:`convert_batch`."""

    name: str
    source_format: str | None
    result: ConversionResult | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _as_source(source: Source) -> SourceFile:
    if isinstance(source, SourceFile):
        return source
    return SourceFile.from_path(source)


def parse_file(source: Source) -> ParsedFile:
    """Read *source* and parse it with the reader matching its extension."""

    source_file = _as_source(source)
    if not source_file.extension:
        raise UnsupportedFormatError(source_file.name, operation="read")
    spec = resolve_format(source_file.extension, operation="read")
    table = registry.parse(source_file.data, spec.key)
    LOGGER.info(
        "Parsed %s as %s: %d rows, %d columns",
        source_file.name,
        spec.key,
        table.row_count,
        table.column_count,
    )
    return ParsedFile(name=source_file.name, format=spec.key, table=table)


def output_filename(original_filename: str, target_format: str) -> str:
    """Replace the extension of *original_filename* with the target's."""

    spec = resolve_format(target_format, operation="write")
    name = PurePath(original_filename).name or "converted"
    stem = PurePath(name).stem
    return f"{stem}.{spec.extension}"


def convert(
    table: Table,
    columns: Sequence[str] | None,
    target_format: str,
    original_filename: str,
) -> ConversionResult:
    """Project *table* onto *columns* and serialize it into *target_format*."""

    projected = table.project(columns)
    filename = output_filename(original_filename, target_format)
    output = registry.serialize(projected, target_format, filename)
    LOGGER.info("Converted %s to %s (%d bytes)", original_filename, filename, output.size)
    return ConversionResult(
        data=output.data,
        mime_type=output.mime_type,
        filename=filename,
        size=output.size,
        row_count=output.row_count,
        column_count=output.column_count,
    )


def convert_file(
    source: Source,
    target_format: str,
    *,
    columns: Sequence[str] | None = None,
) -> ConversionResult:
    parsed = parse_file(source)
    return convert(parsed.table, columns, target_format, parsed.name)


def convert_batch(
    sources: Iterable[Source],
    target_format: str,
    *,
    columns: Sequence[str] | None = None,
    progress: ProgressCallback | None = None,
) -> list[BatchItem]:
    """Convert every source in order, collecting per-file outcomes."""

    resolve_format(target_format, operation="write")
    items = list(sources)
    total = len(items)
    results: list[BatchItem] = []
    for index, source in enumerate(items, start=1):
        name = source.name if isinstance(source, (SourceFile, Path)) else PurePath(str(source)).name
        source_format: str | None = None
        try:
            parsed = parse_file(source)
            source_format = parsed.format
            result = convert(parsed.table, columns, target_format, parsed.name)
            results.append(BatchItem(name=name, source_format=source_format, result=result))
        except (IntelliConvertError, OSError) as exc:
            LOGGER.warning("Conversion of %s failed: %s", name, exc)
            kind = exc.kind if isinstance(exc, IntelliConvertError) else None
            results.append(BatchItem(name=name, source_format=source_format, error=str(exc), error_kind=kind))
        if progress is not None:
            progress(index, total, name)
    succeeded = sum(1 for item in results if item.ok)
    LOGGER.info("Batch finished: %d of %d files converted", succeeded, total)
    return results


def write_result(result: ConversionResult, output_dir: PathLike) -> Path:
    """Persist *result* under *output_dir* and return the written path."""

    destination = ensure_parent_dir(resolve_path(output_dir) / result.filename)
    destination.write_bytes(result.data)
    return destination


__all__ = [
    "BatchItem",
    "ConversionResult",
    "ParsedFile",
    "SourceFile",
    "convert",
    "convert_batch",
    "convert_file",
    "output_filename",
    "parse_file",
    "write_result",
]
