"""CSV, TSV and plain text writers."""

from __future__ import annotations

import csv
import io

from ...table import Table, stringify
from ..registry import register_writer


def write_delimited(table: Table, delimiter: str) -> str:
    """Header of ``table.columns`` followed by one record per row."""

    if not table.columns:
        return ""
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=delimiter, lineterminator="\r\n")
    writer.writerow(table.columns)
    for row in table.rows:
        writer.writerow([stringify(value) for value in table.values(row)])
    return buffer.getvalue()


@register_writer("csv")
def write_csv(table: Table) -> str:
    return write_delimited(table, ",")


@register_writer("tsv")
def write_tsv(table: Table) -> str:
    return write_delimited(table, "\t")


@register_writer("txt")
def write_text(table: Table) -> str:
    if not table.columns:
        return ""
    lines = ["\t".join(table.columns)]
    lines.extend("\t".join(stringify(value) for value in table.values(row)) for row in table.rows)
    return "\n".join(lines) + "\n"


__all__ = ["write_csv", "write_delimited", "write_text", "write_tsv"]
