"""INI writer."""

from __future__ import annotations

from ...table import Row, Table, stringify
from ..readers.ini import INI_COLUMNS, ROOT_SECTION
from ..registry import register_writer

DATA_SECTION = "data"
CONTINUATION_INDENT = "    "


def _is_triple(row: Row) -> bool:
    return set(row) == set(INI_COLUMNS)


def _line(key: str, value: object) -> str:
    first, *rest = stringify(value).split("\n")
    return "\n".join([f"{key}={first}", *(CONTINUATION_INDENT + line for line in rest)])


def _grouped(table: Table) -> list[str]:
    sections: dict[str, list[str]] = {}
    for row in table.rows:
        section = stringify(row["section"]) or ROOT_SECTION
        sections.setdefault(section, []).append(_line(stringify(row["key"]), row["value"]))

    blocks: list[str] = []
    root_lines = sections.pop(ROOT_SECTION, None)
    if root_lines:
        blocks.append("\n".join(root_lines))
    for section, lines in sections.items():
        blocks.append("\n".join([f"[{section}]", *lines]))
    return blocks


def _flattened(table: Table) -> list[str]:
    lines = [f"[{DATA_SECTION}]"]
    for number, row in enumerate(table.rows, start=1):
        for column in table.columns:
            if column in row:
                lines.append(_line(f"row{number}_{column}", row[column]))
    return ["\n".join(lines)]


@register_writer("ini")
def write_ini(table: Table) -> str:
    """Regroup ``section/key/value`` rows, otherwise flatten under ``[data]``."""

    if not table.rows:
        return ""
    blocks = _grouped(table) if all(_is_triple(row) for row in table.rows) else _flattened(table)
    return "\n\n".join(blocks) + "\n"


__all__ = ["DATA_SECTION", "write_ini"]
