"""GitHub flavoured Markdown table writer."""

from __future__ import annotations

from typing import Any

from ...table import Table, stringify
from ..registry import register_writer


def _cell(value: Any) -> str:
    text = stringify(value).replace("|", "\\|")
    return " ".join(text.splitlines())


def _line(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |"


@register_writer("md")
def write_markdown(table: Table) -> str:
    if not table.rows:
        return ""
    lines = [
        _line([_cell(column) for column in table.columns]),
        _line(["---"] * len(table.columns)),
    ]
    lines.extend(_line([_cell(value) for value in table.values(row)]) for row in table.rows)
    return "\n".join(lines) + "\n"


__all__ = ["write_markdown"]
