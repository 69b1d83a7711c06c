"""In-memory table model.

Every reader produces a :class:`Table` and every writer consumes one. Rows are
plain dictionaries keyed by column name; ``Table.columns`` is the union of the
row keys in order of first appearance and acts as the authoritative header for
formats with a fixed column layout.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, Sequence, Union

Scalar = Union[str, int, float, bool, None]
Row = Dict[str, Any]


def _collect_columns(rows: Sequence[Row]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for row in rows:
        for key in row:
            if key not in seen:
                seen[key] = None
    return tuple(seen)


def stringify(value: Any) -> str:
    """Render a cell value the way text based formats expect it."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)


@dataclass(frozen=True, slots=True)
class Table:
    """Ordered rows plus the derived column header."""

    rows: tuple[Row, ...] = ()
    columns: tuple[str, ...] = field(default=())

    @classmethod
    def from_rows(cls, rows: Iterable[Row], columns: Sequence[str] | None = None) -> "Table":
        """Create a table, deriving ``columns`` from the rows unless given.

        Explicit *columns* are extended with any row key they miss so the
        header always covers every row.
        """

        materialised = tuple(dict(row) for row in rows)
        derived = _collect_columns(materialised)
        if columns is None:
            return cls(rows=materialised, columns=derived)
        header = list(dict.fromkeys(columns))
        header.extend(key for key in derived if key not in header)
        return cls(rows=materialised, columns=tuple(header))

    @classmethod
    def empty(cls) -> "Table":
        return cls()

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def is_empty(self) -> bool:
        return not self.rows

    def project(self, columns: Sequence[str] | None) -> "Table":
        """Return a new table restricted to *columns*.

        ``None`` or an empty selection returns ``self`` unchanged. Rows keep
        only the selected keys they actually carry, in selection order.
        """

        if not columns:
            return self
        selection = [column for column in dict.fromkeys(columns) if column in self.columns]
        projected = tuple(
            {column: row[column] for column in selection if column in row}
            for row in self.rows
        )
        return Table(rows=projected, columns=tuple(selection))

    def values(self, row: Row) -> list[Any]:
        """Return the values of *row* aligned with :attr:`columns`."""

        return [row.get(column) for column in self.columns]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


__all__ = ["Row", "Scalar", "Table", "stringify"]
