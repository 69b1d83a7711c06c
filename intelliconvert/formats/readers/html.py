"""HTML table reader."""

from __future__ import annotations

from bs4 import BeautifulSoup

from ...table import Row, Table
from ..registry import RawContent, register_reader
from .delimited import decode_text


def _cells(row) -> list[str]:
    return [cell.get_text(strip=True) for cell in row.find_all(["td", "th"], recursive=False)]


def _own_rows(table) -> list:
    """Rows of *table* excluding those of nested tables."""

    return [row for row in table.find_all("tr") if row.find_parent("table") is table]


@register_reader("html")
def read_html(content: RawContent) -> Table:
    """Read the first ``<table>`` of an HTML document.

    The header comes from ``<thead>`` when present, else from the first row.
    Cells beyond the header, or under a blank header, are keyed
    ``column_{index}``.
    """

    soup = BeautifulSoup(decode_text(content), "html.parser")
    table = soup.find("table")
    if table is None:
        return Table.empty()

    rows = _own_rows(table)
    thead = table.find("thead")
    header_rows = [row for row in rows if thead is not None and row.find_parent("thead") is thead]
    if header_rows:
        headers = _cells(header_rows[-1])
        header_ids = {id(row) for row in header_rows}
        body_rows = [row for row in rows if id(row) not in header_ids]
    elif rows:
        headers = _cells(rows[0])
        body_rows = rows[1:]
    else:
        return Table.empty()

    data: list[Row] = []
    for row in body_rows:
        cells = _cells(row)
        if not cells:
            continue
        record: Row = {}
        for index, value in enumerate(cells):
            header = headers[index] if index < len(headers) and headers[index] else f"column_{index}"
            record[header] = value
        data.append(record)
    return Table.from_rows(data)


__all__ = ["read_html"]
