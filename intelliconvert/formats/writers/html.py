"""Standalone HTML document writer."""

from __future__ import annotations

from ...table import Table, stringify
from ..registry import register_writer

EMPTY_TABLE = "<table></table>"

_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}

_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Converted Data</title>
  <style>
    body {{ font-family: Arial, sans-serif; padding: 20px; }}
    table {{ border-collapse: collapse; width: 100%; }}
    th, td {{ border: 1px solid #ddd; padding: 12px; text-align: left; }}
    th {{ background-color: #6366f1; color: white; }}
    tr:nth-child(even) {{ background-color: #f2f2f2; }}
    tr:hover {{ background-color: #ddd; }}
  </style>
</head>
<body>
  <table>
    <thead>
      <tr>{header}</tr>
    </thead>
    <tbody>
      {body}
    </tbody>
  </table>
</body>
</html>
"""


def escape_html(text: str) -> str:
    return "".join(_ESCAPES.get(char, char) for char in text)


@register_writer("html")
def write_html(table: Table) -> str:
    if not table.rows:
        return EMPTY_TABLE
    header = "".join(f"<th>{escape_html(column)}</th>" for column in table.columns)
    body = "\n      ".join(
        "<tr>" + "".join(f"<td>{escape_html(stringify(value))}</td>" for value in table.values(row)) + "</tr>"
        for row in table.rows
    )
    return _TEMPLATE.format(header=header, body=body)


__all__ = ["EMPTY_TABLE", "escape_html", "write_html"]
