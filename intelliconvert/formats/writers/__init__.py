"""Built-in format writers. Importing this package registers them."""

from __future__ import annotations

from . import delimited, docx, html, ini, markdown, pdf, spreadsheet, structured, xml  # noqa: F401

__all__: list[str] = []
