"""Built-in format readers. Importing this package registers them."""

from __future__ import annotations

from . import delimited, docx, html, ini, spreadsheet, structured, xml  # noqa: F401
from .delimited import decode_text, read_csv, read_delimited, read_text, read_tsv

__all__ = ["decode_text", "read_csv", "read_delimited", "read_text", "read_tsv"]
