"""Word document reader extracting paragraphs as rows."""

from __future__ import annotations

import io

from docx import Document

from ...core.exceptions import ParseError
from ...table import Table
from ..registry import RawContent, register_reader


@register_reader("docx")
def read_docx(content: RawContent) -> Table:
    if isinstance(content, str):
        raise ParseError("DOCX content must be binary")
    try:
        document = Document(io.BytesIO(content))
    except Exception as exc:
        raise ParseError(f"Invalid DOCX document: {exc}") from exc

    texts = [paragraph.text.strip() for paragraph in document.paragraphs]
    rows = [
        {"paragraph": number, "content": text}
        for number, text in enumerate((text for text in texts if text), start=1)
    ]
    return Table.from_rows(rows, columns=("paragraph", "content") if rows else None)


__all__ = ["read_docx"]
