"""JSON and YAML readers."""

from __future__ import annotations

import json
from typing import Any

import yaml

from ...core.exceptions import ParseError
from ...table import Row, Table
from ..registry import RawContent, register_reader
from .delimited import decode_text


def _as_row(item: Any) -> Row:
    if isinstance(item, dict):
        return {str(key): value for key, value in item.items()}
    return {"value": item}


def table_from_document(document: Any, *, source: str) -> Table:
    """Turn a decoded JSON/YAML document into a table.

    A list becomes the rows directly, a mapping becomes a single row.
    """

    if isinstance(document, list):
        return Table.from_rows(_as_row(item) for item in document)
    if isinstance(document, dict):
        return Table.from_rows([_as_row(document)])
    raise ParseError(f"{source} document must be an array or an object, got {type(document).__name__}")


@register_reader("json")
def read_json(content: RawContent) -> Table:
    text = decode_text(content)
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON: {exc}") from exc
    return table_from_document(document, source="JSON")


@register_reader("yaml")
def read_yaml(content: RawContent) -> Table:
    text = decode_text(content)
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseError(f"Invalid YAML: {exc}") from exc
    if document is None:
        return Table.empty()
    return table_from_document(document, source="YAML")


__all__ = ["read_json", "read_yaml", "table_from_document"]
