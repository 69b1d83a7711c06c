"""XML reader built on :mod:`xml.etree.ElementTree`."""

from __future__ import annotations

from typing import Any
from xml.etree import ElementTree

from ...core.config import load_settings
from ...core.exceptions import ParseError
from ...table import Table
from ..locators import ArrayLocator, FirstArrayLocator
from ..registry import RawContent, register_reader
from .structured import _as_row

ATTRIBUTE_PREFIX = "@_"
TEXT_KEY = "#text"


def _local_name(tag: str) -> str:
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def element_to_value(element: ElementTree.Element) -> Any:
    """Convert *element* into nested dictionaries.

    Leaf elements without attributes become their stripped text. Attributes are
    stored under ``@_name``, repeated child tags collapse into a list and text
    mixed with children is kept under ``#text``.
    """

    children = list(element)
    text = (element.text or "").strip()
    if not children and not element.attrib:
        return text

    node: dict[str, Any] = {}
    for name, value in element.attrib.items():
        node[ATTRIBUTE_PREFIX + _local_name(name)] = value

    fragments = [text] if text else []
    for child in children:
        tag = _local_name(child.tag)
        value = element_to_value(child)
        if tag in node:
            existing = node[tag]
            if isinstance(existing, list):
                existing.append(value)
            else:
                node[tag] = [existing, value]
        else:
            node[tag] = value
        tail = (child.tail or "").strip()
        if tail:
            fragments.append(tail)

    if fragments:
        node[TEXT_KEY] = " ".join(fragments)
    return node


def parse_xml_document(content: RawContent) -> dict[str, Any]:
    """Parse *content*; bytes are decoded by the parser, honouring any XML declaration."""

    if isinstance(content, str):
        content = content.lstrip("\ufeff")
    try:
        root = ElementTree.fromstring(content)
    except ElementTree.ParseError as exc:
        raise ParseError(f"Invalid XML: {exc}") from exc
    return {_local_name(root.tag): element_to_value(root)}


def read_xml(content: RawContent, locator: ArrayLocator | None = None) -> Table:
    """Parse XML and use *locator* to find the rows."""

    if locator is None:
        locator = FirstArrayLocator(fallback=load_settings().xml_fallback)
    document = parse_xml_document(content)
    items = locator.locate(document)
    return Table.from_rows(_as_row(item) for item in items)


@register_reader("xml")
def _read_xml(content: RawContent) -> Table:
    return read_xml(content)


__all__ = ["ATTRIBUTE_PREFIX", "TEXT_KEY", "element_to_value", "parse_xml_document", "read_xml"]
