"""XML writer producing ``<root><item>...</item></root>`` documents."""

from __future__ import annotations

import re
from typing import Any
from xml.etree import ElementTree

from ...table import Table, stringify
from ..readers.xml import ATTRIBUTE_PREFIX, TEXT_KEY
from ..registry import register_writer

ROOT_TAG = "root"
ITEM_TAG = "item"

_INVALID_NAME_CHARS = re.compile(r"[^\w.\-]", re.UNICODE)


def xml_name(name: str) -> str:
    """Coerce *name* into a valid XML element or attribute name."""

    cleaned = _INVALID_NAME_CHARS.sub("_", name.strip()) or "_"
    if not (cleaned[0].isalpha() or cleaned[0] == "_") or cleaned.lower().startswith("xml"):
        cleaned = "_" + cleaned
    return cleaned


def _append_value(parent: ElementTree.Element, tag: str, value: Any) -> None:
    if isinstance(value, list):
        for item in value:
            _append_value(parent, tag, item)
        return
    element = ElementTree.SubElement(parent, xml_name(tag))
    _fill(element, value)


def _fill(element: ElementTree.Element, value: Any) -> None:
    if isinstance(value, dict):
        for key, child in value.items():
            key = str(key)
            if key == TEXT_KEY:
                element.text = stringify(child)
            elif key.startswith(ATTRIBUTE_PREFIX) and len(key) > len(ATTRIBUTE_PREFIX):
                element.set(xml_name(key[len(ATTRIBUTE_PREFIX):]), stringify(child))
            else:
                _append_value(element, key, child)
    elif value is not None:
        element.text = stringify(value)


@register_writer("xml")
def write_xml(table: Table) -> str:
    root = ElementTree.Element(ROOT_TAG)
    for row in table.rows:
        item = ElementTree.SubElement(root, ITEM_TAG)
        _fill(item, row)
    tree = ElementTree.ElementTree(root)
    ElementTree.indent(tree, space="  ")
    body = ElementTree.tostring(root, encoding="unicode", short_empty_elements=False)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"


__all__ = ["ITEM_TAG", "ROOT_TAG", "write_xml", "xml_name"]
