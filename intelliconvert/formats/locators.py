"""Strategies that locate the row array inside a nested document tree.

XML has no native notion of a table, so the reader parses it into nested
dictionaries and asks an :class:`ArrayLocator` which list holds the rows.
Callers needing schema aware behaviour can pass their own locator.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..core.exceptions import ParseError


@runtime_checkable
class ArrayLocator(Protocol):
    """Returns the list of row candidates found in *document*."""

    def locate(self, document: Any) -> list[Any]:  # pragma: no cover - protocol
        ...


def find_first_array(node: Any) -> list[Any] | None:
    """Depth-first search for the first list value in *node*."""

    if isinstance(node, list):
        return node
    if isinstance(node, dict):
        for value in node.values():
            found = find_first_array(value)
            if found is not None:
                return found
    return None


class FirstArrayLocator:
    """Pick the first array in depth-first order.

    With ``fallback=True`` a document without any array is returned as a
    single row; otherwise :class:`ParseError` is raised.
    """

    def __init__(self, *, fallback: bool = True) -> None:
        self.fallback = fallback

    def locate(self, document: Any) -> list[Any]:
        found = find_first_array(document)
        if found is not None:
            return found
        if not self.fallback:
            raise ParseError("Document contains no repeated element to use as table rows")
        if isinstance(document, dict):
            return [document]
        return []


class PathLocator:
    """Follow an explicit key path such as ``("catalog", "book")``.

    A mapping found at the end of the path is treated as a single row.
    """

    def __init__(self, *path: str) -> None:
        if not path:
            raise ValueError("PathLocator requires at least one key")
        self.path = path

    def locate(self, document: Any) -> list[Any]:
        node = document
        for key in self.path:
            if not isinstance(node, dict) or key not in node:
                raise ParseError(f"Path {'/'.join(self.path)!r} not found in document")
            node = node[key]
        if isinstance(node, list):
            return node
        if isinstance(node, dict):
            return [node]
        raise ParseError(f"Path {'/'.join(self.path)!r} does not point at rows")


__all__ = ["ArrayLocator", "FirstArrayLocator", "PathLocator", "find_first_array"]
