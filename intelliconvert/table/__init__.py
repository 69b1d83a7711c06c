"""Canonical row/column model shared by every parser and serializer."""

from __future__ import annotations

from .model import Row, Scalar, Table, stringify

__all__ = ["Row", "Scalar", "Table", "stringify"]
