"""Namespace for pluggable intelliconvert tools."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from .converter import convert  # noqa: F401
    from .editor import images, merge, pages, split  # noqa: F401  # register page and image tools
    from .compressor import compress  # noqa: F401


__all__ = ["registry", "load_builtin_plugins"]
