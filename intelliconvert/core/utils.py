"""Utilities shared by intelliconvert modules."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .config import log_level

PathLike = Union[str, Path]

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(_LOG_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(log_level())
        logger.propagate = False
    return logger


def resolve_path(path: PathLike | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    resolved = Path(path).expanduser().resolve()
    return resolved


def ensure_parent_dir(path: Path) -> Path:
    """Create the parent directory of *path* if it does not exist."""

    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def sizeof_fmt(num_bytes: int) -> str:
    """Format *num_bytes* into a human-friendly string."""

    step_unit = 1024.0
    size = float(num_bytes)
    for unit in ("bytes", "KiB", "MiB", "GiB"):
        if abs(size) < step_unit:
            return f"{size:3.1f} {unit}"
        size /= step_unit
    return f"{size:.1f} TiB"


__all__ = ["PathLike", "get_logger", "resolve_path", "ensure_parent_dir", "sizeof_fmt"]
