"""Environment driven settings for intelliconvert."""

from __future__ import annotations

import os
from dataclasses import dataclass

_ENV_PREFIX = "INTELLICONVERT_"
_TRUTHY = {"1", "true", "yes", "on"}


def _env(name: str) -> str | None:
    value = os.getenv(_ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_flag(name: str, default: bool) -> bool:
    value = _env(name)
    if value is None:
        return default
    return value.lower() in _TRUTHY


def log_level() -> str:
    """Logger level name from ``INTELLICONVERT_LOG_LEVEL``, ``WARNING`` by default."""

    return (_env("LOG_LEVEL") or "WARNING").upper()


def _env_float(name: str, default: float) -> float:
    value = _env(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{_ENV_PREFIX}{name} must be a number, got {value!r}") from exc


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime defaults that callers may override per call."""

    log_level: str = "WARNING"
    strict_pages: bool = False
    xml_fallback: bool = True
    compression_level: str = "medium"
    render_scale: float = 2.0


def load_settings() -> Settings:
    """Build :class:`Settings` from ``INTELLICONVERT_*`` environment variables."""

    return Settings(
        log_level=log_level(),
        strict_pages=_env_flag("STRICT_PAGES", False),
        xml_fallback=_env_flag("XML_FALLBACK", True),
        compression_level=(_env("COMPRESSION_LEVEL") or "medium").lower(),
        render_scale=_env_float("RENDER_SCALE", 2.0),
    )


__all__ = ["Settings", "load_settings", "log_level"]
