"""INI reader producing one row per ``(section, key, value)`` triple."""

from __future__ import annotations

import configparser

from ...core.exceptions import ParseError
from ...table import Table
from ..registry import RawContent, register_reader
from .delimited import decode_text

ROOT_SECTION = "root"
INI_COLUMNS = ("section", "key", "value")
# Never matches a real header, keeps [DEFAULT] an ordinary section.
_NO_DEFAULT_SECTION = "\x00intelliconvert-default"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


def _parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        allow_no_value=True,
        default_section=_NO_DEFAULT_SECTION,
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


@register_reader("ini")
def read_ini(content: RawContent) -> Table:
    """Keys before the first section header belong to section ``root``."""

    text = decode_text(content)
    parser = _parser()
    try:
        parser.read_string(f"[{ROOT_SECTION}]\n{text}")
    except configparser.Error as exc:
        raise ParseError(f"Invalid INI content: {exc}") from exc

    rows = []
    for section in parser.sections():
        for key, value in parser.items(section, raw=True):
            rows.append({"section": section, "key": key, "value": _unquote(value or "")})
    return Table.from_rows(rows, columns=INI_COLUMNS if rows else None)


__all__ = ["INI_COLUMNS", "ROOT_SECTION", "read_ini"]
