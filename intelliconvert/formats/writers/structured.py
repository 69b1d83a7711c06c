"""JSON and YAML writers."""

from __future__ import annotations

import json

import yaml

from ...table import Table
from ..registry import register_writer


@register_writer("json")
def write_json(table: Table) -> str:
    return json.dumps([dict(row) for row in table.rows], indent=2, ensure_ascii=False, default=str)


@register_writer("yaml")
def write_yaml(table: Table) -> str:
    return yaml.safe_dump(
        [dict(row) for row in table.rows],
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        indent=2,
    )


__all__ = ["write_json", "write_yaml"]
