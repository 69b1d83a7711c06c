"""Core interfaces and context objects shared by intelliconvert tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ...core.utils import resolve_path


@dataclass
class ConversionContext:
    """Holds shared execution state for a tool invocation."""

    input_path: Path | None = None
    output_path: Path | None = None
    resources: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.input_path is not None:
            self.input_path = resolve_path(self.input_path)
        if self.output_path is not None:
            self.output_path = resolve_path(self.output_path)

    def require_input(self, tool: str) -> Path:
        if self.input_path is None:
            raise ValueError(f"{tool} requires an input path")
        return self.input_path

    def require_output(self, tool: str) -> Path:
        if self.output_path is None:
            raise ValueError(f"{tool} requires an output path")
        return self.output_path

    def inputs(self) -> list[Path]:
        """Input files from ``config["inputs"]``, else the single input path."""

        configured = self.config.get("inputs")
        if configured:
            return [resolve_path(path) for path in configured]
        if self.input_path is not None:
            return [self.input_path]
        return []


class BaseTool:
    """Base class for all pluggable intelliconvert tools."""

    name: str

    def __init__(self, context: ConversionContext) -> None:
        self.context = context

    def run(self) -> Any:  # pragma: no cover - to be implemented by subclasses
        raise NotImplementedError
