"""Registry mapping command names to intelliconvert tools."""

from __future__ import annotations

from typing import Any

from ...core.utils import get_logger
from .interfaces import BaseTool, ConversionContext

LOGGER = get_logger("intelliconvert.tools")


class ToolRegistry:
    """Tools by command name, each built around a :class:`ConversionContext`."""

    def __init__(self) -> None:
        self._tools: dict[str, type[BaseTool]] = {}

    def register(self, name: str, tool_class: type[BaseTool]) -> None:
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered")
        tool_class.name = name
        self._tools[name] = tool_class

    def create(self, name: str, context: ConversionContext) -> BaseTool:
        try:
            tool_class = self._tools[name]
        except KeyError as exc:
            available = ", ".join(self.names()) or "none"
            raise KeyError(f"Tool '{name}' is not registered (available: {available})") from exc
        return tool_class(context)

    def run(self, name: str, context: ConversionContext) -> Any:
        """Build and run the tool, keeping its return value in ``context.resources["result"]``."""

        tool = self.create(name, context)
        LOGGER.debug("Running tool %s (input=%s, output=%s)", name, context.input_path, context.output_path)
        result = tool.run()
        return result

    def names(self) -> list[str]:
        return sorted(self._tools)

    def summaries(self) -> list[tuple[str, str]]:
        """``(name, first docstring line)`` for every tool, sorted by name."""

        rows = []
        for name in self.names():
            doc = (self._tools[name].__doc__ or "").strip()
            rows.append((name, doc.splitlines()[0] if doc else ""))
        return rows


registry = ToolRegistry()


def register_tool(name: str):
    """Class decorator registering a tool under the command *name*."""

    def decorator(cls: type[BaseTool]) -> type[BaseTool]:
        registry.register(name, cls)
        return cls

    return decorator


__all__ = ["ToolRegistry", "registry", "register_tool"]
