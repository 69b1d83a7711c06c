"""Tool wrapping the table conversion orchestrator."""

from __future__ import annotations

from ...convert import BatchItem, SourceFile, convert_batch, write_result
from ...core.utils import get_logger
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("intelliconvert.tools.convert")


@register_tool("convert")
class ConvertTool(BaseTool):
    """Convert one or more tabular files into ``config["format"]``.

    Successful results are written into the output directory; failed files
    are reported in the returned :class:`BatchItem` list.
    """

    def run(self) -> list[BatchItem]:
        context = self.context
        output_dir = context.require_output("Conversion")
        target_format = context.config.get("format")
        if not target_format:
            raise ValueError("Conversion requires a target format")

        sources = [SourceFile.from_path(path) for path in context.inputs()]
        if not sources:
            raise ValueError("Conversion requires at least one input file")

        LOGGER.debug("Converting %d files to %s", len(sources), target_format)
        items = convert_batch(
            sources,
            target_format,
            columns=context.config.get("columns"),
            progress=context.config.get("progress"),
        )

        written = [write_result(item.result, output_dir) for item in items if item.result is not None]
        context.resources["written"] = written
        return items
