from __future__ import annotations

from ...core.utils import ensure_parent_dir, get_logger
from ...pdf import CompressionResult, compress_pdf
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("intelliconvert.tools.compress")


@register_tool("compress")
class CompressTool(BaseTool):
    """Recompress the images of a PDF at a compression level."""

    def run(self) -> CompressionResult:
        context = self.context
        source = context.require_input("Compression")
        output = ensure_parent_dir(context.require_output("Compression"))

        level = context.config.get("level")
        LOGGER.debug("Compressing %s to %s with level %s", source, output, level)
        result = compress_pdf(source, level, progress=context.config.get("progress"))
        output.write_bytes(result.data)
        context.resources["output"] = output
        return result
