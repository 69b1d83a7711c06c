from __future__ import annotations

from pathlib import Path

from ...core.utils import ensure_parent_dir, get_logger
from ...pdf import merge_pdfs
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("intelliconvert.tools.merge")


@register_tool("merge")
class MergeTool(BaseTool):
    """Merge PDF files in input order."""

    def run(self) -> Path:
        context = self.context
        output = ensure_parent_dir(context.require_output("Merge"))
        inputs = context.inputs()
        if len(inputs) < 2:
            raise ValueError("Merge requires at least two input PDFs")

        LOGGER.debug("Merging %d PDFs into %s", len(inputs), output)
        output.write_bytes(merge_pdfs(inputs))
        return output
