"""
Command-line interface for intelliconvert.
"""

from __future__ import annotations

import os
import sys
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from .. import __version__
from ..core.exceptions import IntelliConvertError
from ..core.utils import sizeof_fmt
from ..formats import FORMATS
from ..pdf import LEVELS, POSITIONS, PageNumberOptions, WatermarkOptions, get_compression_info
from ..tools import load_builtin_plugins
from ..tools.common.interfaces import ConversionContext
from ..tools.common.pipeline import registry

console = Console()


def _fail(message: Any) -> None:
    console.print(f"\n[bold red]✗ Error:[/bold red] {escape(str(message))}")
    sys.exit(1)


def _run_tool(name: str, context: ConversionContext) -> Any:
    load_builtin_plugins()
    try:
        return registry.run(name, context)
    except (IntelliConvertError, ValueError, OSError) as e:
        _fail(e)


def _page_list(value: str | None) -> list[int] | None:
    if not value:
        return None
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError as exc:
        raise click.BadParameter(f"Expected comma separated page numbers, got {value!r}") from exc


def _column_list(value: str | None) -> list[str] | None:
    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    intelliconvert - Convert tabular files and edit PDF documents.
    """
    pass


@cli.command(name="formats")
def list_formats():
    """
    List supported formats and whether they can be read or written.
    """
    table = Table(title="Supported Formats")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Extension")
    table.add_column("Read")
    table.add_column("Write")
    for spec in FORMATS.values():
        table.add_row(
            spec.key,
            spec.name,
            f".{spec.extension}",
            "✓" if spec.readable else "-",
            "✓" if spec.writable else "-",
        )
    console.print(table)


@cli.command(name="tools")
def list_tools():
    """
    List the registered tools.
    """
    load_builtin_plugins()
    table = Table(title="Available Tools")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Description", style="green")
    for name, summary in registry.summaries():
        table.add_row(name, summary)
    console.print(table)


@cli.command(name="convert")
@click.argument("inputs", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--to", "-t", "target_format", required=True, help="Target format, e.g. csv, json, pdf")
@click.option("--output-dir", "-o", default="./output", type=click.Path(file_okay=False), help="Output directory")
@click.option("--columns", "-c", default=None, help="Comma separated columns to keep")
def convert_command(inputs, target_format, output_dir, columns):
    """
    Convert tabular files into another format.

    Examples:

        intelliconvert convert data.csv --to json

        intelliconvert convert a.xlsx b.csv --to md -c name,email
    """
    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Converting files", total=len(inputs))

        def update_progress(index, total, name):
            progress.update(task, completed=index, description=f"Converted {name}")

        context = ConversionContext(
            output_path=output_dir,
            config={
                "inputs": list(inputs),
                "format": target_format,
                "columns": _column_list(columns),
                "progress": update_progress,
            },
        )
        items = _run_tool("convert", context)

    table = Table(title="Conversion Results")
    table.add_column("File", style="cyan")
    table.add_column("Status")
    table.add_column("Output")
    table.add_column("Rows", justify="right")
    for item in items:
        if item.ok:
            table.add_row(item.name, "[green]✓[/green]", item.result.filename, str(item.result.row_count))
        else:
            table.add_row(item.name, "[red]✗[/red]", escape(item.error or ""), "-")
    console.print(table)
    console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]")

    failed = [item for item in items if not item.ok]
    if failed:
        _fail(f"{len(failed)} of {len(items)} files failed to convert")


@cli.command(name="merge")
@click.argument("inputs", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", required=True, type=click.Path(dir_okay=False), help="Merged PDF path")
def merge_command(inputs, output):
    """
    Merge PDF files in the order given.
    """
    result = _run_tool("merge", ConversionContext(output_path=output, config={"inputs": list(inputs)}))
    console.print(f"[bold green]✓ Merged {len(inputs)} files into {result}[/bold green]")


@cli.command(name="split")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
@click.option("--output-dir", "-o", default="./output", type=click.Path(file_okay=False), help="Output directory")
@click.option("--ranges", "-r", default=None, help="Page ranges such as '1-3,5'; one file per page if omitted")
def split_command(input_pdf, output_dir, ranges):
    """
    Split a PDF into single pages or page ranges.
    """
    context = ConversionContext(input_path=input_pdf, output_path=output_dir, config={"ranges": ranges})
    created_files = _run_tool("split", context)
    console.print(f"\n[bold green]✓ Successfully split into {len(created_files)} files[/bold green]")
    sample_size = min(5, len(created_files))
    for file_path in created_files[:sample_size]:
        console.print(f"  • {file_path.name}")
    if len(created_files) > sample_size:
        console.print(f"  ... and {len(created_files) - sample_size} more")


@cli.command(name="extract")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
@click.argument("pages", nargs=-1, required=True, type=int)
@click.option("--output", "-o", required=True, type=click.Path(dir_okay=False), help="Output PDF path")
@click.option("--strict/--lenient", default=None, help="Fail on out-of-range pages instead of dropping them")
def extract_command(input_pdf, pages, output, strict):
    """
    Copy the given 1-based pages, in order, into a new PDF.
    """
    context = ConversionContext(
        input_path=input_pdf,
        output_path=output,
        config={"pages": list(pages), "strict": strict},
    )
    result = _run_tool("extract", context)
    console.print(f"[bold green]✓ Extracted pages to {result}[/bold green]")


@cli.command(name="rotate")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", required=True, type=click.Path(dir_okay=False), help="Output PDF path")
@click.option("--degrees", "-d", default=90, type=int, help="Multiple of 90 to add to each page")
@click.option("--pages", "-p", default=None, help="Comma separated pages; all pages if omitted")
def rotate_command(input_pdf, output, degrees, pages):
    """
    Rotate pages by a multiple of 90 degrees.
    """
    context = ConversionContext(
        input_path=input_pdf,
        output_path=output,
        config={"degrees": degrees, "pages": _page_list(pages)},
    )
    result = _run_tool("rotate", context)
    console.print(f"[bold green]✓ Rotated PDF written to {result}[/bold green]")


@cli.command(name="watermark")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
@click.argument("text")
@click.option("--output", "-o", required=True, type=click.Path(dir_okay=False), help="Output PDF path")
@click.option("--font-size", default=50, type=int, show_default=True)
@click.option("--opacity", default=0.3, type=float, show_default=True)
@click.option("--rotation", default=-45, type=float, show_default=True)
def watermark_command(input_pdf, text, output, font_size, opacity, rotation):
    """
    Stamp a text watermark across the centre of every page.
    """
    try:
        options = WatermarkOptions(font_size=font_size, opacity=opacity, rotation=rotation)
    except ValueError as e:
        _fail(e)
    context = ConversionContext(
        input_path=input_pdf,
        output_path=output,
        config={"text": text, "options": options},
    )
    result = _run_tool("watermark", context)
    console.print(f"[bold green]✓ Watermarked PDF written to {result}[/bold green]")


@cli.command(name="page-numbers")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", required=True, type=click.Path(dir_okay=False), help="Output PDF path")
@click.option("--position", default="bottom-center", type=click.Choice(POSITIONS), show_default=True)
@click.option("--format", "label_format", default="Page {n} of {total}", show_default=True)
@click.option("--font-size", default=12, type=int, show_default=True)
def page_numbers_command(input_pdf, output, position, label_format, font_size):
    """
    Add page numbers to every page.
    """
    try:
        options = PageNumberOptions(position=position, format=label_format, font_size=font_size)
    except ValueError as e:
        _fail(e)
    context = ConversionContext(input_path=input_pdf, output_path=output, config={"options": options})
    result = _run_tool("page-numbers", context)
    console.print(f"[bold green]✓ Numbered PDF written to {result}[/bold green]")


@cli.command(name="images-to-pdf")
@click.argument("images", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", required=True, type=click.Path(dir_okay=False), help="Output PDF path")
def images_to_pdf_command(images, output):
    """
    Build a PDF with one page per JPEG or PNG image.
    """
    result = _run_tool("images-to-pdf", ConversionContext(output_path=output, config={"inputs": list(images)}))
    console.print(f"[bold green]✓ PDF written to {result}[/bold green]")


@cli.command(name="pdf-to-images")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
@click.option("--output-dir", "-o", default="./output", type=click.Path(file_okay=False), help="Output directory")
@click.option("--scale", "-s", default=None, type=float, help="Render scale relative to 72 dpi")
def pdf_to_images_command(input_pdf, output_dir, scale):
    """
    Render every page to a PNG file.
    """
    context = ConversionContext(input_path=input_pdf, output_path=output_dir, config={"scale": scale})
    created_files = _run_tool("pdf-to-images", context)
    console.print(f"[bold green]✓ Rendered {len(created_files)} pages[/bold green]")
    console.print(f"[dim]Output directory: {os.path.abspath(output_dir)}[/dim]")


@cli.command(name="compress")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", required=True, type=click.Path(dir_okay=False), help="Output PDF path")
@click.option("--level", "-l", default=None, type=click.Choice(sorted(LEVELS)), help="Compression level")
def compress_command(input_pdf, output, level):
    """
    Recompress the images of a PDF.
    """
    with console.status("[bold cyan]Compressing...[/bold cyan]") as status:
        context = ConversionContext(
            input_path=input_pdf,
            output_path=output,
            config={"level": level, "progress": lambda message: status.update(f"[bold cyan]{message}[/bold cyan]")},
        )
        result = _run_tool("compress", context)

    table = Table(title="Compression Results", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Level", result.level)
    table.add_row("Original Size", sizeof_fmt(result.original_size))
    table.add_row("Compressed Size", sizeof_fmt(result.compressed_size))
    table.add_row("Reduction", f"{result.reduction}%")
    table.add_row("Images", f"{result.images_compressed} of {result.images_found} recompressed")
    console.print(table)


@cli.command(name="info")
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
def info_command(input_pdf):
    """
    Display information about a PDF file.
    """
    info = _run_tool("info", ConversionContext(input_path=input_pdf))
    try:
        compression = get_compression_info(input_pdf)
    except IntelliConvertError as e:
        _fail(e)

    table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_row("File Path", os.path.abspath(input_pdf))
    table.add_row("File Size", sizeof_fmt(compression.file_size_bytes))
    table.add_row("Number of Pages", str(info.page_count))
    table.add_row("Images", str(compression.image_count))
    if compression.average_image_dpi is not None:
        table.add_row("Average Image DPI", f"{compression.average_image_dpi:.0f}")
    for label, value in (
        ("Title", info.title),
        ("Author", info.author),
        ("Subject", info.subject),
        ("Creator", info.creator),
    ):
        if value:
            table.add_row(label, value)
    console.print()
    console.print(table)
    console.print()


if __name__ == "__main__":  # pragma: no cover
    cli()
