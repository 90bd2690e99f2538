"""
Command-line interface for mdbook2docx.
"""

import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from mdbook2docx import __version__
from mdbook2docx.converter import PARSERS, ConversionOptions, convert_markdown_to_docx, parse_markdown
from mdbook2docx.exceptions import Md2DocxError
from mdbook2docx.generation.theme import PAGE_SIZES
from mdbook2docx.utils import configure_logging

console = Console()

PREVIEW_WIDTH = 60


def _preview(text, width=PREVIEW_WIDTH):
    flat = " ".join(text.split())
    return flat if len(flat) <= width else flat[: width - 1] + "…"


def _format_size(size):
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    mdbook2docx - Turn Markdown manuscripts into print-ready DOCX files.
    """
    pass


@cli.command(name="convert")
@click.argument('input_md', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o',
    default=None,
    help='Output DOCX path (defaults to the front-matter title next to the input)',
    type=click.Path(dir_okay=False)
)
@click.option(
    '--page-size',
    default='tech-book',
    help='Named page size preset',
    type=click.Choice(sorted(PAGE_SIZES), case_sensitive=False)
)
@click.option('--width-cm', default=None, type=float, help='Custom page width in centimetres')
@click.option('--height-cm', default=None, type=float, help='Custom page height in centimetres')
@click.option(
    '--line-numbers/--no-line-numbers',
    default=True,
    help='Show line numbers in code blocks unless a block says otherwise'
)
@click.option(
    '--images',
    'image_dir',
    default=None,
    help='Directory whose images can be referenced by file name',
    type=click.Path(exists=True, file_okay=False)
)
@click.option('--clean-text', is_flag=True, help='Apply CJK publishing clean-up to prose')
@click.option(
    '--parser',
    default='lines',
    help='Block parser implementation',
    type=click.Choice(PARSERS)
)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def convert(input_md, output, page_size, width_cm, height_cm, line_numbers, image_dir, clean_text, parser, verbose):
    """
    Convert a Markdown manuscript to DOCX.

    Examples:

        mdbook2docx convert book.md

        mdbook2docx convert book.md -o out/book.docx --page-size a4

        mdbook2docx convert book.md --images assets --no-line-numbers
    """
    configure_logging(verbose)
    options = ConversionOptions(
        page_size=page_size.lower(),
        width_cm=width_cm,
        height_cm=height_cm,
        show_line_numbers=line_numbers,
        image_dir=Path(image_dir) if image_dir else None,
        clean_text=clean_text,
        parser=parser,
    )
    try:
        console.print(f"\n[bold cyan]Converting {os.path.basename(input_md)}...[/bold cyan]")
        result = convert_markdown_to_docx(input_md, output, options)
    except (Md2DocxError, ValueError, OSError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    summary = Table(title="Conversion Summary", show_header=False)
    summary.add_column("Property", style="cyan")
    summary.add_column("Value", style="green")
    summary.add_row("Output", str(result.output_path))
    summary.add_row("Blocks", str(len(result.blocks)))
    summary.add_row("Size", _format_size(result.size))
    if result.metadata.title:
        summary.add_row("Title", result.metadata.title)
    console.print(summary)

    for warning in result.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")
    console.print(f"\n[bold green]✓ Wrote {result.output_path}[/bold green]\n")


@cli.command(name="inspect")
@click.argument('input_md', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--parser',
    default='lines',
    help='Block parser implementation',
    type=click.Choice(PARSERS)
)
def inspect(input_md, parser):
    """
    Show the blocks and metadata parsed from a Markdown file.

    Example:

        mdbook2docx inspect book.md
    """
    try:
        text = Path(input_md).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    result = parse_markdown(text, parser)

    if result.metadata:
        meta_table = Table(title="Metadata", show_header=False)
        meta_table.add_column("Key", style="cyan")
        meta_table.add_column("Value", style="green")
        for key, value in result.metadata.items():
            meta_table.add_row(str(key), str(value))
        console.print(meta_table)

    blocks_table = Table(title=f"Blocks ({len(result.blocks)})")
    blocks_table.add_column("#", justify="right", style="dim")
    blocks_table.add_column("Line", justify="right")
    blocks_table.add_column("Type", style="cyan")
    blocks_table.add_column("Content", style="green")
    for index, block in enumerate(result.blocks, start=1):
        line = str(block.source_position.line + 1) if block.source_position else "-"
        if block.table_rows is not None:
            content = f"{len(block.table_rows)} rows × {len(block.table_rows[0]) if block.table_rows else 0} columns"
        elif block.metadata.get("src"):
            content = f"{block.metadata.get('alt') or ''} → {block.metadata['src']}"
        else:
            content = _preview(block.content)
        blocks_table.add_row(str(index), line, block.type.value, content)
    console.print(blocks_table)

    for warning in result.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")


if __name__ == '__main__':
    cli()
