"""Code block builder: a shaded, bordered table with one row per line."""

from __future__ import annotations

from docx.enum.table import WD_CELL_VERTICAL_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH

from ...types import Block, BlockType
from ..layout import apply_indent, apply_spacing
from ..registry import BuildContext, register_builder
from ..runs import add_text_run
from ..theme import COLORS, FONT_SIZES, LAYOUT, SPACING
from ..xml import (
    set_cell_shading,
    set_cell_width,
    set_table_borders,
    set_table_cell_margins,
    set_table_indent,
    set_table_layout_fixed,
    set_table_width,
)


def code_table_width(ctx: BuildContext) -> int:
    """Content width less the table indent on both sides, in twips."""
    return max(ctx.config.content_width_twips - 2 * LAYOUT.CODE_TABLE_INDENT, LAYOUT.LINE_NUMBER_WIDTH * 2)


def _line_numbers_enabled(block: Block, ctx: BuildContext) -> bool:
    if block.show_line_numbers is None:
        return ctx.config.show_line_numbers
    return bool(block.show_line_numbers)


def _fill_cell(cell, text: str, *, line_number: bool, width: int) -> None:
    set_cell_width(cell, width)
    set_cell_shading(cell, COLORS.bg_code)
    cell.vertical_alignment = WD_CELL_VERTICAL_ALIGNMENT.TOP
    paragraph = cell.paragraphs[0]
    apply_spacing(paragraph, SPACING.CODE_BLOCK)
    if line_number:
        paragraph.alignment = WD_ALIGN_PARAGRAPH.RIGHT
        add_text_run(paragraph, text, size=FONT_SIZES.code, color=COLORS.line_number_text)
    else:
        apply_indent(paragraph, left=LAYOUT.CODE_INDENT)
        add_text_run(paragraph, text, size=FONT_SIZES.code)


@register_builder(BlockType.CODE_BLOCK)
def build_code_block(block: Block, ctx: BuildContext) -> list:
    lines = block.content.split("\n")
    numbered = _line_numbers_enabled(block, ctx)
    # one blank padding row above and below the source lines
    rows = [None, *lines, None]
    width = code_table_width(ctx)
    number_width = LAYOUT.LINE_NUMBER_WIDTH if numbered else 0

    table = ctx.document.add_table(rows=len(rows), cols=2 if numbered else 1)
    table.autofit = False
    set_table_width(table, width)
    set_table_indent(table, LAYOUT.CODE_TABLE_INDENT)
    set_table_layout_fixed(table)
    border = {"style": "single", "size": LAYOUT.CODE_BORDER, "color": COLORS.code_border}
    set_table_borders(table, inside=False, top=border, left=border, bottom=border, right=border)
    set_table_cell_margins(
        table,
        top=LAYOUT.CODE_MARGIN,
        bottom=LAYOUT.CODE_MARGIN,
        left=LAYOUT.CELL_SIDE_MARGIN,
        right=LAYOUT.CELL_SIDE_MARGIN,
    )

    line_number = 0
    for row, line in zip(table.rows, rows):
        cells = row.cells
        if line is not None:
            line_number += 1
        if numbered:
            _fill_cell(
                cells[0],
                str(line_number) if line is not None else "",
                line_number=True,
                width=number_width,
            )
        _fill_cell(cells[-1], line or "", line_number=False, width=width - number_width)
    return [table]
