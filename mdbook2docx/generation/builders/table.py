"""Pipe table builder."""

from __future__ import annotations

from ...types import Block, BlockType
from ..layout import apply_spacing
from ..registry import BuildContext, register_builder
from ..runs import add_inline_runs
from ..theme import COLORS, LAYOUT, SPACING
from ..xml import (
    set_cell_shading,
    set_cell_width,
    set_table_borders,
    set_table_cell_margins,
    set_table_width,
)


@register_builder(BlockType.TABLE)
def build_table(block: Block, ctx: BuildContext) -> list:
    rows = block.table_rows or ()
    if not rows:
        return []
    columns = max(len(row) for row in rows)
    width = ctx.config.content_width_twips
    column_width = width // columns

    table = ctx.document.add_table(rows=len(rows), cols=columns)
    table.autofit = False
    set_table_width(table, column_width * columns)
    grid = {"style": "single", "size": LAYOUT.TABLE_BORDER, "color": COLORS.black}
    set_table_borders(table, top=grid, left=grid, bottom=grid, right=grid, inside=True)
    margin = LAYOUT.TABLE_CELL_MARGIN
    set_table_cell_margins(table, top=margin, left=margin, bottom=margin, right=margin)

    for row_index, (row, values) in enumerate(zip(table.rows, rows)):
        header = row_index == 0
        for cell, text in zip(row.cells, list(values) + [""] * (columns - len(values))):
            set_cell_width(cell, column_width)
            set_cell_shading(cell, COLORS.bg_table_header if header else COLORS.white)
            paragraph = cell.paragraphs[0]
            if header:
                add_inline_runs(paragraph, text, bold=True)
            else:
                add_inline_runs(paragraph, text)

    spacer = ctx.document.add_paragraph()
    apply_spacing(spacer, SPACING.TABLE_AFTER)
    return [table, spacer]
