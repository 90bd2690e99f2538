"""Table-of-contents builder."""

from __future__ import annotations

import re

from ...types import Block, BlockType
from ..layout import apply_indent, apply_spacing
from ..registry import BuildContext, register_builder
from ..runs import add_inline_runs, add_text_run
from ..theme import LAYOUT, SPACING
from ..xml import append_field, enable_update_fields

TOC_FIELD_INSTRUCTION = 'TOC \\o "1-3" \\h \\z \\u'
TOC_PLACEHOLDER = 'Right-click and select "Update Field" to generate the table of contents.'
TOC_TITLE = "目錄"

OUTLINE_ITEM = re.compile(r"^(?P<indent>\s*)(?:[-*]|\d+\.)\s*(?P<text>.*)$")


def _outline_paragraphs(block: Block, ctx: BuildContext) -> list:
    paragraphs = []
    for line in block.content.split("\n"):
        match = OUTLINE_ITEM.match(line)
        if not match or not match.group("text").strip():
            continue
        depth = len(match.group("indent").replace("\t", "  ")) // 2
        paragraph = ctx.document.add_paragraph()
        add_inline_runs(paragraph, match.group("text").strip())
        apply_indent(paragraph, left=LAYOUT.LIST_INDENT_STEP * depth)
        apply_spacing(paragraph, SPACING.LIST)
        paragraphs.append(paragraph)
    return paragraphs


@register_builder(BlockType.TOC)
def build_toc(block: Block, ctx: BuildContext) -> list:
    """Literal outline when one was written, otherwise an updatable TOC field."""
    title = ctx.document.add_paragraph()
    add_text_run(title, TOC_TITLE, bold=True)
    apply_spacing(title, SPACING.PARAGRAPH)

    if block.content.strip():
        return [title, *_outline_paragraphs(block, ctx)]

    enable_update_fields(ctx.document)
    field = ctx.document.add_paragraph()
    append_field(field, TOC_FIELD_INSTRUCTION, TOC_PLACEHOLDER)
    return [title, field]
