"""Builders for text blocks: headings, paragraphs, lists, quotes and bubbles."""

from __future__ import annotations

import logging

from ...types import Block, BlockType, CalloutKind, ChatAlignment
from ..layout import ALIGNMENTS, apply_indent, apply_spacing, set_numbering, start_numbering, style_num_id
from ..registry import BuildContext, register_builder
from ..runs import add_inline_runs, add_line_break, add_text_run
from ..theme import CALLOUT_STYLES, COLORS, FONT_SIZES, LAYOUT, SPACING
from ..xml import set_paragraph_borders, set_paragraph_shading

LOGGER = logging.getLogger(__name__)

LIST_STYLES = {
    BlockType.BULLET_LIST: "List Bullet",
    BlockType.NUMBERED_LIST: "List Number",
}


@register_builder(BlockType.HEADING_1, BlockType.HEADING_2, BlockType.HEADING_3)
def build_heading(block: Block, ctx: BuildContext) -> list:
    level = block.type.heading_level
    paragraph = ctx.document.add_paragraph(style=f"Heading {level}")
    add_inline_runs(paragraph, block.content)
    apply_spacing(paragraph, SPACING.HEADING[level])
    if level == 1:
        set_paragraph_borders(
            paragraph,
            bottom={
                "style": "single",
                "size": LAYOUT.HEADING_BORDER,
                "space": LAYOUT.HEADING_BORDER_SPACE,
                "color": COLORS.black,
            },
        )
    return [paragraph]


@register_builder(BlockType.PARAGRAPH)
def build_paragraph(block: Block, ctx: BuildContext) -> list:
    paragraph = ctx.document.add_paragraph()
    add_inline_runs(paragraph, block.content, ctx.config)
    paragraph.alignment = ALIGNMENTS["justify"]
    apply_spacing(paragraph, SPACING.PARAGRAPH)
    return [paragraph]


@register_builder(BlockType.BULLET_LIST, BlockType.NUMBERED_LIST)
def build_list_item(block: Block, ctx: BuildContext) -> list:
    style = LIST_STYLES[block.type]
    level = block.nesting_level
    paragraph = ctx.document.add_paragraph(style=style)

    if block.type is BlockType.NUMBERED_LIST:
        if not ctx.continues_list(block) or block.type not in ctx.list_numbering:
            num_id = start_numbering(ctx.document, style, int(block.metadata.get("number") or 1))
            if num_id is None:
                ctx.list_numbering.pop(block.type, None)
            else:
                ctx.list_numbering[block.type] = num_id
        num_id = ctx.list_numbering.get(block.type)
    else:
        num_id = style_num_id(ctx.document, style)
    if num_id is not None:
        set_numbering(paragraph, num_id, level)

    if "checked" in block.metadata:
        add_text_run(paragraph, "☑ " if block.metadata["checked"] else "☐ ")
    add_inline_runs(paragraph, block.content, ctx.config)
    apply_spacing(paragraph, SPACING.LIST)
    apply_indent(
        paragraph,
        left=LAYOUT.LIST_INDENT + LAYOUT.LIST_INDENT_STEP * level,
        first_line=-LAYOUT.LIST_HANGING,
    )
    return [paragraph]


@register_builder(BlockType.HORIZONTAL_RULE)
def build_horizontal_rule(block: Block, ctx: BuildContext) -> list:
    paragraph = ctx.document.add_paragraph()
    set_paragraph_borders(
        paragraph,
        bottom={"style": "single", "size": LAYOUT.RULE_BORDER, "space": 1, "color": COLORS.black},
    )
    apply_spacing(paragraph, SPACING.RULE)
    return [paragraph]


@register_builder(BlockType.QUOTE_BLOCK)
def build_quote(block: Block, ctx: BuildContext) -> list:
    paragraph = ctx.document.add_paragraph()
    for index, line in enumerate(block.content.split("\n")):
        if index:
            add_line_break(paragraph)
        add_inline_runs(paragraph, line, ctx.config, italic=True)
    set_paragraph_borders(
        paragraph,
        left={"style": "single", "size": LAYOUT.QUOTE_BORDER, "space": 8, "color": COLORS.quote_border},
    )
    apply_indent(paragraph, left=LAYOUT.QUOTE_INDENT)
    apply_spacing(paragraph, SPACING.QUOTE)
    return [paragraph]


_CALLOUT_TYPES = {kind.block_type: kind for kind in CalloutKind}


@register_builder(BlockType.CALLOUT_TIP, BlockType.CALLOUT_NOTE, BlockType.CALLOUT_WARNING)
def build_callout(block: Block, ctx: BuildContext) -> list:
    style = CALLOUT_STYLES[_CALLOUT_TYPES[block.type].value]
    paragraph = ctx.document.add_paragraph()
    add_text_run(paragraph, f"[ {style.label} ]", bold=True, size=FONT_SIZES.label)
    for line in block.content.split("\n"):
        add_line_break(paragraph)
        add_inline_runs(paragraph, line, ctx.config)

    vertical = {
        "style": style.border_style,
        "size": style.border_size,
        "space": LAYOUT.CALLOUT_SPACE_VERTICAL,
        "color": style.border,
    }
    horizontal = {**vertical, "space": LAYOUT.CALLOUT_SPACE_HORIZONTAL}
    set_paragraph_borders(paragraph, top=vertical, bottom=vertical, left=horizontal, right=horizontal)
    set_paragraph_shading(paragraph, style.background)
    apply_spacing(paragraph, SPACING.CALLOUT)
    apply_indent(paragraph, left=LAYOUT.CALLOUT_INDENT, right=LAYOUT.CALLOUT_INDENT)
    return [paragraph]


def _chat_header(block: Block) -> str:
    role = block.role or ("User" if block.type is BlockType.CHAT_USER else "AI")
    label = block.metadata.get("label")
    return f"{role} ({label}):" if label else f"{role}:"


def _chat_alignment(block: Block) -> ChatAlignment:
    if block.type is BlockType.CHAT_USER:
        return ChatAlignment.RIGHT
    if block.type is BlockType.CHAT_AI:
        return ChatAlignment.LEFT
    return block.alignment or ChatAlignment.LEFT


_CHAT_STYLES = {
    ChatAlignment.RIGHT: ("dashed", COLORS.white, {"left": LAYOUT.CHAT_INDENT}),
    ChatAlignment.LEFT: ("dotted", COLORS.bg_ai_chat, {"right": LAYOUT.CHAT_INDENT}),
    ChatAlignment.CENTER: (
        "single",
        COLORS.bg_ai_chat,
        {"left": LAYOUT.CHAT_INDENT // 2, "right": LAYOUT.CHAT_INDENT // 2},
    ),
}


@register_builder(BlockType.CHAT_USER, BlockType.CHAT_AI, BlockType.CHAT_CUSTOM)
def build_chat(block: Block, ctx: BuildContext) -> list:
    alignment = _chat_alignment(block)
    border_style, background, indent = _CHAT_STYLES[alignment]

    paragraph = ctx.document.add_paragraph()
    add_text_run(paragraph, _chat_header(block), bold=True, size=FONT_SIZES.label)
    add_line_break(paragraph)
    add_inline_runs(paragraph, block.content, ctx.config)

    border = {
        "style": border_style,
        "size": LAYOUT.CHAT_BORDER,
        "space": LAYOUT.CHAT_BORDER_SPACE,
        "color": COLORS.chat_border,
    }
    set_paragraph_borders(paragraph, top=border, bottom=border, left=border, right=border)
    set_paragraph_shading(paragraph, background)
    paragraph.alignment = ALIGNMENTS[alignment.value]
    apply_indent(paragraph, **indent)
    apply_spacing(paragraph, SPACING.CHAT)
    return [paragraph]
