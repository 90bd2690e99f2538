"""Paragraph-level layout helpers and list numbering."""

from __future__ import annotations

import logging

from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Twips
from docx.text.paragraph import Paragraph

from .theme import Spacing

LOGGER = logging.getLogger(__name__)

__all__ = [
    "ALIGNMENTS",
    "apply_spacing",
    "apply_indent",
    "style_num_id",
    "start_numbering",
    "set_numbering",
    "remove_paragraph",
]

ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "justify": WD_ALIGN_PARAGRAPH.JUSTIFY,
}


def apply_spacing(paragraph: Paragraph, spacing: Spacing) -> None:
    fmt = paragraph.paragraph_format
    fmt.space_before = Twips(spacing.before)
    fmt.space_after = Twips(spacing.after)
    if spacing.line is not None:
        # 240 twips is single spacing under the "auto" line rule.
        fmt.line_spacing = spacing.line / 240


def apply_indent(paragraph: Paragraph, left: int | None = None, right: int | None = None, first_line: int | None = None) -> None:
    fmt = paragraph.paragraph_format
    if left is not None:
        fmt.left_indent = Twips(left)
    if right is not None:
        fmt.right_indent = Twips(right)
    if first_line is not None:
        fmt.first_line_indent = Twips(first_line)


def style_num_id(document, style_name: str) -> int | None:
    """Return the numbering instance a paragraph style is linked to."""
    try:
        style = document.styles[style_name]
    except KeyError:
        return None
    ppr = style.element.pPr
    if ppr is None or ppr.numPr is None or ppr.numPr.numId is None:
        return None
    return ppr.numPr.numId.val


def start_numbering(document, style_name: str, start: int = 1) -> int | None:
    """Create a fresh numbering instance for ``style_name`` starting at ``start``.

    Each numbered list group gets its own instance so numbering restarts
    instead of continuing from the previous group.
    """
    num_id = style_num_id(document, style_name)
    if num_id is None:
        LOGGER.debug("Style %s carries no numbering; list numbering will not restart", style_name)
        return None
    numbering = document.part.numbering_part.element
    try:
        abstract_id = numbering.num_having_numId(num_id).abstractNumId.val
    except KeyError:
        LOGGER.debug("Numbering instance %s is not defined; list numbering will not restart", num_id)
        return None
    num = numbering.add_num(abstract_id)
    num.add_lvlOverride(ilvl=0).add_startOverride(start)
    return num.numId


def set_numbering(paragraph: Paragraph, num_id: int, level: int = 0) -> None:
    num_pr = paragraph._p.get_or_add_pPr().get_or_add_numPr()
    num_pr.get_or_add_ilvl().val = level
    num_pr.get_or_add_numId().val = num_id


def remove_paragraph(paragraph: Paragraph) -> None:
    element = paragraph._p
    parent = element.getparent()
    if parent is not None:
        parent.remove(element)
