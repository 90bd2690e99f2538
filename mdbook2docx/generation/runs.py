"""Run-level formatting shared by every builder."""

from __future__ import annotations

from docx.enum.text import WD_UNDERLINE
from docx.shared import Pt, RGBColor
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from ..inline import parse_inline
from ..text import clean_text_for_publishing
from ..types import InlineStyle
from .config import LayoutConfig
from .theme import COLORS, FONT_SIZES, FONTS
from .xml import set_run_fonts, set_run_shading

__all__ = ["add_text_run", "add_inline_runs", "add_line_break", "format_run"]


def format_run(
    run: Run,
    *,
    size: int | None = None,
    bold: bool | None = None,
    italic: bool | None = None,
    color: str | None = None,
    shading: str | None = None,
    underline: bool = False,
) -> Run:
    """Apply the house font plus any explicit overrides; ``size`` is in half-points."""
    set_run_fonts(run, FONTS.latin, FONTS.cjk)
    if size is not None:
        run.font.size = Pt(size / 2)
    if bold is not None:
        run.bold = bold
    if italic is not None:
        run.italic = italic
    if color:
        run.font.color.rgb = RGBColor.from_string(color)
    if underline:
        run.font.underline = WD_UNDERLINE.SINGLE
    if shading:
        set_run_shading(run, shading)
    return run


def add_text_run(paragraph: Paragraph, text: str, **formatting) -> Run:
    return format_run(paragraph.add_run(text), **formatting)


def add_line_break(paragraph: Paragraph) -> Run:
    run = paragraph.add_run()
    run.add_break()
    return run


_INLINE_FORMATTING = {
    InlineStyle.TEXT: {},
    InlineStyle.BOLD: {"bold": True},
    InlineStyle.ITALIC: {"italic": True, "color": COLORS.primary_blue},
    InlineStyle.UNDERLINE: {"underline": True, "color": COLORS.link_blue},
    InlineStyle.CODE: {"shading": COLORS.bg_code},
    InlineStyle.UI_BUTTON: {"bold": True, "shading": COLORS.bg_button},
    InlineStyle.SHORTCUT: {"size": FONT_SIZES.shortcut, "shading": COLORS.bg_shortcut},
    InlineStyle.TITLE: {"bold": True},
}


def add_inline_runs(paragraph: Paragraph, text: str, config: LayoutConfig | None = None, **base) -> list[Run]:
    """Append one styled run per inline segment of ``text``.

    ``base`` formatting applies to every run; segment styles override it.
    Publishing clean-up, when enabled, only touches unstyled text.
    """
    runs: list[Run] = []
    for segment in parse_inline(text):
        content = segment.text
        if config is not None and config.clean_text and segment.kind is InlineStyle.TEXT:
            content = clean_text_for_publishing(content)
        formatting = {**base, **_INLINE_FORMATTING[segment.kind]}
        runs.append(add_text_run(paragraph, content, **formatting))
    return runs
