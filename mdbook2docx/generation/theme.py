"""Fixed typographic policy for generated manuscripts.

Sizes are half-points for runs and twips for spacing, indents and widths.
Border sizes are eighths of a point, as Word stores them.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "FONTS",
    "COLORS",
    "CALLOUT_STYLES",
    "FONT_SIZES",
    "SPACING",
    "LAYOUT",
    "PageSize",
    "PAGE_SIZES",
    "CalloutStyle",
    "Spacing",
]


@dataclass(frozen=True, slots=True)
class _Fonts:
    cjk: str = "Microsoft JhengHei"
    latin: str = "Consolas"


@dataclass(frozen=True, slots=True)
class _Colors:
    black: str = "000000"
    white: str = "FFFFFF"
    primary_blue: str = "1E3A8A"
    link_blue: str = "2563EB"
    bg_code: str = "F1F5F9"
    bg_button: str = "E2E8F0"
    bg_shortcut: str = "F8FAFC"
    bg_ai_chat: str = "F2F2F2"
    bg_table_header: str = "F1F5F9"
    chat_border: str = "404040"
    code_border: str = "BFBFBF"
    quote_border: str = "94A3B8"
    line_number_text: str = "94A3B8"
    error_text: str = "FF0000"
    hint_text: str = "666666"


@dataclass(frozen=True, slots=True)
class CalloutStyle:
    label: str
    border: str
    background: str
    border_style: str
    border_size: int


@dataclass(frozen=True, slots=True)
class _FontSizes:
    body: int = 22
    code: int = 18
    label: int = 18
    shortcut: int = 20
    caption: int = 20
    hint: int = 16


@dataclass(frozen=True, slots=True)
class Spacing:
    before: int
    after: int
    line: int | None = None


class SPACING:
    HEADING = {1: Spacing(480, 240), 2: Spacing(400, 200), 3: Spacing(300, 150)}
    PARAGRAPH = Spacing(200, 200)
    LIST = Spacing(120, 120)
    CHAT = Spacing(300, 300)
    CALLOUT = Spacing(400, 400, 360)
    QUOTE = Spacing(200, 200)
    RULE = Spacing(240, 240)
    CODE_BLOCK = Spacing(0, 0, 240)
    IMAGE = Spacing(200, 100)
    CAPTION = Spacing(0, 200)
    DIAGRAM = Spacing(400, 400)
    DIAGRAM_ERROR = Spacing(200, 200)
    TABLE_AFTER = Spacing(240, 0)


class LAYOUT:
    MARGIN = 1440
    LINE_NUMBER_WIDTH = 600
    CODE_INDENT = 120
    CODE_TABLE_INDENT = 120
    CODE_BORDER = 4
    CODE_MARGIN = 100
    CELL_SIDE_MARGIN = 108
    TABLE_BORDER = 4
    TABLE_CELL_MARGIN = 100
    HEADING_BORDER = 18
    HEADING_BORDER_SPACE = 8
    RULE_BORDER = 12
    CHAT_INDENT = 1440
    CHAT_BORDER = 4
    CHAT_BORDER_SPACE = 10
    CALLOUT_INDENT = 400
    CALLOUT_SPACE_VERTICAL = 5
    CALLOUT_SPACE_HORIZONTAL = 15
    QUOTE_INDENT = 400
    QUOTE_BORDER = 12
    LIST_INDENT = 720
    LIST_INDENT_STEP = 360
    LIST_HANGING = 360


FONTS = _Fonts()
COLORS = _Colors()
FONT_SIZES = _FontSizes()

CALLOUT_STYLES = {
    "tip": CalloutStyle("TIP", "64748B", "F9FAFB", "single", 36),
    "note": CalloutStyle("NOTE", "CBD5E1", "FFFFFF", "dashed", 24),
    "warning": CalloutStyle("WARNING", "000000", "F1F5F9", "single", 48),
}


@dataclass(frozen=True, slots=True)
class PageSize:
    """Physical page geometry in centimetres."""

    name: str
    width_cm: float
    height_cm: float


PAGE_SIZES = {
    "tech-book": PageSize("tech-book", 17.0, 23.0),
    "a4": PageSize("a4", 21.0, 29.7),
    "a5": PageSize("a5", 14.8, 21.0),
    "b5": PageSize("b5", 17.6, 25.0),
}
