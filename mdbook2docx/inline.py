"""Inline span parsing for block content."""

from __future__ import annotations

import re

from .types import InlineSegment, InlineStyle

__all__ = ["INLINE_PATTERN", "parse_inline", "strip_markers"]

# Alternation order is the precedence when two markers start at the same
# offset. Interiors are never re-scanned.
INLINE_PATTERN = re.compile(
    r"\*\*(?P<bold>.+?)\*\*"
    r"|`(?P<code>[^`]+)`"
    r"|<u>(?P<underline>.+?)</u>"
    r"|【(?P<ui_button>[^】]+)】"
    r"|\[(?P<shortcut>[^\[\]]+)\](?!\()"
    r"|『(?P<title>[^』]+)』"
    r"|《(?P<title_alt>[^》]+)》"
    r"|\*(?P<italic>[^*]+)\*"
)

_GROUP_STYLES = {
    "bold": InlineStyle.BOLD,
    "code": InlineStyle.CODE,
    "underline": InlineStyle.UNDERLINE,
    "ui_button": InlineStyle.UI_BUTTON,
    "shortcut": InlineStyle.SHORTCUT,
    "title": InlineStyle.TITLE,
    "title_alt": InlineStyle.TITLE,
    "italic": InlineStyle.ITALIC,
}


def _append_text(segments: list[InlineSegment], text: str) -> None:
    if not text:
        return
    if segments and segments[-1].kind is InlineStyle.TEXT:
        segments[-1] = InlineSegment(InlineStyle.TEXT, segments[-1].text + text)
    else:
        segments.append(InlineSegment(InlineStyle.TEXT, text))


def parse_inline(text: str) -> list[InlineSegment]:
    """Split ``text`` into ordered, non-overlapping styled segments."""
    segments: list[InlineSegment] = []
    cursor = 0
    for match in INLINE_PATTERN.finditer(text):
        _append_text(segments, text[cursor:match.start()])
        group = match.lastgroup
        segments.append(InlineSegment(_GROUP_STYLES[group], match.group(group)))
        cursor = match.end()
    _append_text(segments, text[cursor:])
    return segments


def strip_markers(text: str) -> str:
    """Return ``text`` with every consumed inline marker removed."""
    return "".join(segment.text for segment in parse_inline(text))
