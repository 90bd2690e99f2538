"""Line-oriented block parser driven by the rule registry."""

from __future__ import annotations

import logging
import re
from enum import Enum

from ..frontmatter import extract_front_matter
from ..types import Block, BlockType, ParseResult, SourcePosition
from . import rules as _builtin_rules  # noqa: F401  (registers the default rules)
from .registry import ParserContext, RuleRegistry, registry as default_registry

LOGGER = logging.getLogger(__name__)

__all__ = [
    "ParserState",
    "BlockParser",
    "parse",
    "parse_blocks",
    "parse_fence_info",
    "split_table_row",
]

FENCE_PATTERN = re.compile(r"^(?P<fence>`{3,})(?P<info>.*)$")
TABLE_SEPARATOR = re.compile(r"^[\s\-:|]+$")
UNESCAPED_PIPE = re.compile(r"(?<!\\)\|")

LINE_NUMBERS_ON = {"ln", "line", "yes"}
LINE_NUMBERS_OFF = {"no-ln", "plain", "no"}
DIAGRAM_LANGUAGES = {"mermaid"}


class ParserState(Enum):
    NORMAL = "normal"
    IN_CODE_FENCE = "in_code_fence"
    IN_TABLE = "in_table"


def parse_fence_info(info: str) -> tuple[str, bool | None]:
    """Split ``lang[:modifier]`` into a language and a line-number flag."""
    language, _, modifier = info.strip().partition(":")
    modifier = modifier.strip().lower()
    show_line_numbers: bool | None = None
    if modifier in LINE_NUMBERS_ON:
        show_line_numbers = True
    elif modifier in LINE_NUMBERS_OFF:
        show_line_numbers = False
    return language.strip(), show_line_numbers


def _is_separator_row(row: str) -> bool:
    return "-" in row and bool(TABLE_SEPARATOR.match(row))


def split_table_row(row: str) -> list[str]:
    """Split a pipe table row on unescaped pipes and trim each cell."""
    body = row.strip()
    if body.startswith("|"):
        body = body[1:]
    if body.endswith("|") and not body.endswith("\\|"):
        body = body[:-1]
    return [cell.replace("\\|", "|").strip() for cell in UNESCAPED_PIPE.split(body)]


class BlockParser:
    """Turns post-front-matter text into an ordered list of blocks.

    Code fences and tables are tracked by an explicit :class:`ParserState`;
    every other construct is recognised by the rules in the registry, tried
    in registration order.
    """

    def __init__(self, rules: RuleRegistry | None = None) -> None:
        self.rules = rules if rules is not None else default_registry

    def parse(self, text: str, *, line_base: int = 0, char_base: int = 0) -> list[Block]:
        raw_lines = text.split("\n")
        offsets: list[int] = []
        offset = char_base
        for raw in raw_lines:
            offsets.append(offset)
            offset += len(raw) + 1
        ctx = ParserContext([raw.rstrip("\r") for raw in raw_lines], offsets=offsets)

        self._line_base = line_base
        self._ctx = ctx
        self._blocks: list[Block] = []
        self._paragraph: list[int] = []
        self._table: list[int] = []
        self._code: list[str] = []
        self._fence_start = 0
        self._fence_marker = ""
        self._fence_info: tuple[str, bool | None] = ("", None)
        self._state = ParserState.NORMAL

        while ctx.index < len(ctx.lines):
            self._consume(ctx.current)
            ctx.index += 1

        if self._state is ParserState.IN_CODE_FENCE:
            LOGGER.warning("Unclosed code fence starting at line %d", self._fence_start + 1)
            self._flush_code(len(ctx.lines) - 1)
        elif self._state is ParserState.IN_TABLE:
            self._flush_table()
        self._flush_paragraph()
        return self._blocks

    def _position(self, first: int, last: int) -> SourcePosition:
        position = self._ctx.position(first, last)
        return SourcePosition(position.line + self._line_base, position.start, position.end)

    def _emit(self, block: Block, first: int, last: int) -> None:
        self._blocks.append(block.with_position(self._position(first, last)))

    def _consume(self, line: str) -> None:
        trimmed = line.strip()
        index = self._ctx.index

        if self._state is ParserState.IN_CODE_FENCE:
            closing = FENCE_PATTERN.match(trimmed)
            if (
                closing
                and not closing.group("info").strip()
                and len(closing.group("fence")) >= len(self._fence_marker)
            ):
                self._flush_code(index)
            else:
                self._code.append(line)
            return

        opening = FENCE_PATTERN.match(trimmed)
        if opening:
            if self._state is ParserState.IN_TABLE:
                self._flush_table()
            self._flush_paragraph()
            self._state = ParserState.IN_CODE_FENCE
            self._fence_start = index
            self._fence_marker = opening.group("fence")
            self._fence_info = parse_fence_info(opening.group("info"))
            self._code = []
            return

        if trimmed.startswith("|"):
            if self._state is not ParserState.IN_TABLE:
                self._flush_paragraph()
                self._state = ParserState.IN_TABLE
            self._table.append(index)
            return
        if self._state is ParserState.IN_TABLE:
            self._flush_table()

        try:
            matched = self.rules.apply(line, self._ctx)
        except Exception as exc:
            LOGGER.warning("Parser rule failed on line %d, keeping it as text: %s", index + 1, exc)
            self._ctx.index = index
            matched = None

        if matched is not None:
            rule, blocks = matched
            self._flush_paragraph()
            LOGGER.debug("Rule %s claimed lines %d-%d", rule.name, index + 1, self._ctx.index + 1)
            for block in blocks:
                self._emit(block, index, self._ctx.index)
            return

        if not trimmed:
            self._flush_paragraph()
            return
        self._paragraph.append(index)

    def _flush_paragraph(self) -> None:
        if not self._paragraph:
            return
        lines = [self._ctx.lines[index] for index in self._paragraph]
        content = "\n".join(lines).strip()
        first, last = self._paragraph[0], self._paragraph[-1]
        self._paragraph = []
        if content:
            self._emit(Block(BlockType.PARAGRAPH, content), first, last)

    def _flush_table(self) -> None:
        indices, self._table = self._table, []
        self._state = ParserState.NORMAL
        if not indices:
            return
        rows = [
            split_table_row(self._ctx.lines[index])
            for index in indices
            if not _is_separator_row(self._ctx.lines[index].strip())
        ]
        if not rows:
            return
        width = len(rows[0])
        padded = [row + [""] * (width - len(row)) for row in rows]
        self._emit(Block(BlockType.TABLE, table_rows=padded), indices[0], indices[-1])

    def _flush_code(self, last: int) -> None:
        language, show_line_numbers = self._fence_info
        content = "\n".join(self._code)
        if language.lower() in DIAGRAM_LANGUAGES:
            block = Block(BlockType.MERMAID, content, metadata={"language": language.lower()})
        else:
            block = Block(
                BlockType.CODE_BLOCK,
                content,
                metadata={"language": language, "show_line_numbers": show_line_numbers},
            )
        self._emit(block, self._fence_start, last)
        self._code = []
        self._state = ParserState.NORMAL


def parse_blocks(text: str, rules: RuleRegistry | None = None) -> list[Block]:
    """Parse a Markdown body (no front matter) into blocks."""
    return BlockParser(rules).parse(text)


def parse(text: str, rules: RuleRegistry | None = None) -> ParseResult:
    """Parse a full manuscript: front matter first, then the block body.

    Source positions refer to the original ``text``, front matter included.
    """
    front = extract_front_matter(text)
    consumed = len(text) - len(front.body)
    blocks = BlockParser(rules).parse(
        front.body,
        line_base=text[:consumed].count("\n"),
        char_base=consumed,
    )
    return ParseResult(blocks=blocks, metadata=front.metadata, warnings=tuple(front.warnings))
