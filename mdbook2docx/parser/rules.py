"""Built-in single-line and multi-line block recognition rules.

Rules are registered in precedence order; the stateful code-fence and table
handling lives in :mod:`mdbook2docx.parser.tokenizer` and always runs first.
"""

from __future__ import annotations

import re

from ..types import Block, BlockType, CalloutKind, ChatAlignment
from .registry import ParserContext, register_rule

__all__ = [
    "IMAGE_PATTERN",
    "TOC_PATTERN",
    "RULE_PATTERN",
    "HEADING_PATTERN",
    "NUMBERED_PATTERN",
    "BULLET_PATTERN",
    "CALLOUT_TAG_PATTERN",
    "parse_chat_line",
    "split_callout_tag",
    "list_item_block",
]

IMAGE_PATTERN = re.compile(
    r'^!\[(?P<alt>[^\]]*)\]\((?P<src>[^)\s]+)(?:\s+"(?P<title>[^"]*)")?\)$'
)
TOC_PATTERN = re.compile(r"^\[TOC\]$", re.IGNORECASE)
RULE_PATTERN = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$")
HEADING_PATTERN = re.compile(r"^(?P<marks>#{1,3}) (?P<text>.*)$")
NUMBERED_PATTERN = re.compile(r"^(?P<indent>\s*)(?P<number>\d+)\.\s+(?P<text>.*)$")
BULLET_PATTERN = re.compile(r"^(?P<indent>\s*)[-*]\s+(?P<text>.*)$")
TASK_PATTERN = re.compile(r"^\[(?P<mark>[ xX])\]\s*")
TOC_ITEM_PATTERN = re.compile(r"^(?:[-*]|\d+\.)\s")

CHAT_PLAIN_PATTERN = re.compile(r"^(?P<role>User|AI)[：:]\s*(?P<text>.*)$", re.IGNORECASE)
CHAT_LABELLED_PATTERN = re.compile(
    r"^(?P<role>User|AI)（(?P<label>.*?)）\s*[：:]?\s*(?P<text>.*)$", re.IGNORECASE
)
CHAT_CUSTOM_PATTERNS = (
    (re.compile(r'^(?P<role>.+?)\s*:":\s*(?P<text>.*)$'), ChatAlignment.CENTER),
    (re.compile(r'^(?P<role>.+?)\s*::"\s*(?P<text>.*)$'), ChatAlignment.RIGHT),
    (re.compile(r'^(?P<role>.+?)\s*"::\s*(?P<text>.*)$'), ChatAlignment.LEFT),
)

CALLOUT_TAG_PATTERN = re.compile(r"^\[!(?P<kind>TIP|NOTE|WARNING)\]\s*", re.IGNORECASE)
QUOTE_MARKER = re.compile(r"^\s*>\s?")

INDENT_WIDTH = 2


def _nesting_level(indent: str) -> int:
    return len(indent.replace("\t", " " * INDENT_WIDTH)) // INDENT_WIDTH


def list_item_block(block_type: BlockType, text: str, nesting_level: int = 0, **extra) -> Block:
    """Build a list-item block, stripping any task-list marker."""
    metadata = {"nesting_level": nesting_level, **extra}
    task = TASK_PATTERN.match(text)
    if task:
        metadata["checked"] = task.group("mark").lower() == "x"
        text = text[task.end():]
    return Block(block_type, text.strip(), metadata=metadata)


def parse_chat_line(text: str) -> Block | None:
    """Recognise the dialogue syntaxes; returns ``None`` for other lines."""
    labelled = CHAT_LABELLED_PATTERN.match(text)
    plain = labelled or CHAT_PLAIN_PATTERN.match(text)
    if plain:
        role = plain.group("role")
        is_user = role.lower() == "user"
        metadata = {
            "role": "User" if is_user else "AI",
            "alignment": (ChatAlignment.RIGHT if is_user else ChatAlignment.LEFT).value,
        }
        if labelled:
            metadata["label"] = labelled.group("label").strip()
        return Block(
            BlockType.CHAT_USER if is_user else BlockType.CHAT_AI,
            plain.group("text").strip(),
            metadata=metadata,
        )
    for pattern, alignment in CHAT_CUSTOM_PATTERNS:
        custom = pattern.match(text)
        if custom:
            return Block(
                BlockType.CHAT_CUSTOM,
                custom.group("text").strip(),
                metadata={"role": custom.group("role").strip(), "alignment": alignment.value},
            )
    return None


def split_callout_tag(text: str) -> tuple[CalloutKind | None, str]:
    """Strip a leading ``[!KIND]`` alert tag, returning the kind found."""
    match = CALLOUT_TAG_PATTERN.match(text)
    if not match:
        return None, text
    return CalloutKind(match.group("kind").lower()), text[match.end():]


@register_rule("image")
def image_rule(line: str, ctx: ParserContext) -> Block | None:
    match = IMAGE_PATTERN.match(line.strip())
    if not match:
        return None
    return Block(
        BlockType.IMAGE,
        metadata={
            "alt": match.group("alt"),
            "src": match.group("src"),
            "title": match.group("title"),
        },
    )


@register_rule("toc")
def toc_rule(line: str, ctx: ParserContext) -> Block | None:
    if not TOC_PATTERN.match(line.strip()):
        return None
    outline: list[str] = []
    while ctx.has_next() and TOC_ITEM_PATTERN.match(ctx.peek().strip()):
        outline.append(ctx.advance())
    return Block(BlockType.TOC, "\n".join(outline).strip())


@register_rule("horizontal_rule")
def horizontal_rule(line: str, ctx: ParserContext) -> Block | None:
    if RULE_PATTERN.match(line.strip()):
        return Block(BlockType.HORIZONTAL_RULE)
    return None


@register_rule("chat")
def chat_rule(line: str, ctx: ParserContext) -> Block | None:
    return parse_chat_line(line.strip())


@register_rule("callout")
def callout_rule(line: str, ctx: ParserContext) -> Block | None:
    if not line.lstrip().startswith(">"):
        return None
    kind, first = split_callout_tag(QUOTE_MARKER.sub("", line, count=1).strip())
    parts = [first]
    while ctx.has_next():
        following = ctx.peek()
        quoted = following.lstrip().startswith(">")
        lazy = following.strip() != "" and ctx.current.lstrip().startswith(">")
        if not (quoted or lazy):
            break
        ctx.advance()
        parts.append(QUOTE_MARKER.sub("", following, count=1) if quoted else following)
    content = "\n".join(parts).strip()
    block_type = kind.block_type if kind else BlockType.QUOTE_BLOCK
    return Block(block_type, content)


@register_rule("heading")
def heading_rule(line: str, ctx: ParserContext) -> Block | None:
    match = HEADING_PATTERN.match(line.strip())
    if not match:
        return None
    return Block(BlockType.heading(len(match.group("marks"))), match.group("text").strip())


@register_rule("list_item")
def list_item_rule(line: str, ctx: ParserContext) -> Block | None:
    numbered = NUMBERED_PATTERN.match(line)
    if numbered:
        return list_item_block(
            BlockType.NUMBERED_LIST,
            numbered.group("text"),
            _nesting_level(numbered.group("indent")),
            number=int(numbered.group("number")),
        )
    bullet = BULLET_PATTERN.match(line)
    if bullet:
        return list_item_block(
            BlockType.BULLET_LIST,
            bullet.group("text"),
            _nesting_level(bullet.group("indent")),
        )
    return None
