"""AST-driven parser variant built on mistune.

Produces the same block model as the line parser. Nested lists are flattened
depth-first into list-item blocks annotated with ``nesting_level``. Blocks
carry no source positions because the mistune AST does not expose offsets.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import mistune

from ..types import Block, BlockType
from .rules import TOC_PATTERN, list_item_block, parse_chat_line, split_callout_tag
from .tokenizer import DIAGRAM_LANGUAGES, parse_fence_info

LOGGER = logging.getLogger(__name__)

__all__ = ["inline_markdown", "parse_markdown_ast"]

Token = dict[str, Any]


def _create_markdown() -> mistune.Markdown:
    return mistune.create_markdown(renderer="ast", plugins=["table"])


def inline_markdown(tokens: Iterable[Token]) -> str:
    """Rebuild inline Markdown source from mistune inline tokens."""
    parts: list[str] = []
    for token in tokens:
        kind = token.get("type")
        children = token.get("children") or []
        if kind == "text":
            parts.append(token.get("raw", ""))
        elif kind == "strong":
            parts.append(f"**{inline_markdown(children)}**")
        elif kind == "emphasis":
            parts.append(f"*{inline_markdown(children)}*")
        elif kind == "codespan":
            parts.append(f"`{token.get('raw', '')}`")
        elif kind in {"softbreak", "linebreak"}:
            parts.append("\n")
        elif kind == "inline_html":
            parts.append(token.get("raw", ""))
        elif kind == "link":
            url = token.get("attrs", {}).get("url", "")
            parts.append(f"[{inline_markdown(children)}]({url})")
        elif kind == "image":
            attrs = token.get("attrs", {})
            parts.append(f"![{inline_markdown(children)}]({attrs.get('url', '')})")
        else:
            parts.append(token.get("raw", "") or inline_markdown(children))
    return "".join(parts)


def _block_text(token: Token) -> str:
    if token.get("type") == "block_code":
        return token.get("raw", "").rstrip("\n")
    if "children" in token and token.get("type") in {"paragraph", "block_text", "heading"}:
        return inline_markdown(token["children"])
    return token.get("raw", "") or "\n".join(
        _block_text(child) for child in token.get("children") or []
    )


class _AstBlockBuilder:
    def __init__(self) -> None:
        self.blocks: list[Block] = []

    def visit(self, token: Token) -> None:
        handler = getattr(self, f"_visit_{token.get('type')}", None)
        if handler is None:
            LOGGER.debug("Skipping unsupported token type %s", token.get("type"))
            return
        handler(token)

    def _visit_blank_line(self, token: Token) -> None:
        return None

    def _visit_heading(self, token: Token) -> None:
        level = min(max(int(token.get("attrs", {}).get("level", 1)), 1), 3)
        self.blocks.append(Block(BlockType.heading(level), inline_markdown(token["children"]).strip()))

    def _visit_paragraph(self, token: Token) -> None:
        children = token.get("children") or []
        if len(children) == 1 and children[0].get("type") == "image":
            image = children[0]
            attrs = image.get("attrs", {})
            self.blocks.append(
                Block(
                    BlockType.IMAGE,
                    metadata={
                        "alt": inline_markdown(image.get("children") or []),
                        "src": attrs.get("url", ""),
                        "title": attrs.get("title"),
                    },
                )
            )
            return
        text = inline_markdown(children)
        stripped = text.strip()
        if TOC_PATTERN.match(stripped):
            self.blocks.append(Block(BlockType.TOC))
            return
        chat = parse_chat_line(stripped)
        if chat is not None:
            self.blocks.append(chat)
            return
        self.blocks.append(Block(BlockType.PARAGRAPH, stripped))

    def _visit_block_code(self, token: Token) -> None:
        info = (token.get("attrs") or {}).get("info") or ""
        language, show_line_numbers = parse_fence_info(info)
        content = token.get("raw", "").rstrip("\n")
        if language.lower() in DIAGRAM_LANGUAGES:
            self.blocks.append(Block(BlockType.MERMAID, content, metadata={"language": language.lower()}))
            return
        self.blocks.append(
            Block(
                BlockType.CODE_BLOCK,
                content,
                metadata={"language": language, "show_line_numbers": show_line_numbers},
            )
        )

    def _visit_block_quote(self, token: Token) -> None:
        children = token.get("children") or []
        texts = [_block_text(child).strip() for child in children]
        kind = None
        if children and children[0].get("type") == "paragraph":
            kind, texts[0] = split_callout_tag(texts[0])
        content = "\n\n".join(text.strip() for text in texts if text.strip())
        block_type = kind.block_type if kind else BlockType.QUOTE_BLOCK
        self.blocks.append(Block(block_type, content))

    def _visit_list(self, token: Token, depth: int = 0) -> None:
        attrs = token.get("attrs") or {}
        ordered = bool(attrs.get("ordered"))
        number = int(attrs.get("start") or 1)
        block_type = BlockType.NUMBERED_LIST if ordered else BlockType.BULLET_LIST
        for item in token.get("children") or []:
            if item.get("type") != "list_item":
                continue
            nested: list[Token] = []
            texts: list[str] = []
            for child in item.get("children") or []:
                if child.get("type") == "list":
                    nested.append(child)
                else:
                    texts.append(_block_text(child).strip())
            extra = {"number": number} if ordered else {}
            self.blocks.append(list_item_block(block_type, "\n".join(texts), depth, **extra))
            number += 1
            for child in nested:
                self._visit_list(child, depth + 1)

    def _visit_table(self, token: Token) -> None:
        rows: list[list[str]] = []
        for section in token.get("children") or []:
            if section.get("type") == "table_head":
                rows.append([inline_markdown(cell.get("children") or []).strip() for cell in section["children"]])
            elif section.get("type") == "table_body":
                for row in section.get("children") or []:
                    rows.append([inline_markdown(cell.get("children") or []).strip() for cell in row["children"]])
        if rows:
            self.blocks.append(Block(BlockType.TABLE, table_rows=rows))

    def _visit_thematic_break(self, token: Token) -> None:
        self.blocks.append(Block(BlockType.HORIZONTAL_RULE))


def parse_markdown_ast(text: str) -> list[Block]:
    """Parse ``text`` through mistune's AST renderer into blocks."""
    tokens = _create_markdown()(text)
    builder = _AstBlockBuilder()
    for token in tokens:
        builder.visit(token)
    return builder.blocks
