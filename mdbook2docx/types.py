"""Intermediate representation shared by the parser and the DOCX generator."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Sequence

__all__ = [
    "BlockType",
    "CalloutKind",
    "ChatAlignment",
    "InlineStyle",
    "InlineSegment",
    "SourcePosition",
    "Block",
    "DocumentMetadata",
    "ParseResult",
]


class BlockType(str, Enum):
    """Closed set of block kinds produced by the parser."""

    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    PARAGRAPH = "paragraph"
    CODE_BLOCK = "code_block"
    BULLET_LIST = "bullet_list"
    NUMBERED_LIST = "numbered_list"
    TABLE = "table"
    HORIZONTAL_RULE = "horizontal_rule"
    CALLOUT_TIP = "callout_tip"
    CALLOUT_NOTE = "callout_note"
    CALLOUT_WARNING = "callout_warning"
    QUOTE_BLOCK = "quote_block"
    CHAT_USER = "chat_user"
    CHAT_AI = "chat_ai"
    CHAT_CUSTOM = "chat_custom"
    TOC = "toc"
    MERMAID = "mermaid"
    IMAGE = "image"

    @property
    def heading_level(self) -> int | None:
        return _HEADING_LEVELS.get(self)

    @property
    def is_callout(self) -> bool:
        return self in _CALLOUT_KINDS

    @property
    def is_chat(self) -> bool:
        return self in {BlockType.CHAT_USER, BlockType.CHAT_AI, BlockType.CHAT_CUSTOM}

    @property
    def is_list(self) -> bool:
        return self in {BlockType.BULLET_LIST, BlockType.NUMBERED_LIST}

    @classmethod
    def heading(cls, level: int) -> "BlockType":
        for block_type, block_level in _HEADING_LEVELS.items():
            if block_level == level:
                return block_type
        raise ValueError(f"Unsupported heading level: {level}")


class CalloutKind(str, Enum):
    TIP = "tip"
    NOTE = "note"
    WARNING = "warning"

    @property
    def block_type(self) -> BlockType:
        return {
            CalloutKind.TIP: BlockType.CALLOUT_TIP,
            CalloutKind.NOTE: BlockType.CALLOUT_NOTE,
            CalloutKind.WARNING: BlockType.CALLOUT_WARNING,
        }[self]


class ChatAlignment(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


_HEADING_LEVELS = {
    BlockType.HEADING_1: 1,
    BlockType.HEADING_2: 2,
    BlockType.HEADING_3: 3,
}

_CALLOUT_KINDS = {
    BlockType.CALLOUT_TIP: CalloutKind.TIP,
    BlockType.CALLOUT_NOTE: CalloutKind.NOTE,
    BlockType.CALLOUT_WARNING: CalloutKind.WARNING,
}


class InlineStyle(str, Enum):
    """Styles a run of inline text can carry."""

    TEXT = "text"
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    CODE = "code"
    UI_BUTTON = "ui_button"
    SHORTCUT = "shortcut"
    TITLE = "title"


@dataclass(frozen=True, slots=True)
class InlineSegment:
    """Styled sub-run of a block's content."""

    kind: InlineStyle
    text: str


@dataclass(frozen=True, slots=True)
class SourcePosition:
    """Location of a block in the body text.

    ``line`` is the 0-based index of the first source line; ``start`` and
    ``end`` are character offsets (end exclusive).
    """

    line: int
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Block:
    """One structurally typed unit of document content."""

    type: BlockType
    content: str = ""
    table_rows: tuple[tuple[str, ...], ...] | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    source_position: SourcePosition | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if self.table_rows is not None:
            rows = tuple(tuple(str(cell) for cell in row) for row in self.table_rows)
            object.__setattr__(self, "table_rows", rows)

    @property
    def language(self) -> str:
        return str(self.metadata.get("language") or "")

    @property
    def show_line_numbers(self) -> bool | None:
        return self.metadata.get("show_line_numbers")

    @property
    def nesting_level(self) -> int:
        return int(self.metadata.get("nesting_level") or 0)

    @property
    def role(self) -> str | None:
        return self.metadata.get("role")

    @property
    def alignment(self) -> ChatAlignment | None:
        value = self.metadata.get("alignment")
        return ChatAlignment(value) if value else None

    def with_position(self, position: SourcePosition | None) -> "Block":
        return replace(self, source_position=position)


class DocumentMetadata(Mapping[str, Any]):
    """Read-only key/value metadata parsed from a front-matter block."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data = MappingProxyType(dict(data or {}))

    @classmethod
    def empty(cls) -> "DocumentMetadata":
        return cls()

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"DocumentMetadata({dict(self._data)!r})"

    def _text(self, key: str) -> str | None:
        value = self._data.get(key)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return ", ".join(str(item) for item in value)
        return str(value)

    @property
    def title(self) -> str | None:
        return self._text("title")

    @property
    def author(self) -> str | None:
        return self._text("author")

    @property
    def subject(self) -> str | None:
        return self._text("subject")

    @property
    def keywords(self) -> str | None:
        return self._text("keywords")


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of :func:`mdbook2docx.parser.parse`."""

    blocks: Sequence[Block]
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    warnings: Sequence[str] = ()
