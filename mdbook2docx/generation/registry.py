"""Builder registry and per-build state shared by the block builders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable

from docx.document import Document as DocxDocument

from ..types import Block, BlockType
from .config import FigureCounter, LayoutConfig

__all__ = [
    "BuildContext",
    "Builder",
    "BuilderRegistry",
    "default_builders",
    "register_builder",
]


@dataclass
class BuildContext:
    """Mutable state owned by one generation call."""

    document: DocxDocument
    config: LayoutConfig
    figures: FigureCounter = field(default_factory=FigureCounter)
    previous: Block | None = None
    list_numbering: Dict[BlockType, int] = field(default_factory=dict)

    def continues_list(self, block: Block) -> bool:
        """True when ``block`` extends the list group of the previous block."""
        return self.previous is not None and self.previous.type is block.type


Builder = Callable[[Block, BuildContext], "list[Any]"]


class BuilderRegistry:
    """Maps each block type to the builder that renders it."""

    def __init__(self) -> None:
        self._builders: Dict[BlockType, Builder] = {}

    def register(self, block_type: BlockType, builder: Builder) -> None:
        if block_type in self._builders:
            raise ValueError(f"Builder for '{block_type.value}' is already registered")
        self._builders[block_type] = builder

    def replace(self, block_type: BlockType, builder: Builder) -> Builder | None:
        previous = self._builders.get(block_type)
        self._builders[block_type] = builder
        return previous

    def get(self, block_type: BlockType) -> Builder | None:
        return self._builders.get(block_type)

    def names(self) -> Iterable[str]:
        return sorted(block_type.value for block_type in self._builders)

    def missing_builders(self) -> set[BlockType]:
        """Block types that have no registered builder."""
        return set(BlockType) - set(self._builders)

    def copy(self) -> "BuilderRegistry":
        clone = BuilderRegistry()
        clone._builders = dict(self._builders)
        return clone

    def __contains__(self, block_type: object) -> bool:
        return block_type in self._builders


default_builders = BuilderRegistry()


def register_builder(*block_types: BlockType, target: BuilderRegistry | None = None):
    def decorator(func: Builder) -> Builder:
        for block_type in block_types:
            (target if target is not None else default_builders).register(block_type, func)
        return func

    return decorator
