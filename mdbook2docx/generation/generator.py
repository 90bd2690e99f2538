"""Block-to-DOCX generation engine."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterable

from docx import Document
from docx.document import Document as DocxDocument
from docx.oxml.ns import qn
from docx.shared import Pt, Twips

from ..exceptions import SerializationError
from ..types import Block, DocumentMetadata
from ..utils import PathLike, ensure_output_directory, time_block, to_path
from . import builders as _builtin_builders  # noqa: F401  (registers the default builders)
from .config import LayoutConfig
from .registry import BuildContext, BuilderRegistry, default_builders
from .theme import FONT_SIZES, FONTS

LOGGER = logging.getLogger(__name__)

# python-docx rejects longer core property values
CORE_PROPERTY_LIMIT = 255

__all__ = ["CORE_PROPERTY_LIMIT", "DocxGenerator", "build_document", "generate", "generate_docx"]


def _setup_page(document: DocxDocument, config: LayoutConfig) -> None:
    section = document.sections[0]
    section.page_width = Twips(config.page_width_twips)
    section.page_height = Twips(config.page_height_twips)
    margin = Twips(config.margin_twips)
    section.top_margin = margin
    section.bottom_margin = margin
    section.left_margin = margin
    section.right_margin = margin


def _setup_default_font(document: DocxDocument) -> None:
    normal = document.styles["Normal"]
    normal.font.name = FONTS.latin
    normal.font.size = Pt(FONT_SIZES.body / 2)
    fonts = normal.element.get_or_add_rPr().get_or_add_rFonts()
    fonts.set(qn("w:eastAsia"), FONTS.cjk)


def _apply_metadata(document: DocxDocument, metadata: DocumentMetadata) -> None:
    core = document.core_properties
    for name in ("title", "author", "subject", "keywords"):
        value = getattr(metadata, name)
        if not value:
            continue
        if len(value) > CORE_PROPERTY_LIMIT:
            LOGGER.warning(
                "Truncating %s core property from %d to %d characters",
                name,
                len(value),
                CORE_PROPERTY_LIMIT,
            )
            value = value[:CORE_PROPERTY_LIMIT]
        setattr(core, name, value)


def _describe(block: Block) -> str:
    name = str(getattr(block.type, "value", block.type))
    if block.source_position is None:
        return name
    return f"{name} (line {block.source_position.line + 1})"


class DocxGenerator:
    """Render an ordered block list into a python-docx document.

    Blocks are built strictly in source order. A block whose type has no
    builder is skipped with a warning; a builder that raises has its partial
    output removed and the block is skipped, so one bad block never aborts the
    document. Only serialisation errors propagate.
    """

    def __init__(self, registry: BuilderRegistry | None = None) -> None:
        self.builders = registry if registry is not None else default_builders

    def build(self, blocks: Iterable[Block], config: LayoutConfig | None = None) -> DocxDocument:
        config = config or LayoutConfig()
        document = Document()
        _setup_page(document, config)
        _setup_default_font(document)
        _apply_metadata(document, config.metadata)

        ctx = BuildContext(document=document, config=config)
        body = document.element.body
        for block in blocks:
            builder = self.builders.get(block.type)
            if builder is None:
                LOGGER.warning("No builder registered for %s; skipping block", _describe(block))
                ctx.previous = block
                continue
            existing = set(body)
            try:
                builder(block, ctx)
            except Exception as exc:
                LOGGER.warning("Failed to build %s, skipping it: %s", _describe(block), exc)
                for element in [child for child in body if child not in existing]:
                    body.remove(element)
            ctx.previous = block
        return document

    def render(self, blocks: Iterable[Block], config: LayoutConfig | None = None) -> bytes:
        document = self.build(blocks, config)
        buffer = io.BytesIO()
        try:
            document.save(buffer)
        except Exception as exc:  # pragma: no cover - library exception types vary
            raise SerializationError(f"Unable to serialise DOCX: {exc}") from exc
        return buffer.getvalue()


def build_document(blocks: Iterable[Block], config: LayoutConfig | None = None) -> DocxDocument:
    """Build the python-docx object graph without serialising it."""
    return DocxGenerator().build(blocks, config)


def generate(blocks: Iterable[Block], config: LayoutConfig | None = None) -> bytes:
    """Render ``blocks`` to DOCX bytes."""
    return DocxGenerator().render(blocks, config)


def generate_docx(blocks: Iterable[Block], destination: PathLike, config: LayoutConfig | None = None) -> Path:
    """Render ``blocks`` and write the DOCX file to ``destination``."""
    path = to_path(destination)
    with time_block(LOGGER, "DOCX generation"):
        payload = generate(blocks, config)
    ensure_output_directory(path)
    try:
        path.write_bytes(payload)
    except OSError as exc:
        raise SerializationError(f"Unable to write DOCX to {path}: {exc}") from exc
    LOGGER.info("Wrote %s (%d bytes)", path, len(payload))
    return path
