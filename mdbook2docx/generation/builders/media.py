"""Image and diagram builders."""

from __future__ import annotations

import io
import logging

from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Emu

from ...exceptions import GenerationError, ImageError
from ...rendering import CairoRasterizer, MermaidCliRenderer
from ...types import Block, BlockType
from ...units import px_to_emu
from ..images import FULL_PAGE_FLAG, decode_image, image_limits, resolve_image, scale_to_fit
from ..layout import apply_spacing, remove_paragraph
from ..registry import BuildContext, register_builder
from ..runs import add_text_run
from ..theme import COLORS, FONT_SIZES, SPACING

LOGGER = logging.getLogger(__name__)

DIAGRAM_ERROR_TEXT = "[Mermaid Chart Error]"
DIAGRAM_ERROR_HINT = " (Syntax might be invalid)"


def _add_picture(ctx: BuildContext, data: bytes, width_px: float, height_px: float, spacing):
    paragraph = ctx.document.add_paragraph()
    try:
        paragraph.add_run().add_picture(
            io.BytesIO(data),
            width=Emu(px_to_emu(width_px)),
            height=Emu(px_to_emu(height_px)),
        )
    except Exception as exc:
        remove_paragraph(paragraph)
        raise GenerationError(f"Picture could not be embedded: {exc}") from exc
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
    apply_spacing(paragraph, spacing)
    return paragraph


@register_builder(BlockType.IMAGE)
def build_image(block: Block, ctx: BuildContext) -> list:
    src = str(block.metadata.get("src") or "")
    alt = str(block.metadata.get("alt") or "")
    config = ctx.config

    source = resolve_image(src, config.image_registry)
    if source is None:
        LOGGER.info("Image %s is not in the registry; emitting a placeholder", src)
        paragraph = ctx.document.add_paragraph(f"[Image: {alt or src}]")
        apply_spacing(paragraph, SPACING.PARAGRAPH)
        return [paragraph]

    try:
        image = decode_image(source)
    except ImageError as exc:
        LOGGER.warning("Dropping image %s: %s", src, exc)
        return []

    max_width, max_height = image_limits(
        alt,
        config.max_image_width_cm,
        config.max_image_height_cm,
        config.full_page_image_height_cm,
    )
    width, height = scale_to_fit(image.width, image.height, max_width, max_height)
    picture = _add_picture(ctx, image.data, width, height, SPACING.IMAGE)

    number = ctx.figures.next()
    caption_text = alt.replace(FULL_PAGE_FLAG, "").strip()
    caption = ctx.document.add_paragraph()
    add_text_run(caption, f"圖 {number} {caption_text}".rstrip(), bold=True, size=FONT_SIZES.caption)
    caption.alignment = WD_ALIGN_PARAGRAPH.CENTER
    apply_spacing(caption, SPACING.CAPTION)
    return [picture, caption]


def _diagram_error(ctx: BuildContext) -> list:
    paragraph = ctx.document.add_paragraph()
    add_text_run(paragraph, DIAGRAM_ERROR_TEXT, bold=True, color=COLORS.error_text)
    add_text_run(paragraph, DIAGRAM_ERROR_HINT, size=FONT_SIZES.hint, italic=True, color=COLORS.hint_text)
    apply_spacing(paragraph, SPACING.DIAGRAM_ERROR)
    return [paragraph]


@register_builder(BlockType.MERMAID)
def build_diagram(block: Block, ctx: BuildContext) -> list:
    config = ctx.config
    renderer = config.diagram_renderer or MermaidCliRenderer()
    rasterizer = config.rasterizer or CairoRasterizer()
    try:
        svg = renderer.render(block.content)
        raster = rasterizer.rasterize(svg, scale=config.diagram_scale, background="white")
        width, height = scale_to_fit(raster.width, raster.height, config.diagram_max_width_px, float("inf"))
        return [_add_picture(ctx, raster.data, max(1, round(width)), max(1, round(height)), SPACING.DIAGRAM)]
    except Exception as exc:
        LOGGER.warning("Diagram rendering failed: %s", exc)
        return _diagram_error(ctx)
