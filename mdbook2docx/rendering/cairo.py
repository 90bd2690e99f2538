"""SVG rasterizer backed by cairosvg."""

from __future__ import annotations

import io
import logging

from PIL import Image

from ..exceptions import RenderingError
from .base import RasterImage, Rasterizer

LOGGER = logging.getLogger(__name__)


class CairoRasterizer(Rasterizer):
    """Rasterize SVG markup to PNG with cairosvg."""

    def rasterize(self, svg: str, *, scale: float = 1.0, background: str = "white") -> RasterImage:
        if scale <= 0:
            raise RenderingError("Rasterization scale must be positive")
        try:
            import cairosvg

            data = cairosvg.svg2png(
                bytestring=svg.encode("utf-8"),
                scale=scale,
                background_color=background,
            )
        except Exception as exc:  # pragma: no cover - library exception types vary
            raise RenderingError(f"SVG rasterization failed: {exc}") from exc

        try:
            with Image.open(io.BytesIO(data)) as image:
                pixel_width, pixel_height = image.size
        except Exception as exc:  # pragma: no cover
            raise RenderingError("Rasterizer produced an unreadable PNG") from exc

        LOGGER.debug("Rasterized SVG to %dx%d px at scale %.1f", pixel_width, pixel_height, scale)
        return RasterImage(
            data=data,
            width=max(int(round(pixel_width / scale)), 1),
            height=max(int(round(pixel_height / scale)), 1),
        )
