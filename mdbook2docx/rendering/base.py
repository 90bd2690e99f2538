"""Collaborator protocols for diagram rendering and rasterization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class RasterImage:
    """PNG bytes together with the unscaled (1x) pixel size of the drawing."""

    data: bytes
    width: int
    height: int


class DiagramRenderer(Protocol):
    """Turns diagram source text into SVG markup."""

    def render(self, source: str) -> str:
        """Return SVG markup for ``source`` or raise ``RenderingError``."""


class Rasterizer(Protocol):
    """Turns SVG markup into a PNG bitmap."""

    def rasterize(self, svg: str, *, scale: float = 1.0, background: str = "white") -> RasterImage:
        """Rasterize ``svg`` at ``scale`` onto an opaque ``background``."""
