"""Diagram rendering collaborators."""

from .base import DiagramRenderer, RasterImage, Rasterizer
from .cairo import CairoRasterizer
from .mermaid_cli import MermaidCliRenderer

__all__ = [
    "CairoRasterizer",
    "DiagramRenderer",
    "MermaidCliRenderer",
    "RasterImage",
    "Rasterizer",
]
