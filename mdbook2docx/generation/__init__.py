"""DOCX generation engine and block builders."""

from .config import FigureCounter, LayoutConfig
from .generator import DocxGenerator, build_document, generate, generate_docx
from .registry import BuildContext, BuilderRegistry, default_builders, register_builder
from .theme import PAGE_SIZES, PageSize

__all__ = [
    "BuildContext",
    "BuilderRegistry",
    "DocxGenerator",
    "FigureCounter",
    "LayoutConfig",
    "PAGE_SIZES",
    "PageSize",
    "build_document",
    "default_builders",
    "generate",
    "generate_docx",
    "register_builder",
]
