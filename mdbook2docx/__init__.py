"""Top-level package for mdbook2docx.

This module exposes the public API for parsing Markdown manuscripts, with
the project's custom callout, chat and diagram syntax, and rendering them to
print-ready DOCX documents.
"""
from .converter import ConversionOptions, ConversionResult, convert_markdown_to_docx, convert_text
from .frontmatter import extract_front_matter
from .generation import DocxGenerator, LayoutConfig, build_document, generate, generate_docx
from .inline import parse_inline
from .parser import parse, parse_blocks, parse_markdown_ast
from .types import Block, BlockType, DocumentMetadata, InlineSegment, InlineStyle, ParseResult

__all__ = [
    "Block",
    "BlockType",
    "ConversionOptions",
    "ConversionResult",
    "DocumentMetadata",
    "DocxGenerator",
    "InlineSegment",
    "InlineStyle",
    "LayoutConfig",
    "ParseResult",
    "build_document",
    "convert_markdown_to_docx",
    "convert_text",
    "extract_front_matter",
    "generate",
    "generate_docx",
    "parse",
    "parse_blocks",
    "parse_inline",
    "parse_markdown_ast",
]

__version__ = "0.1.0"
