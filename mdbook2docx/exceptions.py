"""Custom exceptions for mdbook2docx."""
from __future__ import annotations


class Md2DocxError(RuntimeError):
    """Base class for all mdbook2docx exceptions."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown mdbook2docx error occurred."


class FrontMatterError(Md2DocxError):
    """Raised when a front-matter block is present but cannot be parsed."""

    @property
    def default_message(self) -> str:
        return "Malformed front-matter block."


class ParseError(Md2DocxError):
    """Raised when the block parser is misconfigured."""

    @property
    def default_message(self) -> str:
        return "Markdown could not be parsed."


class GenerationError(Md2DocxError):
    """Raised when a block cannot be rendered into the document."""

    @property
    def default_message(self) -> str:
        return "Block could not be rendered."


class RenderingError(Md2DocxError):
    """Raised when an external diagram or raster renderer fails."""

    @property
    def default_message(self) -> str:
        return "External rendering failed."


class ImageError(Md2DocxError):
    """Raised when image data cannot be decoded or measured."""

    @property
    def default_message(self) -> str:
        return "Image data could not be decoded."


class SerializationError(Md2DocxError):
    """Raised when the document container cannot be packed."""

    @property
    def default_message(self) -> str:
        return "DOCX serialization failed."


class ConversionError(Md2DocxError):
    """Raised when an end-to-end conversion fails."""

    @property
    def default_message(self) -> str:
        return "Markdown to DOCX conversion failed."
