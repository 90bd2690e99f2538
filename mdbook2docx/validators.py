"""Validation routines for mdbook2docx."""
from __future__ import annotations

import logging
from pathlib import Path

from docx import Document

from .exceptions import ConversionError
from .generation.generator import CORE_PROPERTY_LIMIT
from .types import DocumentMetadata
from .utils import to_path

LOGGER = logging.getLogger(__name__)

METADATA_FIELDS = ("title", "author", "subject", "keywords")


def validate_markdown(input_path: str | Path) -> str:
    """Validate that the input exists and is UTF-8 text; return its contents."""
    path = to_path(input_path)
    LOGGER.debug("Validating Markdown input %s", path)
    if not path.is_file():
        raise ConversionError(f"Input file does not exist: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConversionError(f"Input is not valid UTF-8 text: {path}") from exc
    except OSError as exc:
        raise ConversionError(f"Unable to read input: {path}") from exc


def validate_conversion(output_path: str | Path, metadata: DocumentMetadata | None = None) -> None:
    """Validate that the written DOCX is readable and carries the metadata."""
    path = to_path(output_path)
    LOGGER.debug("Validating DOCX output %s", path)
    try:
        document = Document(str(path))
    except Exception as exc:  # pragma: no cover
        raise ConversionError(f"DOCX validation failed: {path}") from exc

    if not metadata:
        return
    core = document.core_properties
    for field in METADATA_FIELDS:
        expected = getattr(metadata, field)
        if expected and getattr(core, field) != expected[:CORE_PROPERTY_LIMIT]:
            raise ConversionError(f"DOCX {field} metadata mismatch")
