"""End-to-end Markdown to DOCX conversion."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Mapping

from .exceptions import ConversionError, ParseError
from .frontmatter import extract_front_matter
from .generation import LayoutConfig, generate
from .generation.config import ImageSource
from .parser import parse, parse_markdown_ast
from .types import Block, DocumentMetadata, ParseResult
from .utils import PathLike, ensure_output_directory, safe_filename, time_block, to_path
from .validators import validate_conversion, validate_markdown

LOGGER = logging.getLogger(__name__)

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff", ".webp"}
PARSERS = ("lines", "ast")


@dataclass(frozen=True)
class ConversionOptions:
    """Options controlling Markdown to DOCX conversion."""

    page_size: str = "tech-book"
    width_cm: float | None = None
    height_cm: float | None = None
    show_line_numbers: bool = True
    image_dir: Path | None = None
    clean_text: bool = False
    parser: str = "lines"
    validate: bool = True


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a conversion: where it went and what was parsed."""

    output_path: Path | None
    blocks: tuple[Block, ...]
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    warnings: tuple[str, ...] = ()
    size: int = 0


def load_image_registry(image_dir: PathLike | None) -> Dict[str, bytes]:
    """Read every image under ``image_dir`` keyed by relative path and file name."""
    if image_dir is None:
        return {}
    root = to_path(image_dir)
    if not root.is_dir():
        raise ConversionError(f"Image directory does not exist: {root}")
    registry: Dict[str, bytes] = {}
    for path in sorted(root.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in IMAGE_SUFFIXES:
            continue
        data = path.read_bytes()
        registry[path.relative_to(root).as_posix()] = data
        registry.setdefault(path.name, data)
    LOGGER.debug("Loaded %d images from %s", len(registry), root)
    return registry


def parse_markdown(text: str, parser: str = "lines") -> ParseResult:
    """Parse with the line-oriented parser or the mistune AST variant."""
    if parser == "lines":
        return parse(text)
    if parser == "ast":
        front = extract_front_matter(text)
        return ParseResult(
            blocks=parse_markdown_ast(front.body),
            metadata=front.metadata,
            warnings=tuple(front.warnings),
        )
    raise ParseError(f"Unknown parser '{parser}'; expected one of {', '.join(PARSERS)}")


def build_config(
    options: ConversionOptions,
    metadata: DocumentMetadata,
    image_registry: Mapping[str, ImageSource] | None = None,
) -> LayoutConfig:
    overrides = {
        "show_line_numbers": options.show_line_numbers,
        "image_registry": dict(image_registry or {}),
        "metadata": metadata,
        "clean_text": options.clean_text,
    }
    config = LayoutConfig.for_page(options.page_size, **overrides)
    geometry = {
        name: value
        for name, value in (("width_cm", options.width_cm), ("height_cm", options.height_cm))
        if value is not None
    }
    return replace(config, **geometry) if geometry else config


def convert_text(
    text: str,
    options: ConversionOptions | None = None,
    *,
    image_registry: Mapping[str, ImageSource] | None = None,
) -> bytes:
    """Convert Markdown text to DOCX bytes in memory."""
    options = options or ConversionOptions()
    result = parse_markdown(text, options.parser)
    registry = dict(load_image_registry(options.image_dir))
    registry.update(image_registry or {})
    return generate(result.blocks, build_config(options, result.metadata, registry))


def convert_markdown_to_docx(
    input_path: PathLike,
    output_path: PathLike | None = None,
    options: ConversionOptions | None = None,
    **overrides,
) -> ConversionResult:
    """Convert a Markdown manuscript to a DOCX file.

    When ``output_path`` is omitted the file is written next to the input and
    named after the front-matter title.
    """
    if options is None:
        options = ConversionOptions(**overrides)
    elif overrides:
        raise TypeError("Pass either a ConversionOptions instance or keyword overrides, not both")

    source = to_path(input_path)
    LOGGER.info("Starting conversion of %s", source)
    text = validate_markdown(source)

    with time_block(LOGGER, "Markdown parsing"):
        parsed = parse_markdown(text, options.parser)

    if output_path is None:
        destination = source.with_name(f"{safe_filename(parsed.metadata.title, default=source.stem)}.docx")
    else:
        destination = to_path(output_path)
    ensure_output_directory(destination)

    config = build_config(options, parsed.metadata, load_image_registry(options.image_dir))
    try:
        with time_block(LOGGER, "DOCX generation"):
            payload = generate(parsed.blocks, config)
        destination.write_bytes(payload)
    except OSError as exc:
        raise ConversionError(f"Unable to write {destination}") from exc

    if options.validate:
        validate_conversion(destination, parsed.metadata)
    LOGGER.info("Conversion completed: %s", destination)
    return ConversionResult(
        output_path=destination,
        blocks=tuple(parsed.blocks),
        metadata=parsed.metadata,
        warnings=tuple(parsed.warnings),
        size=len(payload),
    )
