from __future__ import annotations

import io

import pytest
from docx import Document

from mdbook2docx.converter import (
    ConversionOptions,
    build_config,
    convert_markdown_to_docx,
    convert_text,
    load_image_registry,
    parse_markdown,
)
from mdbook2docx.exceptions import ConversionError, ParseError
from mdbook2docx.types import BlockType, DocumentMetadata
from mdbook2docx.validators import validate_conversion, validate_markdown

BOOK = """---
title: Field Guide
author: Ann Writer
keywords: [docs, python]
---
# Getting Started

Install with `pip`.

![Logo](logo.png)
"""


def test_convert_writes_file_named_after_title(markdown_factory):
    source = markdown_factory(BOOK)
    result = convert_markdown_to_docx(source)
    assert result.output_path == source.resolve().with_name("Field Guide.docx")
    assert result.output_path.exists()
    assert result.size == result.output_path.stat().st_size
    assert result.metadata.title == "Field Guide"
    assert [block.type for block in result.blocks] == [
        BlockType.HEADING_1,
        BlockType.PARAGRAPH,
        BlockType.IMAGE,
    ]
    document = Document(str(result.output_path))
    assert document.core_properties.author == "Ann Writer"
    assert document.core_properties.keywords == "docs, python"


def test_default_name_falls_back_to_stem(markdown_factory):
    source = markdown_factory("plain body", filename="draft.md")
    result = convert_markdown_to_docx(source)
    assert result.output_path.name == "draft.docx"


def test_title_with_unsafe_characters(markdown_factory):
    source = markdown_factory("---\ntitle: 'A/B: C?'\n---\nbody")
    result = convert_markdown_to_docx(source)
    assert result.output_path.name == "A_B_ C_.docx"


def test_overlong_title_still_converts(markdown_factory):
    source = markdown_factory(f"---\ntitle: {'L' * 300}\n---\nbody")
    result = convert_markdown_to_docx(source)
    assert result.output_path.name == "L" * 120 + ".docx"
    assert Document(str(result.output_path)).core_properties.title == "L" * 255


def test_explicit_output_and_page_options(markdown_factory, tmp_path):
    source = markdown_factory("# Hi")
    target = tmp_path / "out" / "custom.docx"
    result = convert_markdown_to_docx(source, target, page_size="a5", width_cm=16.0)
    assert result.output_path == target.resolve()
    section = Document(str(target)).sections[0]
    assert section.page_width.twips == round(16.0 * 567)
    assert section.page_height.twips == round(21 * 567)


def test_options_and_overrides_are_exclusive(markdown_factory):
    with pytest.raises(TypeError):
        convert_markdown_to_docx(markdown_factory("x"), None, ConversionOptions(), page_size="a4")


def test_missing_input_raises(tmp_path):
    with pytest.raises(ConversionError):
        convert_markdown_to_docx(tmp_path / "missing.md")


def test_non_utf8_input_raises(tmp_path):
    path = tmp_path / "latin1.md"
    path.write_bytes("caf\xe9".encode("latin-1"))
    with pytest.raises(ConversionError):
        validate_markdown(path)


def test_image_directory_feeds_registry(markdown_factory, tmp_path, png_factory):
    images = tmp_path / "assets"
    (images / "nested").mkdir(parents=True)
    (images / "logo.png").write_bytes(png_factory())
    (images / "nested" / "chart.png").write_bytes(png_factory(10, 10))
    (images / "notes.txt").write_text("ignored")
    registry = load_image_registry(images)
    assert set(registry) == {"logo.png", "nested/chart.png", "chart.png"}

    source = markdown_factory(BOOK)
    result = convert_markdown_to_docx(source, options=ConversionOptions(image_dir=images))
    texts = [paragraph.text for paragraph in Document(str(result.output_path)).paragraphs]
    assert "圖 1 Logo" in texts
    assert "[Image: Logo]" not in texts


def test_missing_image_directory_raises(tmp_path):
    with pytest.raises(ConversionError):
        load_image_registry(tmp_path / "nope")


def test_convert_text_in_memory(png_factory):
    payload = convert_text("![Logo](logo.png)", image_registry={"logo.png": png_factory()})
    document = Document(io.BytesIO(payload))
    assert [paragraph.text for paragraph in document.paragraphs][-1] == "圖 1 Logo"


def test_ast_parser_option(markdown_factory):
    source = markdown_factory("---\ntitle: T\n---\n- a\n  - b\n")
    result = convert_markdown_to_docx(source, parser="ast")
    assert [block.nesting_level for block in result.blocks] == [0, 1]
    assert result.metadata.title == "T"


def test_unknown_parser_is_rejected():
    with pytest.raises(ParseError):
        parse_markdown("text", "html")


def test_build_config_applies_options():
    options = ConversionOptions(page_size="b5", height_cm=30.0, show_line_numbers=False, clean_text=True)
    config = build_config(options, DocumentMetadata({"title": "x"}))
    assert config.width_cm == 17.6
    assert config.height_cm == 30.0
    assert config.show_line_numbers is False
    assert config.clean_text is True
    assert config.metadata.title == "x"


def test_front_matter_warnings_are_reported(markdown_factory):
    result = convert_markdown_to_docx(markdown_factory("---\ntitle: [oops\n---\nbody", filename="w.md"))
    assert result.warnings
    assert result.output_path.name == "w.docx"


def test_validate_conversion_detects_metadata_mismatch(markdown_factory):
    result = convert_markdown_to_docx(markdown_factory(BOOK))
    validate_conversion(result.output_path, result.metadata)
    with pytest.raises(ConversionError):
        validate_conversion(result.output_path, DocumentMetadata({"title": "Other"}))
