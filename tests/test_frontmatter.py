from __future__ import annotations

from mdbook2docx.frontmatter import extract_front_matter
from mdbook2docx.parser import parse
from mdbook2docx.types import BlockType


def test_extracts_metadata_and_strips_block():
    text = "---\ntitle: My Book\nauthor: Jane Doe\n---\n# Chapter 1\n"
    result = extract_front_matter(text)
    assert result.has_front_matter
    assert result.metadata.title == "My Book"
    assert result.metadata.author == "Jane Doe"
    assert result.body == "# Chapter 1\n"
    assert result.warnings == []


def test_text_without_front_matter_is_unchanged():
    text = "# Title\n\n---\nnot: metadata\n---\n"
    result = extract_front_matter(text)
    assert not result.has_front_matter
    assert len(result.metadata) == 0
    assert result.body == text


def test_leading_blank_line_disables_front_matter():
    text = "\n---\ntitle: x\n---\nbody"
    assert extract_front_matter(text).body == text


def test_unclosed_delimiter_is_not_front_matter():
    text = "---\ntitle: x\nbody without closing"
    result = extract_front_matter(text)
    assert not result.has_front_matter
    assert result.body == text


def test_malformed_yaml_yields_empty_metadata_and_warning(caplog):
    text = "---\ntitle: [unclosed\n---\nBody text"
    with caplog.at_level("WARNING"):
        result = extract_front_matter(text)
    assert result.has_front_matter
    assert len(result.metadata) == 0
    assert result.body == "Body text"
    assert result.warnings
    assert "malformed front matter" in caplog.text


def test_impossible_date_is_treated_as_malformed():
    result = extract_front_matter("---\ndate: 2024-13-45\n---\n# Title\n")
    assert result.has_front_matter
    assert len(result.metadata) == 0
    assert result.body == "# Title\n"
    assert result.warnings


def test_parse_survives_impossible_date():
    result = parse("---\ndate: 2024-13-45\ntitle: ok\n---\n# Title\n")
    assert [block.type for block in result.blocks] == [BlockType.HEADING_1]
    assert result.metadata.title is None
    assert result.warnings


def test_non_mapping_yaml_is_rejected():
    result = extract_front_matter("---\n- a\n- b\n---\nBody")
    assert len(result.metadata) == 0
    assert result.body == "Body"
    assert "mapping" in result.warnings[0]


def test_values_are_normalised():
    text = "---\ndate: 2025-01-31\nkeywords: [python, docx]\nextra:\n  nested: 1\n---\n"
    result = extract_front_matter(text)
    assert result.metadata["date"] == "2025-01-31"
    assert result.metadata["keywords"] == ("python", "docx")
    assert result.metadata.keywords == "python, docx"
    assert "extra" not in result.metadata
    assert any("extra" in warning for warning in result.warnings)


def test_empty_front_matter_block():
    result = extract_front_matter("---\n---\nBody")
    assert result.has_front_matter
    assert len(result.metadata) == 0
    assert result.body == "Body"


def test_crlf_delimiters_are_accepted():
    result = extract_front_matter("---\r\ntitle: Windows\r\n---\r\nBody")
    assert result.metadata.title == "Windows"
