from __future__ import annotations

from click.testing import CliRunner
from docx import Document

from mdbook2docx import __version__
from mdbook2docx.cli import _format_size, _preview, cli


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_convert_command(markdown_factory, tmp_path):
    source = markdown_factory("---\ntitle: CLI Book\n---\n# Intro\n\n```py\nx = 1\n```\n")
    target = tmp_path / "book.docx"
    result = CliRunner().invoke(
        cli,
        ["convert", str(source), "-o", str(target), "--page-size", "A4", "--no-line-numbers"],
    )
    assert result.exit_code == 0, result.output
    assert "Conversion Summary" in result.output
    document = Document(str(target))
    assert document.core_properties.title == "CLI Book"
    assert document.sections[0].page_width.twips == 11907
    assert len(document.tables[0].columns) == 1


def test_convert_with_ast_parser_and_clean_text(markdown_factory, tmp_path):
    source = markdown_factory("中文 text, 好")
    target = tmp_path / "clean.docx"
    result = CliRunner().invoke(
        cli, ["convert", str(source), "-o", str(target), "--parser", "ast", "--clean-text"]
    )
    assert result.exit_code == 0, result.output
    assert Document(str(target)).paragraphs[0].text == "中文text，好"


def test_convert_reports_errors(markdown_factory, tmp_path):
    source = markdown_factory("text")
    target = tmp_path / "bad.docx"
    result = CliRunner().invoke(cli, ["convert", str(source), "-o", str(target), "--width-cm", "-3"])
    assert result.exit_code == 1
    assert "Error" in result.output
    assert not target.exists()


def test_convert_rejects_missing_input(tmp_path):
    result = CliRunner().invoke(cli, ["convert", str(tmp_path / "missing.md")])
    assert result.exit_code != 0


def test_inspect_lists_blocks(markdown_factory):
    source = markdown_factory(
        "---\ntitle: Inspect Me\n---\n# Heading\n\n| a | b |\n|---|---|\n| 1 | 2 |\n\n![Alt](pic.png)\n"
    )
    result = CliRunner().invoke(cli, ["inspect", str(source)])
    assert result.exit_code == 0, result.output
    assert "Inspect Me" in result.output
    assert "heading_1" in result.output
    assert "2 rows" in result.output
    assert "pic.png" in result.output


def test_preview_and_size_helpers():
    assert _preview("a\n  b") == "a b"
    assert _preview("x" * 100, width=10) == "x" * 9 + "…"
    assert _format_size(512) == "512 B"
    assert _format_size(2048) == "2.0 KB"
    assert _format_size(3 * 1024 * 1024) == "3.0 MB"
