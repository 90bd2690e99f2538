from __future__ import annotations

import subprocess
from pathlib import Path
from unittest import mock

import pytest

from mdbook2docx.exceptions import RenderingError
from mdbook2docx.generation import LayoutConfig, build_document
from mdbook2docx.generation.builders.media import DIAGRAM_ERROR_TEXT
from mdbook2docx.rendering import CairoRasterizer, MermaidCliRenderer
from mdbook2docx.types import Block, BlockType

SVG = '<svg xmlns="http://www.w3.org/2000/svg" width="400" height="200"><rect width="400" height="200"/></svg>'


def test_missing_mmdc_raises_rendering_error():
    renderer = MermaidCliRenderer(executable="mmdc-does-not-exist")
    with mock.patch("mdbook2docx.rendering.mermaid_cli.shutil.which", return_value=None):
        with pytest.raises(RenderingError, match="not found"):
            renderer.render("graph TD")


def test_mmdc_invocation_writes_source_and_reads_svg():
    renderer = MermaidCliRenderer(theme="forest")

    def fake_run(command, **kwargs):
        source = Path(command[command.index("-i") + 1])
        output = Path(command[command.index("-o") + 1])
        assert source.read_text(encoding="utf-8") == "graph TD\n  A-->B"
        output.write_text(SVG, encoding="utf-8")
        return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

    with mock.patch("mdbook2docx.rendering.mermaid_cli.shutil.which", return_value="/usr/bin/mmdc"), \
            mock.patch("mdbook2docx.rendering.mermaid_cli.subprocess.run", side_effect=fake_run) as run:
        svg = renderer.render("graph TD\n  A-->B")

    assert svg == SVG
    command = run.call_args.args[0]
    assert command[0] == "/usr/bin/mmdc"
    assert command[command.index("-t") + 1] == "forest"
    assert command[command.index("-b") + 1] == "white"


def test_mmdc_failure_surfaces_stderr():
    renderer = MermaidCliRenderer()
    failed = subprocess.CompletedProcess(["mmdc"], 1, stdout="", stderr="Parse error on line 2")
    with mock.patch("mdbook2docx.rendering.mermaid_cli.shutil.which", return_value="/usr/bin/mmdc"), \
            mock.patch("mdbook2docx.rendering.mermaid_cli.subprocess.run", return_value=failed):
        with pytest.raises(RenderingError, match="Parse error on line 2"):
            renderer.render("graph ???")


def test_mmdc_timeout_is_wrapped():
    renderer = MermaidCliRenderer(timeout=0.1)
    with mock.patch("mdbook2docx.rendering.mermaid_cli.shutil.which", return_value="/usr/bin/mmdc"), \
            mock.patch(
                "mdbook2docx.rendering.mermaid_cli.subprocess.run",
                side_effect=subprocess.TimeoutExpired("mmdc", 0.1),
            ):
        with pytest.raises(RenderingError):
            renderer.render("graph TD")


def test_default_renderer_without_mmdc_yields_error_marker(stub_rasterizer):
    config = LayoutConfig(rasterizer=stub_rasterizer)
    with mock.patch("mdbook2docx.rendering.mermaid_cli.shutil.which", return_value=None):
        document = build_document([Block(BlockType.MERMAID, "graph TD")], config)
    assert document.paragraphs[0].runs[0].text == DIAGRAM_ERROR_TEXT


def test_cairo_rasterizer_rejects_non_positive_scale():
    with pytest.raises(RenderingError):
        CairoRasterizer().rasterize(SVG, scale=0)


def test_cairo_rasterizer_reports_unscaled_size():
    try:
        raster = CairoRasterizer().rasterize(SVG, scale=2.0)
    except RenderingError as exc:  # cairosvg or libcairo unavailable
        pytest.skip(str(exc))
    assert (raster.width, raster.height) == (400, 200)
    assert raster.data.startswith(b"\x89PNG")
