from __future__ import annotations

import base64
import logging

import pytest
from docx.oxml.ns import qn

from mdbook2docx.exceptions import ImageError
from mdbook2docx.generation import LayoutConfig, build_document
from mdbook2docx.generation.builders.media import DIAGRAM_ERROR_HINT, DIAGRAM_ERROR_TEXT
from mdbook2docx.generation.images import decode_image, image_limits, resolve_image, scale_to_fit
from mdbook2docx.types import Block, BlockType
from mdbook2docx.units import EMU_PER_PX


def _image(src: str, alt: str = "") -> Block:
    return Block(BlockType.IMAGE, metadata={"alt": alt, "src": src})


def _extents(document):
    return [
        (int(extent.get("cx")), int(extent.get("cy")))
        for extent in document.element.body.iter(qn("wp:extent"))
    ]


def test_scale_to_fit_shrinks_width_then_height():
    assert scale_to_fit(1000, 500, 500, 1000) == (500, 250)
    assert scale_to_fit(100, 1000, 500, 400) == (40, 400)
    width, height = scale_to_fit(2000, 3000, 500, 600)
    assert width <= 500 and height <= 600
    assert width / height == pytest.approx(2000 / 3000)


def test_scale_to_fit_never_enlarges():
    assert scale_to_fit(40, 20, 500, 700) == (40, 20)
    assert scale_to_fit(0, 20, 500, 700) == (0.0, 0.0)


def test_full_page_flag_uses_taller_bound():
    _, regular = image_limits("diagram", 13, 20, 18)
    _, full_page = image_limits("diagram full-page", 13, 20, 18)
    assert regular == pytest.approx(20 * 37.8)
    assert full_page == pytest.approx(18 * 37.8)


def test_resolve_image():
    registry = {"pic.png": b"bytes"}
    assert resolve_image("pic.png", registry) == b"bytes"
    uri = "data:image/png;base64,AAAA"
    assert resolve_image(uri, {}) == uri
    assert resolve_image("https://example.com/a.png", registry) is None


def test_decode_image_from_bytes_and_data_uri(png_factory):
    payload = png_factory(30, 10)
    decoded = decode_image(payload)
    assert (decoded.width, decoded.height, decoded.format) == (30, 10, "PNG")
    uri = "data:image/png;base64," + base64.b64encode(payload).decode("ascii")
    assert decode_image(uri).width == 30


def test_decode_image_reencodes_unsupported_formats(png_factory):
    decoded = decode_image(png_factory(12, 8, fmt="WEBP"))
    assert decoded.format == "PNG"
    assert decoded.data.startswith(b"\x89PNG")


def test_decode_image_rejects_garbage():
    with pytest.raises(ImageError):
        decode_image(b"not an image")
    with pytest.raises(ImageError):
        decode_image(b"")


def test_registered_image_gets_picture_and_numbered_captions(png_factory):
    config = LayoutConfig(image_registry={"a.png": png_factory(40, 20), "b.png": png_factory(40, 20)})
    document = build_document([_image("a.png", "First"), _image("b.png", "Second full-page")], config)
    texts = [paragraph.text for paragraph in document.paragraphs]
    assert "圖 1 First" in texts
    assert "圖 2 Second" in texts
    assert _extents(document) == [(40 * EMU_PER_PX, 20 * EMU_PER_PX)] * 2


def test_large_image_is_scaled_to_page_bounds(png_factory):
    config = LayoutConfig(image_registry={"wide.png": png_factory(2000, 500)})
    document = build_document([_image("wide.png")], config)
    (cx, cy), = _extents(document)
    assert cx == round(13 * 37.8 * EMU_PER_PX)
    assert cy == round(13 * 37.8 / 4 * EMU_PER_PX)


def test_unregistered_image_becomes_placeholder():
    document = build_document([_image("https://example.com/x.png", "Remote")])
    assert [paragraph.text for paragraph in document.paragraphs] == ["[Image: Remote]"]
    assert _extents(document) == []


def test_undecodable_image_is_dropped(caplog):
    config = LayoutConfig(image_registry={"bad.png": b"broken"})
    blocks = [_image("bad.png", "Broken"), Block(BlockType.PARAGRAPH, "after")]
    with caplog.at_level(logging.WARNING):
        document = build_document(blocks, config)
    assert [paragraph.text for paragraph in document.paragraphs] == ["after"]
    assert "Dropping image" in caplog.text


def test_figure_numbers_skip_dropped_images(png_factory):
    config = LayoutConfig(image_registry={"bad.png": b"broken", "ok.png": png_factory()})
    document = build_document([_image("bad.png", "x"), _image("ok.png", "Kept")], config)
    assert "圖 1 Kept" in [paragraph.text for paragraph in document.paragraphs]


def test_figure_numbering_restarts_per_build(png_factory):
    config = LayoutConfig(image_registry={"a.png": png_factory()})
    for _ in range(2):
        document = build_document([_image("a.png", "Only")], config)
        assert "圖 1 Only" in [paragraph.text for paragraph in document.paragraphs]


def test_diagram_rendered_through_stubs(stub_renderer, stub_rasterizer):
    config = LayoutConfig(diagram_renderer=stub_renderer, rasterizer=stub_rasterizer)
    document = build_document([Block(BlockType.MERMAID, "graph TD\n  A-->B")], config)
    assert stub_renderer.sources == ["graph TD\n  A-->B"]
    assert stub_rasterizer.calls == [(3.0, "white")]
    (cx, cy), = _extents(document)
    assert cx == 550 * EMU_PER_PX
    assert cy == round(550 * 300 / 1200) * EMU_PER_PX


def test_small_diagram_keeps_natural_size(stub_renderer, stub_rasterizer):
    stub_rasterizer.width, stub_rasterizer.height = 200, 100
    config = LayoutConfig(diagram_renderer=stub_renderer, rasterizer=stub_rasterizer)
    document = build_document([Block(BlockType.MERMAID, "graph LR")], config)
    assert _extents(document) == [(200 * EMU_PER_PX, 100 * EMU_PER_PX)]


def test_diagram_failure_leaves_error_marker(failing_renderer, stub_rasterizer):
    config = LayoutConfig(diagram_renderer=failing_renderer, rasterizer=stub_rasterizer)
    blocks = [Block(BlockType.MERMAID, "graph ???"), Block(BlockType.PARAGRAPH, "after")]
    document = build_document(blocks, config)
    marker, after = document.paragraphs
    assert marker.runs[0].text == DIAGRAM_ERROR_TEXT
    assert marker.runs[0].bold is True
    assert str(marker.runs[0].font.color.rgb) == "FF0000"
    assert marker.runs[1].text == DIAGRAM_ERROR_HINT
    assert marker.runs[1].italic is True
    assert after.text == "after"
    assert stub_rasterizer.calls == []


def test_very_thin_diagram_keeps_a_visible_height(stub_renderer, stub_rasterizer):
    stub_rasterizer.width, stub_rasterizer.height = 5000, 2
    config = LayoutConfig(diagram_renderer=stub_renderer, rasterizer=stub_rasterizer)
    document = build_document([Block(BlockType.MERMAID, "graph LR")], config)
    assert _extents(document) == [(550 * EMU_PER_PX, EMU_PER_PX)]
