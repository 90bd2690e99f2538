from __future__ import annotations

import io
from pathlib import Path
from typing import Callable
import sys

import pytest
from PIL import Image

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mdbook2docx.exceptions import RenderingError  # noqa: E402
from mdbook2docx.rendering import RasterImage  # noqa: E402


SVG = '<svg xmlns="http://www.w3.org/2000/svg" width="400" height="200"><rect width="400" height="200"/></svg>'


@pytest.fixture()
def png_factory() -> Callable[..., bytes]:
    def _create(width: int = 40, height: int = 20, color: str = "red", fmt: str = "PNG") -> bytes:
        buffer = io.BytesIO()
        Image.new("RGB", (width, height), color).save(buffer, format=fmt)
        return buffer.getvalue()

    return _create


class StubRenderer:
    def __init__(self, svg: str = SVG) -> None:
        self.svg = svg
        self.sources: list[str] = []

    def render(self, source: str) -> str:
        self.sources.append(source)
        return self.svg


class FailingRenderer:
    def render(self, source: str) -> str:
        raise RenderingError("parse error on line 1")


class StubRasterizer:
    def __init__(self, width: int = 1200, height: int = 300) -> None:
        self.width = width
        self.height = height
        self.calls: list[tuple[float, str]] = []

    def rasterize(self, svg: str, *, scale: float = 1.0, background: str = "white") -> RasterImage:
        self.calls.append((scale, background))
        buffer = io.BytesIO()
        Image.new("RGB", (int(self.width * scale), int(self.height * scale)), background).save(buffer, format="PNG")
        return RasterImage(data=buffer.getvalue(), width=self.width, height=self.height)


@pytest.fixture()
def stub_renderer() -> StubRenderer:
    return StubRenderer()


@pytest.fixture()
def stub_rasterizer() -> StubRasterizer:
    return StubRasterizer()


@pytest.fixture()
def failing_renderer() -> FailingRenderer:
    return FailingRenderer()


@pytest.fixture()
def markdown_factory(tmp_path: Path) -> Callable[[str, str], Path]:
    def _create(text: str, filename: str = "book.md") -> Path:
        path = tmp_path / filename
        path.write_text(text, encoding="utf-8")
        return path

    return _create
