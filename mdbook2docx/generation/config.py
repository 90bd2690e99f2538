"""Layout configuration for a single generation call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping, Union

from ..types import DocumentMetadata
from ..units import cm_to_twips
from .theme import LAYOUT, PAGE_SIZES, PageSize

if TYPE_CHECKING:
    from ..rendering import DiagramRenderer, Rasterizer

__all__ = ["ImageSource", "LayoutConfig", "FigureCounter"]

ImageSource = Union[bytes, str]


@dataclass
class FigureCounter:
    """Running figure number; only ever increases within one build."""

    value: int = 0

    def next(self) -> int:
        self.value += 1
        return self.value


@dataclass
class LayoutConfig:
    """Page geometry and collaborators used by the block builders.

    ``image_registry`` maps the opaque ids referenced from ``![alt](id)`` to
    raw image bytes or ``data:image/...;base64,`` URIs. Sources that are not
    registered are treated as external references and never fetched.
    """

    width_cm: float = PAGE_SIZES["tech-book"].width_cm
    height_cm: float = PAGE_SIZES["tech-book"].height_cm
    margin_twips: int = LAYOUT.MARGIN
    show_line_numbers: bool = True
    image_registry: Mapping[str, ImageSource] = field(default_factory=dict)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    max_image_width_cm: float = 13.0
    max_image_height_cm: float = 20.0
    full_page_image_height_cm: float = 18.0
    diagram_max_width_px: float = 550.0
    diagram_scale: float = 3.0
    diagram_renderer: "DiagramRenderer | None" = None
    rasterizer: "Rasterizer | None" = None
    clean_text: bool = False

    def __post_init__(self) -> None:
        if self.width_cm <= 0 or self.height_cm <= 0:
            raise ValueError("Page width and height must be positive")
        if self.margin_twips < 0:
            raise ValueError("Page margin must not be negative")

    @classmethod
    def for_page(cls, page: PageSize | str, **overrides) -> "LayoutConfig":
        """Build a config from a named page preset such as ``"a4"``."""
        if isinstance(page, str):
            try:
                page = PAGE_SIZES[page.lower()]
            except KeyError as exc:
                raise ValueError(f"Unknown page size: {page}") from exc
        return cls(width_cm=page.width_cm, height_cm=page.height_cm, **overrides)

    @property
    def page_width_twips(self) -> int:
        return cm_to_twips(self.width_cm)

    @property
    def page_height_twips(self) -> int:
        return cm_to_twips(self.height_cm)

    @property
    def content_width_twips(self) -> int:
        return max(self.page_width_twips - 2 * self.margin_twips, 0)
