"""Image resolution, decoding and fit-to-page scaling."""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from dataclasses import dataclass
from typing import Mapping

from PIL import Image, UnidentifiedImageError

from ..exceptions import ImageError
from ..units import cm_to_px
from .config import ImageSource

LOGGER = logging.getLogger(__name__)

__all__ = [
    "DecodedImage",
    "resolve_image",
    "decode_image",
    "scale_to_fit",
    "image_limits",
    "FULL_PAGE_FLAG",
]

DATA_URI = re.compile(r"^data:image/(?P<kind>[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)
FULL_PAGE_FLAG = "full-page"

# Formats python-docx can embed directly; anything else is re-encoded as PNG.
_EMBEDDABLE_FORMATS = {"PNG", "JPEG", "GIF", "BMP", "TIFF"}


@dataclass(frozen=True)
class DecodedImage:
    data: bytes
    width: int
    height: int
    format: str


def resolve_image(src: str, registry: Mapping[str, ImageSource]) -> ImageSource | None:
    """Look ``src`` up in the registry; inline data URIs resolve to themselves.

    Returns ``None`` for unregistered references (external URLs, local
    paths), which the caller renders as a text placeholder.
    """
    if src in registry:
        return registry[src]
    if DATA_URI.match(src):
        return src
    return None


def _payload(source: ImageSource) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    match = DATA_URI.match(source.strip())
    encoded = match.group("payload") if match else source.split(",", 1)[-1]
    try:
        return base64.b64decode(encoded, validate=False)
    except (binascii.Error, ValueError) as exc:
        raise ImageError("Image data is not valid base64") from exc


def decode_image(source: ImageSource) -> DecodedImage:
    """Decode registry data and measure its intrinsic pixel size."""
    data = _payload(source)
    if not data:
        raise ImageError("Image data is empty")
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            width, height = image.size
            fmt = (image.format or "").upper()
            if fmt not in _EMBEDDABLE_FORMATS:
                LOGGER.debug("Re-encoding %s image as PNG", fmt or "unknown")
                buffer = io.BytesIO()
                image.save(buffer, format="PNG")
                data, fmt = buffer.getvalue(), "PNG"
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ImageError(f"Image data could not be decoded: {exc}") from exc
    if width <= 0 or height <= 0:
        raise ImageError("Image has zero dimensions")
    return DecodedImage(data=data, width=width, height=height, format=fmt)


def image_limits(alt: str, max_width_cm: float, max_height_cm: float, full_page_height_cm: float) -> tuple[float, float]:
    """Return the pixel bounds for an image, honouring the full-page flag."""
    height_cm = full_page_height_cm if FULL_PAGE_FLAG in alt else max_height_cm
    return cm_to_px(max_width_cm), cm_to_px(height_cm)


def scale_to_fit(width: float, height: float, max_width: float, max_height: float) -> tuple[float, float]:
    """Shrink to ``max_width`` first, then to ``max_height`` if still too tall.

    Aspect ratio is preserved and images are never enlarged.
    """
    if width <= 0 or height <= 0:
        return 0.0, 0.0
    if width > max_width:
        ratio = max_width / width
        width, height = max_width, height * ratio
    if height > max_height:
        ratio = max_height / height
        width, height = width * ratio, max_height
    return width, height
