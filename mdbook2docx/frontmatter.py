"""Front-matter extraction for Markdown manuscripts."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List

import yaml

from .exceptions import FrontMatterError
from .types import DocumentMetadata

LOGGER = logging.getLogger(__name__)

DELIMITER = re.compile(r"^---[ \t\r]*$")

_SCALARS = (str, int, float, bool)


@dataclass(frozen=True)
class FrontMatterResult:
    """Metadata split off the top of a document plus the remaining body."""

    metadata: DocumentMetadata
    body: str
    has_front_matter: bool = False
    warnings: List[str] = field(default_factory=list)


def _normalise_value(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, _SCALARS) or value is None:
        return value
    if isinstance(value, (list, tuple)) and all(isinstance(item, _SCALARS) for item in value):
        return tuple(value)
    raise TypeError(type(value).__name__)


def _load_mapping(raw: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(raw)
    except (yaml.YAMLError, ValueError, TypeError) as exc:
        # impossible timestamps such as 2024-13-45 raise ValueError from the constructor
        raise FrontMatterError(f"Invalid YAML front matter: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )
    return data


def extract_front_matter(text: str) -> FrontMatterResult:
    """Split an optional ``---`` delimited YAML header from ``text``.

    The opening delimiter must be the very first line. A structurally present
    block whose interior is not a YAML mapping is still stripped, but yields
    empty metadata and a warning.
    """
    lines = text.split("\n")
    if not lines or not DELIMITER.match(lines[0]):
        return FrontMatterResult(metadata=DocumentMetadata.empty(), body=text)

    closing = next(
        (index for index in range(1, len(lines)) if DELIMITER.match(lines[index])),
        None,
    )
    if closing is None:
        return FrontMatterResult(metadata=DocumentMetadata.empty(), body=text)

    raw = "\n".join(lines[1:closing])
    body = "\n".join(lines[closing + 1:])
    warnings: List[str] = []

    try:
        data = _load_mapping(raw)
    except FrontMatterError as exc:
        LOGGER.warning("Ignoring malformed front matter: %s", exc)
        warnings.append(str(exc))
        return FrontMatterResult(
            metadata=DocumentMetadata.empty(),
            body=body,
            has_front_matter=True,
            warnings=warnings,
        )

    cleaned: Dict[str, Any] = {}
    for key, value in data.items():
        try:
            cleaned[str(key)] = _normalise_value(value)
        except TypeError as exc:
            message = f"Dropping front-matter key {key!r}: unsupported value type {exc}"
            LOGGER.warning("%s", message)
            warnings.append(message)

    return FrontMatterResult(
        metadata=DocumentMetadata(cleaned),
        body=body,
        has_front_matter=True,
        warnings=warnings,
    )
