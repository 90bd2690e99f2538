"""Publishing clean-up for mixed CJK and Latin prose."""

from __future__ import annotations

import re

__all__ = ["clean_text_for_publishing", "has_cjk"]

CJK = "一-龥"

_CJK_CHAR = re.compile(f"[{CJK}]")
_CJK_THEN_LATIN = re.compile(f"([{CJK}])\\s+([a-zA-Z0-9])")
_LATIN_THEN_CJK = re.compile(f"([a-zA-Z0-9])\\s+([{CJK}])")
_COMMA = re.compile(f"([{CJK}a-zA-Z]),\\s*")
_FULL_WIDTH = (
    (re.compile(f"([{CJK}]);\\s*"), "；"),
    (re.compile(f"([{CJK}])!\\s*"), "！"),
    (re.compile(f"([{CJK}])\\?\\s*"), "？"),
    (re.compile(f"([{CJK}]):\\s*"), "："),
)


def has_cjk(text: str) -> bool:
    return bool(_CJK_CHAR.search(text))


def clean_text_for_publishing(text: str) -> str:
    """Tighten spacing and punctuation for CJK manuscripts.

    Spaces between CJK characters and Latin letters or digits are removed.
    When the text contains CJK characters, ASCII ``, ; ! ? :`` following a
    CJK character become their full-width forms (commas also after Latin
    letters, never after digits so ``1,000`` survives). URLs and strings
    shorter than two characters are returned unchanged.
    """
    if not text or text.startswith("http") or len(text) < 2:
        return text

    result = _CJK_THEN_LATIN.sub(r"\1\2", text)
    result = _LATIN_THEN_CJK.sub(r"\1\2", result)

    if not has_cjk(result):
        return result

    result = _COMMA.sub("\\1，", result)
    for pattern, replacement in _FULL_WIDTH:
        result = pattern.sub(f"\\1{replacement}", result)
    return result
