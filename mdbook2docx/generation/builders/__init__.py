"""Block builders; importing this package registers every builder."""

from . import code, media, table, text, toc

__all__ = ["code", "media", "table", "text", "toc"]
