"""Length unit conversions used by the DOCX builders."""

from __future__ import annotations

__all__ = [
    "TWIPS_PER_CM",
    "EMU_PER_PX",
    "PX_PER_CM",
    "cm_to_twips",
    "px_to_emu",
    "cm_to_px",
]

TWIPS_PER_CM = 567
EMU_PER_PX = 9525  # 96 dpi
PX_PER_CM = 37.8


def cm_to_twips(value: float) -> int:
    return int(round(value * TWIPS_PER_CM))


def px_to_emu(value: float) -> int:
    return int(round(value * EMU_PER_PX))


def cm_to_px(value: float) -> float:
    return value * PX_PER_CM
