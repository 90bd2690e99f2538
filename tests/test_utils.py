from __future__ import annotations

import logging

import pytest

from mdbook2docx.exceptions import ConversionError, ImageError, Md2DocxError
from mdbook2docx.units import cm_to_px, cm_to_twips, px_to_emu
from mdbook2docx.utils import ensure_output_directory, safe_filename, time_block, to_path


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("My Book", "My Book"),
        ("  padded  ", "padded"),
        ('a\\b/c:d*e?f"g<h>i|j', "a_b_c_d_e_f_g_h_i_j"),
        ("", "Professional_Manuscript"),
        (None, "Professional_Manuscript"),
    ],
)
def test_safe_filename(title, expected):
    assert safe_filename(title) == expected


def test_safe_filename_caps_length():
    assert safe_filename("x" * 200) == "x" * 120
    assert safe_filename("a" * 119 + " tail") == "a" * 119


def test_safe_filename_custom_default():
    assert safe_filename("   ", default="draft") == "draft"


def test_to_path_and_output_directory(tmp_path):
    path = to_path(tmp_path / "a" / "b" / "file.docx")
    ensure_output_directory(path)
    assert path.parent.is_dir()
    assert path.is_absolute()


def test_time_block_logs_duration(caplog):
    logger = logging.getLogger("mdbook2docx.tests")
    with caplog.at_level(logging.INFO, logger="mdbook2docx.tests"):
        with time_block(logger, "work"):
            pass
    assert "work completed in" in caplog.text


def test_unit_conversions():
    assert cm_to_twips(1) == 567
    assert cm_to_twips(2.54) == 1440
    assert px_to_emu(96) == 914400
    assert cm_to_px(10) == pytest.approx(378)


def test_exceptions_carry_default_messages():
    assert str(ImageError()) == "Image data could not be decoded."
    error = ConversionError("disk full")
    assert error.message == "disk full"
    assert isinstance(error, Md2DocxError)
    assert isinstance(error, RuntimeError)
