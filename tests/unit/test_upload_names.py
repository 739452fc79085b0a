"""Tests for normalizing client-supplied upload filenames."""

import pytest

from src.teamhub.services.file_service import MAX_NAME_LENGTH, UNTITLED, clean_upload_name

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("  report.pdf  ", "report.pdf"),
        ("\t현장사진.jpg\n", "현장사진.jpg"),
        ("   ", UNTITLED),
        ("", UNTITLED),
        (None, UNTITLED),
    ],
)
def test_names_are_trimmed_and_never_blank(filename, expected):
    assert clean_upload_name(filename) == expected


def test_long_name_keeps_extension():
    name = clean_upload_name("가" * 400 + ".xlsx")

    assert len(name) == MAX_NAME_LENGTH
    assert name.endswith(".xlsx")


def test_long_name_without_usable_extension_is_cut():
    assert clean_upload_name("a" * 300) == "a" * MAX_NAME_LENGTH
    assert clean_upload_name("a" * 100 + "." + "b" * 200) == ("a" * 100 + "." + "b" * 200)[
        :MAX_NAME_LENGTH
    ]


def test_name_at_limit_is_untouched():
    name = "a" * (MAX_NAME_LENGTH - 4) + ".pdf"
    assert clean_upload_name(name) == name
