"""
Tests for the index file line format.
"""

import pytest

from wadutils import ManifestError, parse_line
from wadutils.manifest import format_line, read_manifest


def test_content_line():
    line = parse_line("  PLAYPAL\t     PLAYPAL.lmp\tABCDEF\n")
    assert line.name == "PLAYPAL"
    assert line.filename == "PLAYPAL.lmp"
    assert line.hash == "ABCDEF"
    assert not line.is_virtual
    assert line.is_valid()


def test_two_fields_are_enough():
    line = parse_line("A\ta.lmp")
    assert line.filename == "a.lmp"
    assert line.hash is None


def test_extra_fields_are_ignored():
    line = parse_line("A\ta.lmp\tHASH\tsomething else")
    assert (line.name, line.filename, line.hash) == ("A", "a.lmp", "HASH")


def test_single_field_is_virtual():
    line = parse_line(" S_START ")
    assert line.name == "S_START"
    assert line.is_virtual
    line.validate()


def test_empty_line_is_invalid():
    for text in ("", "   ", "\n"):
        line = parse_line(text)
        assert not line.is_valid()
        with pytest.raises(ManifestError):
            line.validate()


def test_missing_filename_is_invalid():
    line = parse_line("A\t \tHASH")
    assert not line.is_virtual
    assert not line.is_valid()
    with pytest.raises(ManifestError, match="no file name"):
        line.validate()


def test_format_line_pads_and_parses_back():
    text = format_line("A", "a.lmp", "1234")
    assert text == "       A\t       a.lmp\t1234"
    line = parse_line(text)
    assert (line.name, line.filename, line.hash) == ("A", "a.lmp", "1234")
    assert format_line("F_END") == "   F_END"


def test_read_manifest(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_manifest(tmp_path)
    (tmp_path / "!INDEX.TXT").write_text("PWAD\nA\ta\tX\n", encoding="utf-8")
    assert read_manifest(tmp_path) == ["PWAD", "A\ta\tX"]


def test_blank_name_field_keeps_columns():
    line = parse_line("        \t           _\tA9993E36")
    assert line.name == ""
    assert line.filename == "_"
    assert not line.is_valid()
    with pytest.raises(ManifestError, match="no name"):
        line.validate()


def test_trailing_tab_is_virtual():
    line = parse_line("F_END\t\n")
    assert line.name == "F_END"
    assert line.is_virtual


def test_read_manifest_ignores_bom(tmp_path):
    (tmp_path / "!INDEX.TXT").write_bytes(b"\xef\xbb\xbfIWAD\r\nA\ta\tX\r\n")
    assert read_manifest(tmp_path) == ["IWAD", "A\ta\tX"]
