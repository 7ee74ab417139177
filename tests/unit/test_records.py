"""Unit tests for the checksum record line format."""

import pytest

from partialsum.core.exceptions import MalformedRecordLineError
from partialsum.utils.records import (
    format_record_line,
    iter_check_lines,
    parse_record_line,
    parse_record_line_strict,
)


def test_parse_basic_line():
    assert parse_record_line("abc123  /data/x.bin") == ("abc123", "/data/x.bin")


def test_parse_keeps_single_spaces_in_path():
    assert parse_record_line("abc  /data/my file.txt") == ("abc", "/data/my file.txt")


def test_parse_splits_on_first_double_space():
    # Ambiguous by format: everything after the first "  " is the path
    assert parse_record_line("abc  /data/a  b.txt") == ("abc", "/data/a  b.txt")
    assert parse_record_line("ab  c  /x") == ("ab", "c  /x")


def test_parse_without_separator_is_malformed():
    assert parse_record_line("abc123 /data/x.bin") is None
    assert parse_record_line("") is None


def test_parse_strict_raises():
    with pytest.raises(MalformedRecordLineError, match="Malformed line"):
        parse_record_line_strict("no-separator-here")


def test_format_line():
    digest = "f" * 64
    assert format_record_line(digest, "/data/x.bin") == f"{digest}  /data/x.bin"


def test_format_then_parse():
    line = format_record_line("0" * 64, "/tmp/with space/file")
    assert parse_record_line(line) == ("0" * 64, "/tmp/with space/file")


def test_iter_check_lines_trims_and_skips_blank():
    text = "  aaa  /x  \n\n\t\nbbb  /y\r\n"
    assert iter_check_lines(text) == ["aaa  /x", "bbb  /y"]
