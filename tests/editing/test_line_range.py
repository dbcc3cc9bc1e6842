"""Tests for line range parsing and offsets."""

import pytest

from spekta.editing.errors import InvalidRangeError
from spekta.editing.line_range import LineRange, parse_path_with_range, parse_range


class TestParsePathWithRange:
    @pytest.mark.parametrize("arg, expected", [
        ("src/app.py", ("src/app.py", None)),
        ("src/app.py[10,50]", ("src/app.py", LineRange(10, 50))),
        ("src/app.py[10,$]", ("src/app.py", LineRange(10, None))),
        ("src/app.py[10]", ("src/app.py", LineRange(10, None))),
        ("src/app.py[,20]", ("src/app.py", LineRange(1, 20))),
        ("src/app.py[]", ("src/app.py", LineRange(1, None))),
    ])
    def test_forms(self, arg, expected):
        assert parse_path_with_range(arg) == expected


class TestParseRange:
    def test_default(self):
        assert parse_range(None) == LineRange()
        assert parse_range("1,$") == LineRange()

    def test_explicit(self):
        assert parse_range("5,9") == LineRange(5, 9)
        assert parse_range("5,$") == LineRange(5, None)

    def test_invalid(self):
        with pytest.raises(InvalidRangeError, match="Invalid range format"):
            parse_range("five,nine")


class TestOffsets:
    CONTENT = "one\ntwo\nthree\nfour\n"

    def test_middle_lines(self):
        start, end = LineRange(2, 3).offsets(self.CONTENT)
        assert self.CONTENT[start:end] == "two\nthree"

    def test_to_end_of_file(self):
        start, end = LineRange(3).offsets(self.CONTENT)
        assert self.CONTENT[start:end] == "three\nfour"

    def test_end_clamped(self):
        start, end = LineRange(4, 100).offsets(self.CONTENT)
        assert self.CONTENT[start:end] == "four"

    def test_crlf_excludes_line_terminator(self):
        content = "a\r\nb\r\nc\r\n"
        start, end = LineRange(2, 2).offsets(content)
        assert content[start:end] == "b"

    def test_start_out_of_bounds(self):
        with pytest.raises(InvalidRangeError, match="out of bounds"):
            LineRange(9, 10).offsets(self.CONTENT)

    def test_trailing_newline_is_not_an_extra_line(self):
        with pytest.raises(InvalidRangeError, match=r"out of bounds \(1-2\)"):
            LineRange(3).offsets("a\nb\n")
        start, end = LineRange(2).offsets("a\nb")
        assert (start, end) == (2, 3)

    def test_empty_content_has_one_line(self):
        assert LineRange().offsets("") == (0, 0)

    def test_end_before_start(self):
        with pytest.raises(InvalidRangeError, match="before start"):
            LineRange(3, 2).offsets(self.CONTENT)
