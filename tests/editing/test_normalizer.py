"""Tests for the whitespace normalizer and its offset map."""

from spekta.editing.normalizer import normalize, normalize_with_offsets


class TestNormalize:
    def test_crlf_to_lf(self):
        assert normalize("a\r\nb\r\n") == "a\nb"

    def test_tabs_expand_to_fixed_width(self):
        assert normalize("\tx") == "  x"
        assert normalize("\tx", tab_width=4) == "    x"
        assert normalize("a\tb") == "a  b"

    def test_trailing_whitespace_stripped(self):
        assert normalize("a   \nb\t\n") == "a\nb"

    def test_leading_and_trailing_blank_lines_dropped(self):
        assert normalize("\n\n   \nalpha\nbeta\n\n\t\n") == "alpha\nbeta"

    def test_internal_blank_lines_kept(self):
        assert normalize("a\n\nb") == "a\n\nb"
        assert normalize("a\n   \nb") == "a\n\nb"

    def test_leading_indentation_kept(self):
        assert normalize("    x = 1\n  y = 2") == "    x = 1\n  y = 2"

    def test_indentation_style_and_line_endings_compare_equal(self):
        tabs = "if x:\r\n\treturn 1  \r\n"
        spaces = "if x:\n  return 1\n"
        assert normalize(tabs) == normalize(spaces)

    def test_empty_and_blank(self):
        assert normalize("") == ""
        assert normalize(" \n\t\n") == ""


class TestOffsets:
    def test_offsets_track_source_positions(self):
        result = normalize_with_offsets("a \r\n\tb")

        assert result.text == "a\n  b"
        # 'a' at 0, newline at 3, both tab spaces at 4, 'b' at 5
        assert result.offsets == [0, 3, 4, 4, 5]

    def test_one_offset_per_character(self):
        source = "\n\n  def f():\t\n\t\treturn 1   \n\n"
        result = normalize_with_offsets(source)

        assert len(result.offsets) == len(result.text)
        assert result.offsets == sorted(result.offsets)

    def test_kept_characters_map_to_themselves(self):
        source = "x = 1   \r\n\r\ny = [\n\t2,\n]\n\n"
        result = normalize_with_offsets(source)

        for i, ch in enumerate(result.text):
            if ch not in " \n":
                assert source[result.offsets[i]] == ch
            elif ch == "\n":
                assert source[result.offsets[i]] == "\n"

    def test_skipped_leading_blank_lines_shift_offsets(self):
        result = normalize_with_offsets("\n\nabc")

        assert result.text == "abc"
        assert result.offsets == [2, 3, 4]

    def test_source_span(self):
        source = "def f():\n\treturn 1   \n"
        result = normalize_with_offsets(source)

        start, end = result.source_span(0, len(result.text))
        assert source[start:end] == "def f():\n\treturn 1"

    def test_tab_expansion_boundaries(self):
        result = normalize_with_offsets("a\tb")

        assert result.text == "a  b"
        assert [result.starts_source_char(i) for i in range(4)] == [
            True, True, False, True,
        ]

    def test_empty_text(self):
        result = normalize_with_offsets("")
        assert result.text == ""
        assert result.offsets == []
