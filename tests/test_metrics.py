"""Tests for per-line metric computation"""

import pytest

from srcstats.metrics import WHITESPACE, LineMetrics, measure_line


class TestTabExpansion:
    """Tabs add a fixed number of columns"""

    def test_tab_width_four(self):
        metrics = measure_line(b'\ta', tab_width=4)
        assert metrics.rightmost == 5
        assert metrics.total_width == 5
        assert metrics.non_whitespace == 1
        assert metrics.byte_len == 2

    def test_tab_width_one(self):
        metrics = measure_line(b'\ta', tab_width=1)
        assert metrics.rightmost == 2

    def test_tabs_are_not_aligned_to_tab_stops(self):
        """'ab\\tc' would reach column 5 with tab stops; here the tab adds a full 4"""
        metrics = measure_line(b'ab\tc', tab_width=4)
        assert metrics.rightmost == 7

    def test_default_tab_width_is_four(self):
        assert measure_line(b'\t\tx').rightmost == 9

    def test_invalid_tab_width(self):
        with pytest.raises(ValueError):
            measure_line(b'abc', tab_width=0)


class TestUnicodeWidth:
    """Width is counted per code point, not per byte"""

    def test_multibyte_code_point(self):
        raw = 'é!'.encode('utf-8')
        metrics = measure_line(raw, tab_width=4)
        assert metrics.non_whitespace == 2
        assert metrics.rightmost == 2
        assert metrics.byte_len == 3

    def test_cjk_counts_one_column_each(self):
        raw = '日本語'.encode('utf-8')
        metrics = measure_line(raw)
        assert metrics.rightmost == 3
        assert metrics.byte_len == 9

    def test_malformed_bytes_become_replacement_characters(self):
        metrics = measure_line(b'\xff\xfe')
        assert metrics.non_whitespace == 2
        assert metrics.rightmost == 2
        assert metrics.byte_len == 2

    def test_unicode_spaces_are_whitespace(self):
        raw = ('a' + chr(0x2003) + 'b' + chr(0xA0)).encode('utf-8')
        metrics = measure_line(raw)
        assert metrics.non_whitespace == 2
        assert metrics.rightmost == 3
        assert metrics.total_width == 4

    def test_separator_controls_are_not_whitespace(self):
        """U+001C..U+001F lack the White_Space property"""
        metrics = measure_line(chr(0x1C).encode('ascii'))
        assert metrics.non_whitespace == 1


class TestEmptyLines:
    """Whitespace-only lines are empty"""

    def test_empty_string(self):
        metrics = measure_line(b'')
        assert metrics == LineMetrics(total_width=0, non_whitespace=0, rightmost=0, byte_len=0)
        assert metrics.is_empty

    def test_whitespace_only(self):
        metrics = measure_line(b'  \t ', tab_width=4)
        assert metrics.is_empty
        assert metrics.rightmost == 0
        assert metrics.total_width == 7
        assert metrics.byte_len == 4

    def test_trailing_whitespace_not_counted_in_rightmost(self):
        metrics = measure_line(b'  ab  \t')
        assert not metrics.is_empty
        assert metrics.rightmost == 4
        assert metrics.non_whitespace == 2


def test_whitespace_set_matches_white_space_property():
    assert len(WHITESPACE) == 25
    assert ' ' in WHITESPACE
    assert '\t' in WHITESPACE
    assert chr(0x3000) in WHITESPACE
    assert chr(0x200B) not in WHITESPACE  # zero width space is not White_Space
