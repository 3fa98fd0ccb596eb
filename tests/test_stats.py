"""Tests for the Stats accumulator"""

from srcstats.metrics import measure_line
from srcstats.stats import Stats, merge_all


def make(lines=0, non_empty=0, chars=0, length=0, size=0, files=0):
    return Stats(
        lines=lines,
        non_empty_lines=non_empty,
        non_whitespace_chars=chars,
        length_sum=length,
        bytes=size,
        files=files,
    )


class TestMerge:
    """Merge forms a commutative monoid"""

    def setup_method(self):
        self.a = make(10, 8, 120, 300, 450, 1)
        self.b = make(3, 1, 7, 9, 20, 1)
        self.c = make(0, 0, 0, 0, 0, 1)

    def test_zero_is_identity(self):
        assert Stats() + self.a == self.a
        assert self.a + Stats() == self.a

    def test_commutative(self):
        assert self.a + self.b == self.b + self.a

    def test_associative(self):
        assert (self.a + self.b) + self.c == self.a + (self.b + self.c)
        assert (self.a + self.b) + self.c == self.b + (self.a + self.c)

    def test_fieldwise_addition(self):
        assert self.a + self.b == make(13, 9, 127, 309, 470, 2)

    def test_merge_none_is_noop(self):
        before = make(1, 1, 1, 1, 1, 1)
        merged = make(1, 1, 1, 1, 1, 1).merge(None)
        assert merged == before

    def test_merge_is_in_place(self):
        total = Stats()
        result = total.merge(self.a)
        assert result is total
        assert total == self.a

    def test_add_does_not_mutate_operands(self):
        a_before = make(10, 8, 120, 300, 450, 1)
        _ = self.a + self.b
        assert self.a == a_before

    def test_merge_all_skips_absent_results(self):
        total = merge_all([self.a, None, self.b, None])
        assert total == self.a + self.b

    def test_merge_all_empty(self):
        assert merge_all([]) == Stats()


class TestAddLine:
    """Folding single lines into an accumulator"""

    def test_non_empty_line(self):
        stats = Stats(files=1)
        stats.add_line(measure_line(b'\tqux', tab_width=4))
        assert stats == make(lines=1, non_empty=1, chars=3, length=7, size=4, files=1)

    def test_whitespace_line_counts_only_lines_and_bytes(self):
        stats = Stats(files=1)
        stats.add_line(measure_line(b'  \t'))
        assert stats == make(lines=1, size=3, files=1)

    def test_fresh_accumulator_is_zero(self):
        stats = Stats()
        assert stats == make()
        assert stats.files == 0
