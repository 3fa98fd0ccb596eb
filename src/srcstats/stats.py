"""Mergeable statistics accumulator"""

from collections.abc import Iterable
from dataclasses import dataclass, fields

from srcstats.metrics import LineMetrics


@dataclass
class Stats:
    """Running totals for one file, one worker, or a whole run.

    Merging is field-wise addition, so partial results can be combined in
    any order and any grouping. ``Stats()`` is the identity.
    """

    lines: int = 0  # '\n' count, plus a final line missing its terminator
    non_empty_lines: int = 0  # lines with at least one non-whitespace character
    non_whitespace_chars: int = 0
    length_sum: int = 0  # sum of rightmost non-whitespace column over non-empty lines
    bytes: int = 0  # line content only, terminators excluded
    files: int = 0

    def add_line(self, metrics: LineMetrics) -> None:
        """Fold a single line's metrics into these totals."""
        self.lines += 1
        self.bytes += metrics.byte_len
        if not metrics.is_empty:
            self.non_empty_lines += 1
            self.non_whitespace_chars += metrics.non_whitespace
            self.length_sum += metrics.rightmost

    def merge(self, other: 'Stats | None') -> 'Stats':
        """Add ``other`` into this accumulator in place. None is a no-op."""
        if other is None:
            return self
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))
        return self

    def __add__(self, other: 'Stats') -> 'Stats':
        if not isinstance(other, Stats):
            return NotImplemented
        return Stats().merge(self).merge(other)


def merge_all(partials: Iterable[Stats | None]) -> Stats:
    """Fold optional partial results into a new accumulator."""
    total = Stats()
    for partial in partials:
        total.merge(partial)
    return total


__all__ = ['Stats', 'merge_all']
