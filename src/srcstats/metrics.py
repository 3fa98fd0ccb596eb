"""Per-line metrics: display width under tab expansion and whitespace counts"""

from dataclasses import dataclass

DEFAULT_TAB_WIDTH = 4

# Code points with the Unicode White_Space property.
# str.isspace() disagrees on a few of them (e.g. U+001C..U+001F), so keep the set explicit.
WHITESPACE = frozenset(
    chr(cp)
    for cp in (
        *range(0x09, 0x0E),
        0x20,
        0x85,
        0xA0,
        0x1680,
        *range(0x2000, 0x200B),
        0x2028,
        0x2029,
        0x202F,
        0x205F,
        0x3000,
    )
)


@dataclass(frozen=True)
class LineMetrics:
    """Counts for a single line (terminator excluded)."""

    total_width: int
    non_whitespace: int
    rightmost: int
    byte_len: int

    @property
    def is_empty(self) -> bool:
        """A line with no non-whitespace code points counts as empty."""
        return self.non_whitespace == 0


def validate_tab_width(tab_width: int) -> int:
    if tab_width < 1:
        raise ValueError(f'tab width must be >= 1, got {tab_width}')
    return tab_width


def measure_line(raw: bytes, tab_width: int = DEFAULT_TAB_WIDTH) -> LineMetrics:
    """Measure one line of raw bytes.

    Every code point advances the display column by 1 except tabs, which add
    a fixed ``tab_width`` (no tab-stop alignment). Malformed UTF-8 decodes to
    U+FFFD and is counted like any other character.

    Args:
        raw: Line content without its terminator
        tab_width: Columns added per tab character (>= 1)

    Returns:
        LineMetrics for the line
    """
    validate_tab_width(tab_width)

    total_width = 0
    non_whitespace = 0
    rightmost = 0
    for char in raw.decode('utf-8', errors='replace'):
        if char == '\t':
            total_width += tab_width
        else:
            total_width += 1
        if char not in WHITESPACE:
            non_whitespace += 1
            rightmost = total_width

    return LineMetrics(
        total_width=total_width,
        non_whitespace=non_whitespace,
        rightmost=rightmost,
        byte_len=len(raw),
    )


__all__ = ['DEFAULT_TAB_WIDTH', 'LineMetrics', 'WHITESPACE', 'measure_line', 'validate_tab_width']
