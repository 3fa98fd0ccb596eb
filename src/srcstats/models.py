"""Pydantic models for the rendered report"""

from pydantic import BaseModel, Field

from srcstats.stats import Stats

LABEL_WIDTH = 30
VALUE_WIDTH = 10
UNDEFINED = 'n/a'

_IEC_UNITS = ['B', 'KiB', 'MiB', 'GiB', 'TiB', 'PiB', 'EiB']


def human_readable_size(size_bytes: int) -> str:
    """Convert bytes to a binary-prefixed size, e.g. '1.5 KiB' or '10 MiB'.

    Values below 10 are shown as plain bytes. Otherwise the value is scaled to
    the largest fitting unit and rounded to one decimal, which is only shown
    when the scaled value is below 10.
    """
    size_bytes = int(size_bytes)
    if size_bytes < 10:
        return f'{size_bytes} B'

    exponent = 0
    while exponent < len(_IEC_UNITS) - 1 and size_bytes >= 1024 ** (exponent + 1):
        exponent += 1

    value = int(size_bytes / 1024**exponent * 10 + 0.5) / 10
    if value < 10:
        return f'{value:.1f} {_IEC_UNITS[exponent]}'
    return f'{value:.0f} {_IEC_UNITS[exponent]}'


def ratio(numerator: int, denominator: int) -> float | None:
    """Divide, returning None (undefined) for a zero denominator."""
    if denominator == 0:
        return None
    return numerator / denominator


class StatsReport(BaseModel):
    """Merged statistics for a run, with derived means."""

    files: int = Field(..., description='Number of files processed')
    total_bytes: int = Field(..., description='Total bytes of line content (terminators excluded)')
    total_size: str = Field(..., description='Human-readable total size')
    mean_file_size_bytes: float | None = Field(None, description='Mean bytes per file')
    mean_file_size: str | None = Field(None, description='Human-readable mean file size')
    total_lines: int = Field(..., description='Total number of lines')
    lines_per_file: float | None = Field(None, description='Mean lines per file')
    non_empty_lines: int = Field(..., description='Lines with at least one non-whitespace character')
    non_empty_lines_per_file: float | None = Field(None, description='Mean non-empty lines per file')
    non_whitespace_chars: int = Field(..., description='Total non-whitespace characters')
    chars_per_non_empty_line: float | None = Field(None, description='Mean non-whitespace characters per non-empty line')
    length_sum: int = Field(..., description='Sum of non-empty line lengths (tab-expanded)')
    mean_non_empty_line_length: float | None = Field(None, description='Mean non-empty line length (tab-expanded)')

    @classmethod
    def from_stats(cls, stats: Stats) -> 'StatsReport':
        mean_size = ratio(stats.bytes, stats.files)
        return cls(
            files=stats.files,
            total_bytes=stats.bytes,
            total_size=human_readable_size(stats.bytes),
            mean_file_size_bytes=mean_size,
            mean_file_size=human_readable_size(int(mean_size)) if mean_size is not None else None,
            total_lines=stats.lines,
            lines_per_file=ratio(stats.lines, stats.files),
            non_empty_lines=stats.non_empty_lines,
            non_empty_lines_per_file=ratio(stats.non_empty_lines, stats.files),
            non_whitespace_chars=stats.non_whitespace_chars,
            chars_per_non_empty_line=ratio(stats.non_whitespace_chars, stats.non_empty_lines),
            length_sum=stats.length_sum,
            mean_non_empty_line_length=ratio(stats.length_sum, stats.non_empty_lines),
        )

    def rows(self) -> list[tuple[str, int | float | str | None]]:
        """Label/value pairs in display order."""
        return [
            ('files', self.files),
            ('total size', self.total_size),
            ('mean file size', self.mean_file_size),
            ('total lines', self.total_lines),
            ('lines / file', self.lines_per_file),
            ('non-empty lines', self.non_empty_lines),
            ('non-empty lines / file', self.non_empty_lines_per_file),
            ('chars / non-empty line', self.chars_per_non_empty_line),
            ('mean non-empty line length', self.mean_non_empty_line_length),
        ]

    def to_cli(self, colorize: bool = False) -> str:
        """Format the report as a fixed-width table."""
        GREY = '\033[90m'
        BOLD = '\033[1m'
        RESET = '\033[0m'

        lines = []
        for label, value in self.rows():
            if value is None:
                rendered = f'{UNDEFINED:>{VALUE_WIDTH}}'
            elif isinstance(value, int):
                rendered = f'{value:>{VALUE_WIDTH}d}'
            elif isinstance(value, float):
                rendered = f'{value:>{VALUE_WIDTH}.1f}'
            else:
                rendered = f'{value:>{VALUE_WIDTH}}'

            if colorize:
                lines.append(f'{GREY}{label:<{LABEL_WIDTH}}{RESET}{BOLD}{rendered}{RESET}')
            else:
                lines.append(f'{label:<{LABEL_WIDTH}}{rendered}')

        return '\n'.join(lines)


__all__ = ['StatsReport', 'human_readable_size', 'ratio']
