"""Per-file processing: open, classify, scan lines into a Stats accumulator"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO

from srcstats.binary import is_binary
from srcstats.metrics import DEFAULT_TAB_WIDTH, measure_line, validate_tab_width
from srcstats.stats import Stats

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    UNREADABLE = 'unreadable'
    BINARY = 'binary'
    READ_ERROR = 'read_error'
    SOURCE_ERROR = 'source_error'


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem met while processing a run.

    Diagnostics are returned to the caller instead of being printed, so the
    core can be exercised without capturing process output.
    """

    path: str | None
    kind: DiagnosticKind
    message: str = ''

    def describe(self) -> str:
        """Human-readable one-liner (without a severity prefix)."""
        if self.kind == DiagnosticKind.UNREADABLE:
            return f'skipping file {self.path}: {self.message}'
        if self.kind == DiagnosticKind.BINARY:
            return f'skipping binary file {self.path}'
        if self.kind == DiagnosticKind.READ_ERROR:
            return f'error scanning {self.path}: {self.message}'
        return f'error reading input: {self.message}'


@dataclass
class FileOutcome:
    """Result of processing one file: stats (or None if skipped) plus diagnostics."""

    path: str
    stats: Stats | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)


def _strip_terminator(line: bytes) -> bytes:
    # One '\n', then at most one '\r' before it
    if line.endswith(b'\n'):
        line = line[:-1]
    if line.endswith(b'\r'):
        line = line[:-1]
    return line


def stats_from_stream(stream: BinaryIO, tab_width: int = DEFAULT_TAB_WIDTH) -> Stats:
    """Scan a binary stream line by line into a fresh per-file accumulator.

    A last line without a terminator still counts as a line. Read errors
    propagate to the caller; no partial result is returned.
    """
    validate_tab_width(tab_width)
    stats = Stats(files=1)
    for line in stream:
        stats.add_line(measure_line(_strip_terminator(line), tab_width))
    return stats


def process_file(filename: str, tab_width: int = DEFAULT_TAB_WIDTH) -> FileOutcome:
    """Compute stats for a single file.

    Unreadable files, binary files and files failing mid-scan are skipped;
    the reason is recorded as a diagnostic on the returned outcome.

    Args:
        filename: Path of the file to process
        tab_width: Columns added per tab character

    Returns:
        FileOutcome with ``stats`` set only when the file was fully processed
    """
    outcome = FileOutcome(path=filename)

    try:
        f = open(filename, 'rb')
    except (OSError, ValueError) as e:
        # ValueError: the name itself is unusable (e.g. an embedded null byte)
        logger.debug(f'Cannot open {filename}: {e}')
        outcome.diagnostics.append(Diagnostic(filename, DiagnosticKind.UNREADABLE, _reason(e)))
        return outcome

    with f:
        try:
            if is_binary(f):
                logger.debug(f'Skipping binary file {filename}')
                outcome.diagnostics.append(Diagnostic(filename, DiagnosticKind.BINARY))
                return outcome

            outcome.stats = stats_from_stream(f, tab_width)
        except OSError as e:
            logger.debug(f'Error scanning {filename}: {e}')
            outcome.diagnostics.append(Diagnostic(filename, DiagnosticKind.READ_ERROR, _reason(e)))
            return outcome

    logger.debug(f'Processed {filename}: {outcome.stats.lines} lines, {outcome.stats.bytes} bytes')
    return outcome


def _reason(error: Exception) -> str:
    return getattr(error, 'strerror', None) or str(error)


__all__ = ['Diagnostic', 'DiagnosticKind', 'FileOutcome', 'process_file', 'stats_from_stream']
