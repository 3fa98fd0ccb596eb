"""Main CLI entry point"""

import logging
import os
import sys
from collections.abc import Iterator
from typing import BinaryIO

import click

from srcstats.__version__ import __version__
from srcstats.metrics import DEFAULT_TAB_WIDTH
from srcstats.models import StatsReport
from srcstats.pipeline import NoFilesToAnalyzeError, collect_stats
from srcstats.processor import Diagnostic, DiagnosticKind

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    log_level_name = os.getenv('SRCSTATS_LOG_LEVEL', 'WARNING').upper()
    log_level = getattr(logging, log_level_name, logging.WARNING)
    logging.basicConfig(level=log_level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def read_filenames(stream: BinaryIO) -> Iterator[str]:
    """Yield one filename per input line, lazily, skipping blank lines.

    Lines are read as bytes and decoded with the filesystem encoding, so names
    that are not valid UTF-8 still round-trip to the file they point at.
    """
    for line in stream:
        raw = line.rstrip(b'\r\n')
        if raw:
            yield os.fsdecode(raw)


def echo_diagnostics(diagnostics: list[Diagnostic], quiet: bool = False) -> None:
    """Print diagnostics to stderr. Input errors are printed even when quiet."""
    for diagnostic in diagnostics:
        if diagnostic.kind == DiagnosticKind.SOURCE_ERROR:
            click.echo(f'Error reading stdin: {diagnostic.message}', err=True)
        elif not quiet:
            click.echo(f'Warning: {diagnostic.describe()}', err=True)


@click.command('srcstats')
@click.argument('files', nargs=-1, type=str)
@click.option(
    '--tabwidth',
    '-t',
    'tab_width',
    type=click.IntRange(min=1),
    default=DEFAULT_TAB_WIDTH,
    show_default=True,
    envvar='SRCSTATS_TAB_WIDTH',
    help='Width to assign tabs for determining line length',
)
@click.option(
    '--workers',
    '-w',
    type=click.IntRange(min=1),
    default=None,
    envvar='SRCSTATS_WORKERS',
    help='Number of parallel workers (default: twice the CPU count)',
)
@click.option('--json', 'json_output', is_flag=True, help='Output in JSON format')
@click.option('--quiet', '-q', is_flag=True, help='Do not print per-file warnings')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.version_option(version=__version__, prog_name='srcstats')
def stats_command(
    files: tuple[str, ...],
    tab_width: int,
    workers: int | None,
    json_output: bool,
    quiet: bool,
    no_color: bool,
):
    """
    Compute aggregate line statistics over a set of text files.

    Files are given as arguments, or read one per line from stdin when no
    arguments are passed. Binary files (a null byte within the first 8000
    bytes) and unreadable files are skipped with a warning.

    \b
    Examples:
      srcstats src/*.py
      git ls-files | srcstats
      find . -name '*.go' | srcstats --tabwidth 8
      srcstats --json README.md docs/*.md
    """
    configure_logging()

    if files:
        filenames = list(files)
    else:
        logger.debug('No file arguments, reading filenames from stdin')
        filenames = read_filenames(click.get_binary_stream('stdin'))

    try:
        result = collect_stats(filenames, tab_width=tab_width, workers=workers)
    except NoFilesToAnalyzeError as e:
        echo_diagnostics(e.diagnostics, quiet)
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    echo_diagnostics(result.diagnostics, quiet)

    report = StatsReport.from_stats(result.stats)
    if json_output:
        click.echo(report.model_dump_json(indent=2))
    else:
        colorize = not no_color and sys.stdout.isatty()
        click.echo(report.to_cli(colorize=colorize))


def main():
    """Entry point for the CLI"""
    stats_command()


if __name__ == '__main__':
    main()
