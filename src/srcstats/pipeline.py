"""Concurrent aggregation pipeline

Filenames flow from a single producer into a shared queue. A fixed pool of
workers drains the queue, each folding per-file results into its own
subtotal. Once every worker has finished, the subtotals are merged into the
grand total. Since merging is plain addition, the result does not depend on
how files were spread across workers.
"""

import logging
import queue
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from time import time

from srcstats.metrics import DEFAULT_TAB_WIDTH, validate_tab_width
from srcstats.processor import Diagnostic, DiagnosticKind, process_file
from srcstats.stats import Stats, merge_all
from srcstats.utils import default_worker_count

logger = logging.getLogger(__name__)

# Marks the end of the filename stream; one is queued per worker
_DONE = object()


class NoFilesToAnalyzeError(Exception):
    """Raised when a run ends without a single successfully processed file.

    Carries the run's diagnostics so callers can still report why every file
    was skipped.
    """

    def __init__(self, diagnostics: list[Diagnostic] | None = None, message: str = 'no files to analyze'):
        super().__init__(message)
        self.diagnostics = diagnostics or []


@dataclass
class PipelineResult:
    stats: Stats
    diagnostics: list[Diagnostic] = field(default_factory=list)
    workers: int = 1
    elapsed: float = 0.0


def _produce(filenames: Iterable[str], files: queue.Queue, workers: int) -> list[Diagnostic]:
    """Feed filenames into the queue, then close it with one marker per worker."""
    diagnostics = []
    count = 0
    try:
        for filename in filenames:
            files.put(filename)
            count += 1
    except (OSError, ValueError) as e:
        # Already queued names are still processed
        logger.debug(f'Filename source failed after {count} names: {e}')
        diagnostics.append(Diagnostic(None, DiagnosticKind.SOURCE_ERROR, str(e)))
    finally:
        for _ in range(workers):
            files.put(_DONE)
    logger.debug(f'Producer queued {count} filenames')
    return diagnostics


def _consume(files: queue.Queue, tab_width: int) -> tuple[Stats, list[Diagnostic]]:
    """Worker loop: process filenames until the end marker arrives."""
    subtotal = Stats()
    diagnostics = []
    while True:
        filename = files.get()
        if filename is _DONE:
            break
        outcome = process_file(filename, tab_width)
        subtotal.merge(outcome.stats)
        diagnostics.extend(outcome.diagnostics)
    return subtotal, diagnostics


def run_pipeline(
    filenames: Iterable[str],
    tab_width: int = DEFAULT_TAB_WIDTH,
    workers: int | None = None,
) -> PipelineResult:
    """Process files concurrently and merge their stats.

    Args:
        filenames: Any iterable of paths; it may be lazy (e.g. a stream being read)
        tab_width: Columns added per tab character (>= 1)
        workers: Number of worker threads (default: twice the CPU count)

    Returns:
        PipelineResult with the grand total and all collected diagnostics
    """
    validate_tab_width(tab_width)
    if workers is None:
        workers = default_worker_count()
    if workers < 1:
        raise ValueError(f'workers must be >= 1, got {workers}')

    start_time = time()
    files = queue.Queue()
    diagnostics = []

    # One extra thread for the producer
    with ThreadPoolExecutor(max_workers=workers + 1, thread_name_prefix='Worker') as executor:
        producer = executor.submit(_produce, filenames, files, workers)
        subtotals = [executor.submit(_consume, files, tab_width) for _ in range(workers)]

        # Barrier: no subtotal is read before every worker has finished
        wait(subtotals)
        results = [future.result() for future in subtotals]
        total = merge_all(subtotal for subtotal, _ in results)
        for _, worker_diagnostics in results:
            diagnostics.extend(worker_diagnostics)

        diagnostics.extend(producer.result())

    elapsed = time() - start_time
    logger.info(
        f'Processed {total.files} files with {workers} workers in {elapsed:.3f}s '
        f'({len(diagnostics)} diagnostics)'
    )
    return PipelineResult(stats=total, diagnostics=diagnostics, workers=workers, elapsed=elapsed)


def collect_stats(
    filenames: Iterable[str],
    tab_width: int = DEFAULT_TAB_WIDTH,
    workers: int | None = None,
) -> PipelineResult:
    """Run the pipeline and require at least one processed file.

    Raises:
        NoFilesToAnalyzeError: if no file could be processed
    """
    result = run_pipeline(filenames, tab_width=tab_width, workers=workers)
    if result.stats.files == 0:
        raise NoFilesToAnalyzeError(result.diagnostics)
    return result


__all__ = ['NoFilesToAnalyzeError', 'PipelineResult', 'collect_stats', 'run_pipeline']
