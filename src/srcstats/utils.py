"""Shared helpers"""

import psutil

WORKERS_PER_CPU = 2


def default_worker_count() -> int:
    """Twice the number of logical CPUs."""
    cpus = psutil.cpu_count(logical=True) or 1
    return WORKERS_PER_CPU * cpus


__all__ = ['WORKERS_PER_CPU', 'default_worker_count']
