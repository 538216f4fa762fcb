"""Threading utilities for sizing the repository worker pool."""

import os
import sys
from typing import Optional


def is_free_threading_enabled() -> bool:
    """Detect if Python is running with free-threading enabled.

    Returns:
        True if running on Python 3.13+ with GIL disabled (free-threading mode)
        False if running with GIL enabled or Python < 3.13
    """
    try:
        # sys._is_gil_enabled() returns False when GIL is disabled
        return hasattr(sys, "_is_gil_enabled") and not sys._is_gil_enabled()
    except Exception:
        return False


def get_optimal_worker_count(user_specified: Optional[int] = None, job_count: Optional[int] = None) -> int:
    """Calculate the number of repositories to update at once.

    Each repository update mostly waits on git subprocesses and the network,
    so the pool is sized for I/O-bound work rather than CPU count alone.

    Args:
        user_specified: Worker count from --jobs or config, used when positive
        job_count: Number of jobs to run; the pool never exceeds it

    Returns:
        Number of workers (at least 1)
    """
    if user_specified is not None and user_specified > 0:
        workers = user_specified
    else:
        cpu_count = os.cpu_count() or 1
        if is_free_threading_enabled():
            workers = min(64, cpu_count * 2)
        else:
            # CPU_count + 4 is the usual heuristic for I/O-bound pools
            workers = min(32, cpu_count + 4)

    if job_count is not None and job_count > 0:
        workers = min(workers, job_count)

    return max(1, workers)
