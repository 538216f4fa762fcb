"""Utility functions for git-repo-keeper.

This package provides utility modules:
- logging: Logging configuration and logger creation
- threading: Worker count heuristics for the thread pools
- context: Cancellation and deadline handling shared by git invocations
"""

from .logging import setup_logging, get_logger, ColoredFormatter
from .threading import is_free_threading_enabled, get_optimal_worker_count
from .context import OperationContext

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "ColoredFormatter",
    # Threading
    "is_free_threading_enabled",
    "get_optimal_worker_count",
    # Context
    "OperationContext",
]
