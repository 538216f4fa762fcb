"""
git-repo-keeper - Discover git repositories and keep them safely up to date
"""

from .__version__ import __version__
from .models import Status, UpdateOptions, UpdateResult, RepoInfo, CleanupOptions, CleanupResult
from .services import (
    discover,
    classify_status,
    status_label,
    detect_unsafe_state,
    update,
    cleanup,
    inspect,
    list_repositories,
)
from .core import RepoKeeper
from .cli.main import main

__all__ = [
    "Status",
    "UpdateOptions",
    "UpdateResult",
    "RepoInfo",
    "CleanupOptions",
    "CleanupResult",
    "discover",
    "classify_status",
    "status_label",
    "detect_unsafe_state",
    "update",
    "cleanup",
    "inspect",
    "list_repositories",
    "RepoKeeper",
    "main",
    "__version__",
]
