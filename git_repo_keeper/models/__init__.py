"""Data models for git-repo-keeper."""

from .job import JobResult, JobSummary
from .repository import (
    CleanupOptions,
    CleanupPlan,
    CleanupResult,
    RepoInfo,
    RepoStateCheck,
    Status,
    UpdateOptions,
    UpdateResult,
)

__all__ = [
    "Status",
    "UpdateOptions",
    "UpdateResult",
    "RepoStateCheck",
    "RepoInfo",
    "CleanupOptions",
    "CleanupPlan",
    "CleanupResult",
    "JobResult",
    "JobSummary",
]
