"""Shared constants for git-repo-keeper."""

from dataclasses import dataclass
from typing import List


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("name", "Name", 30),
    ColumnDefinition("status", "Status", 12),
    ColumnDefinition("ahead", "Ahead", 6),
    ColumnDefinition("path", "Path"),
]


# Status display names, keyed by Status.value
STATUS_DISPLAY = {
    "clean": "clean",
    "dirty": "dirty",
    "unpushed": "unpushed",
    "no_upstream": "no upstream",
}
STATUS_UNKNOWN = "unknown"

# CLI colors (Rich color names), keyed by Status.value
STATUS_COLORS = {
    "clean": "green",
    "dirty": "red",
    "unpushed": "yellow",
    "no_upstream": "cyan",
}


# Git invocation
GIT_METADATA_NAME = ".git"
GITDIR_PREFIX = "gitdir:"
DETACHED_HEAD_NAME = "HEAD"
REMOTE_REFS_PREFIX = "refs/remotes/"
NO_UPSTREAM_MARKERS = ("no upstream configured", "no upstream branch")
UNKNOWN_BRANCH = "<unknown>"


# Skip messages
SKIP_DIRTY = "uncommitted changes present (tracked or untracked), skipped pull/submodule"
SKIP_STASH = "stash entries present, skipped pull/submodule (check with `git stash list`)"
SKIP_DETACHED = "detached HEAD, skipped pull/submodule (check out a branch first)"
SKIP_NO_UPSTREAM = "no upstream configured, skipped pull"
SKIP_NON_DEFAULT_UPSTREAM = "tracking a branch other than the remote default, skipped pull/submodule"
SKIP_UPSTREAM_DETECT_FAILED = "could not determine the tracking branch, skipped pull/submodule"
SKIP_DEFAULT_BRANCH_DETECT_FAILED = "could not determine the remote default branch, skipped pull/submodule"
SKIP_STATE_DETECT_FAILED = "could not determine repository state, skipping update"
SKIP_UPSTREAM_CHECK_FAILED = "could not check upstream, skipping pull plan"

# Cleanup skip messages
SKIP_CLEANUP_DIRTY = "uncommitted changes present (tracked or untracked), skipped cleanup"
SKIP_CLEANUP_STASH = "stash entries present, skipped cleanup (check with `git stash list`)"
SKIP_CLEANUP_DETACHED = "detached HEAD, skipped cleanup (check out a branch first)"
SKIP_CLEANUP_STATE_DETECT_FAILED = "could not determine repository state, skipping cleanup"
SKIP_CLEANUP_DEFAULT_BRANCH_FAILED = "could not determine the remote default branch, skipped cleanup"
SKIP_NO_CLEANUP_TARGETS = "no merged branches to delete"

# Branch cleanup
DEFAULT_REMOTE = "origin"  # used when the current branch has no upstream
CLEANUP_TARGET_MERGED = "merged"


# Job runner
JOB_STATUS_SUCCESS = "success"
JOB_STATUS_FAILED = "failed"
JOB_STATUS_SKIPPED = "skipped"

# Job event log labels, keyed by job status
JOB_EVENT_LABELS = {
    JOB_STATUS_SUCCESS: "SUCCESS",
    JOB_STATUS_FAILED: "FAILED ",
    JOB_STATUS_SKIPPED: "SKIPPED",
}
