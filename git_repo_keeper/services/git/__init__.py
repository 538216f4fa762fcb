"""Git-related services for git-repo-keeper."""

from .commands import (
    GitCommands,
    build_branch_delete_args,
    build_fetch_args,
    build_pull_args,
    build_submodule_args,
    format_git_command,
)
from .queries import RepoQueries, is_no_upstream_error

__all__ = [
    "GitCommands",
    "RepoQueries",
    "build_branch_delete_args",
    "build_fetch_args",
    "build_pull_args",
    "build_submodule_args",
    "format_git_command",
    "is_no_upstream_error",
]
