"""Git command execution for git-repo-keeper."""

import os
from typing import List, Optional, Sequence, Tuple

import git

from git_repo_keeper.exceptions import GitOperationError
from git_repo_keeper.utils.context import OperationContext, background
from git_repo_keeper.utils.logging import get_logger

logger = get_logger(__name__)

# Messages such as "no upstream configured" are matched on stderr
_GIT_ENV = {"LC_ALL": "C", "LANGUAGE": "C"}


def build_fetch_args(prune: bool) -> List[str]:
    args = ["fetch", "--all"]
    if prune:
        args.append("--prune")
    return args


def build_pull_args(autostash: bool) -> List[str]:
    args = ["pull", "--rebase"]
    if autostash:
        args.append("--autostash")
    return args


def build_submodule_args() -> List[str]:
    return ["submodule", "update", "--init", "--recursive", "--remote"]


def build_branch_delete_args(branch: str) -> List[str]:
    # -d refuses branches git does not consider merged
    return ["branch", "-d", branch]


def format_git_command(repo_path: str, args: Sequence[str]) -> str:
    """Render a git invocation the way a user would type it."""
    return " ".join(["git", "-C", repo_path, *args])


def combine_output(stdout: str, stderr: str) -> str:
    """Join stdout and stderr into one trimmed message."""
    parts = [part.strip() for part in (stdout, stderr) if part and part.strip()]
    return "\n".join(parts)


class GitCommands:
    """Runs git subcommands against a single working copy.

    Every invocation is equivalent to ``git -C <repo_path> <args>``, is
    checked against the operation context before it starts, and is killed
    if it outlives the context deadline.
    """

    def __init__(self, repo_path: str, context: Optional[OperationContext] = None):
        self.repo_path = os.path.normpath(repo_path)
        self.context = context or background()

    def _get_git(self) -> git.Git:
        """Get a git command wrapper bound to the working copy.

        A fresh wrapper per call keeps concurrent queries independent.
        """
        return git.Git(self.repo_path)

    def execute(self, *args: str) -> Tuple[int, str, str]:
        """Run git and return (status, stdout, stderr) without raising on non-zero exit.

        Raises:
            OperationCancelledError: If the context is cancelled or expired
            GitOperationError: If git itself could not be started
        """
        self.context.check()
        command = ["git", *args]
        logger.debug(f"Running: {format_git_command(self.repo_path, args)}")

        timeout = self.context.remaining()
        if os.name == "nt":
            # GitPython cannot kill a running command on Windows
            timeout = None

        try:
            status, stdout, stderr = self._get_git().execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
                kill_after_timeout=timeout,
                env=_GIT_ENV,
            )
        except git.exc.GitCommandNotFound as e:
            raise GitOperationError(" ".join(command), self.repo_path, str(e)) from e
        except OSError as e:
            # Popen failures other than a missing binary, e.g. an unreadable working directory
            raise GitOperationError(" ".join(command), self.repo_path, str(e)) from e

        if status != 0:
            # A command killed by the deadline reports as cancellation, not as a git failure
            self.context.check()
            logger.debug(f"git {' '.join(args)} exited with {status} in {self.repo_path}")

        return status, stdout, stderr

    def run(self, *args: str) -> str:
        """Run git and return stdout.

        Raises:
            GitOperationError: If git exits non-zero; the message carries the
                trimmed combined output
        """
        status, stdout, stderr = self.execute(*args)
        if status != 0:
            output = combine_output(stdout, stderr)
            message = f"exit status {status}"
            if output:
                message += f": {output}"
            raise GitOperationError(f"git {' '.join(args)}", self.repo_path, message)
        return stdout
