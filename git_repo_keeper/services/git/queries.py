"""Read-only repository queries for git-repo-keeper."""

from typing import List, Optional, Tuple

from git_repo_keeper.constants import (
    DETACHED_HEAD_NAME,
    NO_UPSTREAM_MARKERS,
    REMOTE_REFS_PREFIX,
)
from git_repo_keeper.exceptions import GitOperationError
from git_repo_keeper.services.git.commands import GitCommands, combine_output
from git_repo_keeper.utils.context import OperationContext
from git_repo_keeper.utils.logging import get_logger

logger = get_logger(__name__)

UPSTREAM_ARGS = ("rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}")


def is_no_upstream_error(stderr: str) -> bool:
    """Check whether git's stderr means "this branch has no upstream"."""
    message = stderr.lower()
    return any(marker in message for marker in NO_UPSTREAM_MARKERS)


class RepoQueries:
    """Service for observing the state of one working copy.

    None of these queries change the repository, and none of them cache:
    every call asks git again.
    """

    def __init__(self, repo_path: str, context: Optional[OperationContext] = None):
        self.commands = GitCommands(repo_path, context)
        self.repo_path = self.commands.repo_path

    def is_dirty(self) -> bool:
        """Check for tracked or untracked changes."""
        output = self.commands.run("status", "--porcelain")
        return output.strip() != ""

    def has_stash(self) -> bool:
        """Check whether at least one stash entry exists."""
        output = self.commands.run("stash", "list")
        return output.strip() != ""

    def get_current_branch(self) -> str:
        """Get the checked-out branch name ("HEAD" when detached)."""
        return self.commands.run("rev-parse", "--abbrev-ref", "HEAD").strip()

    def is_detached_head(self) -> bool:
        """Check whether HEAD is detached from any named branch."""
        return self.get_current_branch() == DETACHED_HEAD_NAME

    def get_upstream_ref(self) -> Optional[str]:
        """Get the upstream of the current branch in ``<remote>/<branch>`` form.

        Returns:
            The upstream ref, or None when no upstream is configured

        Raises:
            GitOperationError: If the lookup fails for any other reason
        """
        status, stdout, stderr = self.commands.execute(*UPSTREAM_ARGS)
        if status != 0:
            if is_no_upstream_error(stderr):
                return None
            message = f"exit status {status}"
            output = combine_output("", stderr)
            if output:
                message += f": {output}"
            raise GitOperationError(f"git {' '.join(UPSTREAM_ARGS)}", self.repo_path, message)

        ref = stdout.strip()
        if not ref:
            raise GitOperationError(
                f"git {' '.join(UPSTREAM_ARGS)}", self.repo_path, "upstream lookup returned no output"
            )
        return ref

    def get_remote_default_ref(self, remote: str) -> str:
        """Get the default branch of ``remote`` as recorded in refs/remotes/<remote>/HEAD.

        Returns:
            The default ref in ``<remote>/<branch>`` form
        """
        ref_name = f"{REMOTE_REFS_PREFIX}{remote}/HEAD"
        output = self.commands.run("symbolic-ref", "--quiet", ref_name).strip()

        ref = output[len(REMOTE_REFS_PREFIX):] if output.startswith(REMOTE_REFS_PREFIX) else output
        if not ref:
            raise GitOperationError(
                f"git symbolic-ref --quiet {ref_name}", self.repo_path, "default branch lookup returned no output"
            )
        return ref

    def get_ahead_count(self) -> Tuple[bool, int]:
        """Get (has_upstream, commits ahead of upstream) for the current branch."""
        if self.get_upstream_ref() is None:
            return False, 0

        output = self.commands.run("rev-list", "--count", "@{u}..HEAD").strip()
        try:
            ahead = int(output)
        except ValueError as e:
            raise GitOperationError(
                "git rev-list --count @{u}..HEAD", self.repo_path, f"could not parse ahead count {output!r}"
            ) from e

        logger.debug(f"{self.repo_path} is {ahead} commit(s) ahead of upstream")
        return True, ahead

    def list_merged_branches(self, target_ref: str) -> List[str]:
        """Get local branches whose tips are reachable from ``target_ref``."""
        output = self.commands.run("branch", "--format=%(refname:short)", "--merged", target_ref)
        return [line.strip() for line in output.splitlines() if line.strip()]

    def local_branch_exists(self, branch: str) -> bool:
        """Check whether ``refs/heads/<branch>`` exists.

        Raises:
            GitOperationError: If the lookup fails for a reason other than a
                missing branch (for example, not a git repository)
        """
        args = ("show-ref", "--verify", "--quiet", f"refs/heads/{branch}")
        status, stdout, stderr = self.commands.execute(*args)
        if status == 0:
            return True
        if status == 1 and not stderr.strip():
            return False
        raise GitOperationError(
            f"git {' '.join(args)}", self.repo_path, f"exit status {status}: {combine_output(stdout, stderr)}"
        )
