"""Service for detecting repository states that make an update unsafe"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from git_repo_keeper.constants import (
    SKIP_DEFAULT_BRANCH_DETECT_FAILED,
    SKIP_DETACHED,
    SKIP_DIRTY,
    SKIP_NON_DEFAULT_UPSTREAM,
    SKIP_STASH,
    SKIP_UPSTREAM_DETECT_FAILED,
    UNKNOWN_BRANCH,
)
from git_repo_keeper.exceptions import GitRepoKeeperError, RepoStateError
from git_repo_keeper.models.repository import RepoStateCheck
from git_repo_keeper.services.git.queries import RepoQueries
from git_repo_keeper.utils.context import OperationContext
from git_repo_keeper.utils.logging import get_logger

logger = get_logger(__name__)


class SafetyService:
    """Decides whether pull/rebase/submodule update may touch a working copy."""

    def __init__(self, repo_path: str, context: Optional[OperationContext] = None):
        self.queries = RepoQueries(repo_path, context)
        self.repo_path = self.queries.repo_path

    def check_state(self) -> RepoStateCheck:
        """Observe dirty, stash and detached-HEAD state concurrently.

        All three checks run to completion before this returns.

        Raises:
            RepoStateError: If any check failed; carries every failure
        """
        checks = [
            ("dirty", self.queries.is_dirty),
            ("has_stash", self.queries.has_stash),
            ("detached", self.queries.is_detached_head),
        ]

        with ThreadPoolExecutor(max_workers=len(checks), thread_name_prefix="state-check") as executor:
            futures = [executor.submit(check) for _, check in checks]

        values = {}
        errors: List[Exception] = []
        for (name, _), future in zip(checks, futures):
            try:
                values[name] = future.result()
            except GitRepoKeeperError as e:
                logger.debug(f"State check '{name}' failed for {self.repo_path}: {e}")
                errors.append(e)

        if errors:
            raise RepoStateError(errors)

        return RepoStateCheck(**values)

    def build_unsafe_messages(self, state: RepoStateCheck) -> List[str]:
        """Turn observed state into skip messages: dirty, stash, detached, then divergence."""
        messages = []

        if state.dirty:
            messages.append(SKIP_DIRTY)
        if state.has_stash:
            messages.append(SKIP_STASH)
        if state.detached:
            messages.append(SKIP_DETACHED)
        else:
            divergence = self.detect_non_default_tracking_branch()
            if divergence:
                messages.append(divergence)

        return messages

    def detect_non_default_tracking_branch(self) -> Optional[str]:
        """Check that the current branch tracks its remote's default branch.

        This check is advisory: lookup failures come back as a skip message
        instead of an exception.

        Returns:
            A skip message, or None when the branch tracks the default branch
            or has no upstream at all
        """
        try:
            upstream_ref = self.queries.get_upstream_ref()
        except GitRepoKeeperError as e:
            return f"{SKIP_UPSTREAM_DETECT_FAILED}: {e}"

        if upstream_ref is None:
            return None

        remote, sep, _ = upstream_ref.partition("/")
        if not sep or not remote.strip():
            return (
                f"{SKIP_UPSTREAM_DETECT_FAILED}: upstream ref {upstream_ref!r} "
                "is not in `<remote>/<branch>` form"
            )

        try:
            default_ref = self.queries.get_remote_default_ref(remote)
        except GitRepoKeeperError as e:
            return (
                f"{SKIP_DEFAULT_BRANCH_DETECT_FAILED}: {e}. "
                f"`refs/remotes/{remote}/HEAD` may be missing or broken; "
                f"run `git remote set-head {remote} -a` or `git fetch {remote}` and try again."
            )

        if default_ref == upstream_ref:
            return None

        branch = UNKNOWN_BRANCH
        try:
            current = self.queries.get_current_branch()
            if current:
                branch = current
        except GitRepoKeeperError as e:
            logger.debug(f"Could not read current branch for {self.repo_path}: {e}")

        logger.info(f"{self.repo_path}: {branch} tracks {upstream_ref}, remote default is {default_ref}")
        return (
            f"{SKIP_NON_DEFAULT_UPSTREAM} (current: {branch}, tracking: {upstream_ref}, "
            f"default: {default_ref}). Check out the default branch and run again."
        )

    def detect_unsafe_state(self) -> List[str]:
        """Return every reason an update would be unsafe right now (possibly none).

        Raises:
            RepoStateError: If the state checks could not observe the repository
        """
        state = self.check_state()
        return self.build_unsafe_messages(state)


def detect_unsafe_state(repo_path: str, context: Optional[OperationContext] = None) -> List[str]:
    """Return the reasons pull/submodule update is unsafe for ``repo_path``."""
    return SafetyService(repo_path, context).detect_unsafe_state()
