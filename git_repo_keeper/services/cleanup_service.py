"""Service for deleting local branches already merged into the remote default branch"""

from typing import List, Optional, Set

from git_repo_keeper.constants import (
    CLEANUP_TARGET_MERGED,
    DEFAULT_REMOTE,
    SKIP_CLEANUP_DEFAULT_BRANCH_FAILED,
    SKIP_CLEANUP_DETACHED,
    SKIP_CLEANUP_DIRTY,
    SKIP_CLEANUP_STASH,
    SKIP_CLEANUP_STATE_DETECT_FAILED,
    SKIP_NO_CLEANUP_TARGETS,
)
from git_repo_keeper.exceptions import GitOperationError, GitRepoKeeperError
from git_repo_keeper.models.repository import (
    CleanupOptions,
    CleanupPlan,
    CleanupResult,
    RepoStateCheck,
)
from git_repo_keeper.services.git.commands import (
    GitCommands,
    build_branch_delete_args,
    build_fetch_args,
    format_git_command,
)
from git_repo_keeper.services.safety_service import SafetyService
from git_repo_keeper.utils.context import OperationContext
from git_repo_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def build_cleanup_skip_messages(state: RepoStateCheck) -> List[str]:
    """Skip reasons for cleanup: dirty, stash, detached, in that order."""
    messages = []
    if state.dirty:
        messages.append(SKIP_CLEANUP_DIRTY)
    if state.has_stash:
        messages.append(SKIP_CLEANUP_STASH)
    if state.detached:
        messages.append(SKIP_CLEANUP_DETACHED)
    return messages


class CleanupService:
    """Deletes local branches merged into the remote default branch.

    Deletion uses ``git branch -d``, which refuses branches git does not
    consider merged. The same dirty/stash/detached gate as updates applies,
    the current branch and the default branch are never selected, and
    ``exclude_branches`` are always kept.
    """

    def __init__(
        self,
        repo_path: str,
        options: CleanupOptions,
        context: Optional[OperationContext] = None,
    ):
        self.commands = GitCommands(repo_path, context)
        self.repo_path = self.commands.repo_path
        self.options = options
        self.safety = SafetyService(self.repo_path, self.commands.context)
        self.queries = self.safety.queries

    def run(self) -> CleanupResult:
        """Run the cleanup.

        Returns:
            CleanupResult with the plan, deletions and skip messages

        Raises:
            GitRepoKeeperError: On a fatal failure; ``error.result`` holds the
                transcript recorded up to that point
        """
        result = CleanupResult(repo_path=self.repo_path, dry_run=self.options.dry_run)
        try:
            self._cleanup(result)
        except GitRepoKeeperError as e:
            e.result = result
            raise
        return result

    def _cleanup(self, result: CleanupResult) -> None:
        opts = self.options

        self._fetch(result)

        try:
            state = self.safety.check_state()
        except GitRepoKeeperError as e:
            if opts.dry_run:
                result.skipped_messages.append(f"{SKIP_CLEANUP_STATE_DETECT_FAILED}: {e}")
                return
            raise

        skip_messages = build_cleanup_skip_messages(state)
        if skip_messages:
            result.skipped_messages.extend(skip_messages)
            for message in skip_messages:
                logger.info(f"{self.repo_path}: {message}")
            return

        default_ref = self._detect_default_ref(result)
        if default_ref is None:
            return

        result.planned_deletes.extend(self._plan_merged(default_ref))
        if not result.planned_deletes:
            result.skipped_messages.append(SKIP_NO_CLEANUP_TARGETS)
            return

        for plan in result.planned_deletes:
            self._delete(result, plan)

        if result.errors:
            details = "; ".join(str(e) for e in result.errors)
            raise GitOperationError("branch delete", self.repo_path, details)

    def _fetch(self, result: CleanupResult) -> None:
        # Prune is left out of dry-run so the recorded plan deletes no remote refs
        args = build_fetch_args(self.options.prune and not self.options.dry_run)
        result.commands.append(format_git_command(self.repo_path, args))
        if self.options.dry_run:
            return
        try:
            self.commands.run(*args)
        except GitOperationError as e:
            raise GitOperationError("fetch", self.repo_path, e.message) from e

    def _detect_default_ref(self, result: CleanupResult) -> Optional[str]:
        """Resolve ``<remote>/<branch>`` for the remote default, or record a skip."""
        remote = DEFAULT_REMOTE
        try:
            upstream = self.queries.get_upstream_ref()
            if upstream and "/" in upstream:
                remote = upstream.split("/", 1)[0]
            return self.queries.get_remote_default_ref(remote)
        except GitRepoKeeperError as e:
            result.skipped_messages.append(
                f"{SKIP_CLEANUP_DEFAULT_BRANCH_FAILED}: {e}. "
                f"Run `git remote set-head {remote} -a` and try again."
            )
            return None

    def _protected_branches(self, default_ref: str) -> Set[str]:
        protected = {default_ref.split("/", 1)[1]}
        protected.update(b.strip() for b in self.options.exclude_branches if b.strip())
        protected.add(self.queries.get_current_branch())
        return protected

    def _plan_merged(self, default_ref: str) -> List[CleanupPlan]:
        protected = self._protected_branches(default_ref)
        plans = []
        for branch in self.queries.list_merged_branches(default_ref):
            if branch in protected:
                logger.debug(f"{self.repo_path}: keeping {branch}")
                continue
            plans.append(CleanupPlan(branch=branch, target=CLEANUP_TARGET_MERGED))
        return plans

    def _delete(self, result: CleanupResult, plan: CleanupPlan) -> None:
        args = build_branch_delete_args(plan.branch)
        result.commands.append(format_git_command(self.repo_path, args))
        if self.options.dry_run:
            return

        try:
            self.commands.run(*args)
        except GitOperationError as e:
            # One refused branch does not stop the others
            logger.debug(f"{self.repo_path}: could not delete {plan.branch}: {e}")
            result.errors.append(e)
            return

        result.deleted_branches.append(plan)
        logger.info(f"{self.repo_path}: deleted {plan.branch}")


def cleanup(
    repo_path: str, options: CleanupOptions, context: Optional[OperationContext] = None
) -> CleanupResult:
    """Delete local branches of ``repo_path`` that are merged into the remote default."""
    return CleanupService(repo_path, options, context).run()
