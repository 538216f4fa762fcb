"""Safety-gated repository update service"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, List, Optional, Tuple

from git_repo_keeper.constants import (
    SKIP_NO_UPSTREAM,
    SKIP_STATE_DETECT_FAILED,
    SKIP_UPSTREAM_CHECK_FAILED,
)
from git_repo_keeper.exceptions import (
    GitOperationError,
    GitRepoKeeperError,
    OperationCancelledError,
)
from git_repo_keeper.models.repository import UpdateOptions, UpdateResult
from git_repo_keeper.services.git.commands import (
    GitCommands,
    build_fetch_args,
    build_pull_args,
    build_submodule_args,
    format_git_command,
)
from git_repo_keeper.services.safety_service import SafetyService
from git_repo_keeper.utils.context import OperationContext
from git_repo_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def _outcome(future: Future) -> Tuple[Any, Optional[GitRepoKeeperError]]:
    """Return (value, None) or (None, error) for a finished future."""
    try:
        return future.result(), None
    except GitRepoKeeperError as e:
        return None, e


class UpdateService:
    """Brings one working copy up to date without risking local work.

    The run goes fetch, then safety and upstream checks side by side, then
    either stops with skip messages or continues with pull and the optional
    submodule update. Every command that ran or would run is recorded in the
    result, in order.
    """

    def __init__(
        self,
        repo_path: str,
        options: UpdateOptions,
        context: Optional[OperationContext] = None,
    ):
        self.commands = GitCommands(repo_path, context)
        self.repo_path = self.commands.repo_path
        self.context = self.commands.context
        self.options = options
        self.safety = SafetyService(self.repo_path, self.context)

    def run(self) -> UpdateResult:
        """Run the update.

        Returns:
            UpdateResult with every recorded command and skip message

        Raises:
            GitRepoKeeperError: On a fatal failure; ``error.result`` holds the
                transcript recorded up to that point
        """
        result = UpdateResult(repo_path=self.repo_path)
        try:
            self._update(result)
        except GitRepoKeeperError as e:
            e.result = result
            raise
        return result

    def _update(self, result: UpdateResult) -> None:
        opts = self.options

        self._fetch(result)

        # Both checks only read the repository, so they run side by side.
        # The upstream answer is used only if the safety check lets us through.
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="update-check") as executor:
            state_future = executor.submit(self.safety.detect_unsafe_state)
            upstream_future = executor.submit(self.safety.queries.get_ahead_count)

        skip_messages, state_error = _outcome(state_future)
        upstream, upstream_error = _outcome(upstream_future)

        if state_error is not None:
            if opts.dry_run:
                result.skipped_messages.append(f"{SKIP_STATE_DETECT_FAILED}: {state_error}")
                logger.info(f"{self.repo_path}: {result.skipped_messages[-1]}")
                return
            raise state_error

        if skip_messages:
            result.skipped_messages.extend(skip_messages)
            for message in skip_messages:
                logger.info(f"{self.repo_path}: {message}")
            return

        if upstream_error is not None:
            if not opts.dry_run:
                if isinstance(upstream_error, OperationCancelledError):
                    raise upstream_error
                raise GitOperationError("upstream check", self.repo_path, str(upstream_error)) from upstream_error
            result.skipped_messages.append(f"{SKIP_UPSTREAM_CHECK_FAILED}: {upstream_error}")
        else:
            result.upstream_checked = True
            result.has_upstream = upstream[0]

        self._pull(result)
        self._update_submodules(result)

    def _record(self, result: UpdateResult, args: List[str]) -> None:
        command = format_git_command(self.repo_path, args)
        result.commands.append(command)
        logger.debug(f"{'Planned' if self.options.dry_run else 'Running'}: {command}")

    def _run_step(self, step: str, args: List[str]) -> None:
        """Run a mutating step; a non-zero exit aborts the update."""
        try:
            self.commands.run(*args)
        except GitOperationError as e:
            raise GitOperationError(step, self.repo_path, e.message) from e

    def _fetch(self, result: UpdateResult) -> None:
        # Without fresh remote refs the safety checks would judge stale state
        args = build_fetch_args(self.options.prune)
        self._record(result, args)
        if not self.options.dry_run:
            self._run_step("fetch", args)

    def _pull(self, result: UpdateResult) -> None:
        opts = self.options
        args = build_pull_args(opts.autostash)

        if opts.dry_run:
            if not result.upstream_checked:
                return
            if result.has_upstream:
                self._record(result, args)
            else:
                result.skipped_messages.append(SKIP_NO_UPSTREAM)
            return

        if result.has_upstream:
            self._record(result, args)
            self._run_step("pull", args)
        else:
            result.skipped_messages.append(SKIP_NO_UPSTREAM)
            logger.info(f"{self.repo_path}: {SKIP_NO_UPSTREAM}")

    def _update_submodules(self, result: UpdateResult) -> None:
        if not self.options.submodule_update:
            return

        args = build_submodule_args()
        self._record(result, args)
        if not self.options.dry_run:
            self._run_step("submodule update", args)


def update(
    repo_path: str, options: UpdateOptions, context: Optional[OperationContext] = None
) -> UpdateResult:
    """Fetch, check, and (when safe) pull and update submodules for one repository."""
    return UpdateService(repo_path, options, context).run()
