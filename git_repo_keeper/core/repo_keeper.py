"""Core functionality for git-repo-keeper"""

import os
import threading
from collections import Counter
from typing import Any, Callable, Dict, List, Optional, Union

from rich.console import Console

from git_repo_keeper.config import Config
from git_repo_keeper.core.event_log import open_event_log
from git_repo_keeper.core.job_runner import Job, execute
from git_repo_keeper.models.job import JobSummary
from git_repo_keeper.models.repository import RepoInfo
from git_repo_keeper.services.cleanup_service import cleanup
from git_repo_keeper.services.discovery import discover, resolve_root
from git_repo_keeper.services.display_service import DisplayService
from git_repo_keeper.services.repository_service import list_repositories
from git_repo_keeper.services.update_service import update
from git_repo_keeper.utils.context import OperationContext
from git_repo_keeper.utils.logging import get_logger
from git_repo_keeper.utils.threading import get_optimal_worker_count

console = Console()
logger = get_logger(__name__)


def build_display_name(root: str, repo_path: str) -> str:
    """Name a repository by its path relative to root, using "/" separators.

    The root itself is ".", and paths outside root fall back to the basename.
    """
    clean_path = os.path.normpath(repo_path)
    try:
        rel = os.path.normpath(os.path.relpath(clean_path, root))
    except ValueError:
        # Different drives on Windows
        return os.path.basename(clean_path)

    if rel == ".":
        return rel
    if not rel or rel == ".." or rel.startswith(".." + os.sep):
        return os.path.basename(clean_path)

    return rel.replace(os.sep, "/")


def build_display_names(root: str, repo_paths: List[str]) -> Dict[str, str]:
    """Map each path to a display name, using the full path where names collide."""
    names = {path: build_display_name(root, path) for path in repo_paths}
    counts = Counter(names.values())
    return {
        path: (os.path.normpath(path) if counts[name] > 1 else name)
        for path, name in names.items()
    }


class RepoKeeper:
    """Main class for listing, updating and cleaning up a set of repositories."""

    def __init__(self, config: Union[Config, dict], context: Optional[OperationContext] = None):
        """Initialize RepoKeeper.

        Args:
            config: Configuration dict or Config object
            context: Cancellation context shared by every job; a new one
                bounded by ``config.timeout`` is created when omitted
        """
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config
        self.verbose = self.config.verbose
        self.debug_mode = self.config.debug
        self.context = context or OperationContext(timeout=self.config.timeout)
        self.display_service = DisplayService(verbose=self.verbose, debug=self.debug_mode)
        self._output_lock = threading.Lock()

    def list_repositories(self) -> List[RepoInfo]:
        """Discover, inspect and display every repository under the root."""
        repos = list_repositories(self.config.root, self.context)

        if not repos:
            console.print(f"📝 No repositories found: {self.config.root}")
            return repos

        console.print(f"📦 Repositories ({len(repos)})\n")
        self.display_service.display_repo_table(repos)
        return repos

    def build_update_jobs(self, repo_paths: List[str]) -> List[Job]:
        """Create one update job per repository, printing each transcript as it finishes."""
        options = self.config.update_options()
        return self._build_jobs(
            repo_paths,
            lambda repo_path, context: update(repo_path, options, context),
            self.display_service.display_update_result,
        )

    def build_cleanup_jobs(self, repo_paths: List[str]) -> List[Job]:
        """Create one cleanup job per repository, printing each transcript as it finishes."""
        options = self.config.cleanup_options()
        return self._build_jobs(
            repo_paths,
            lambda repo_path, context: cleanup(repo_path, options, context),
            self.display_service.display_cleanup_result,
        )

    def _build_jobs(
        self,
        repo_paths: List[str],
        step: Callable[[str, OperationContext], Any],
        display: Callable[[str, Any, Optional[BaseException]], None],
    ) -> List[Job]:
        display_names = build_display_names(resolve_root(self.config.root), repo_paths)
        jobs = []

        for repo_path in repo_paths:
            name = display_names[repo_path]

            def run(context: OperationContext, repo_path: str = repo_path, name: str = name):
                result, error = None, None
                try:
                    result = step(repo_path, context)
                except Exception as e:
                    result, error = getattr(e, "result", None), e
                    raise
                finally:
                    with self._output_lock:
                        display(name, result, error)

            jobs.append(Job(name=name, run=run))

        return jobs

    def update_all(self) -> JobSummary:
        """Update every repository under the root and display a summary."""
        return self._run_all("update", "🔄 Updating", self.build_update_jobs)

    def cleanup_all(self) -> JobSummary:
        """Delete merged branches in every repository under the root and display a summary."""
        return self._run_all("cleanup", "🧹 Cleaning up", self.build_cleanup_jobs)

    def _run_all(
        self, action: str, heading: str, build_jobs: Callable[[List[str]], List[Job]]
    ) -> JobSummary:
        repo_paths = discover(self.config.root)
        if not repo_paths:
            console.print(f"📝 No repositories to {action}: {self.config.root}")
            return JobSummary()

        workers = get_optimal_worker_count(self.config.jobs or None, len(repo_paths))
        console.print(f"{heading} {len(repo_paths)} repositories (parallel={workers})")
        if self.config.dry_run:
            console.print("📋 Dry run: nothing will be changed")
        console.print()

        event_log = open_event_log(self.config.log_file)
        try:
            summary = execute(build_jobs(repo_paths), workers, self.context, event_log)
        finally:
            if event_log is not None:
                event_log.close()

        self.display_service.display_summary(summary, f"repo {action}")
        self.display_service.display_failed_jobs(summary)
        if event_log is not None:
            console.print(f"📝 Job log written to {event_log.path}\n")
        return summary
