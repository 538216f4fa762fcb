"""Display and formatting service for repository information"""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_repo_keeper.constants import COLUMNS, JOB_STATUS_FAILED, STATUS_COLORS
from git_repo_keeper.exceptions import is_cancellation
from git_repo_keeper.models.job import JobSummary
from git_repo_keeper.models.repository import CleanupResult, RepoInfo, UpdateResult
from git_repo_keeper.services.status import status_label
from git_repo_keeper.utils.logging import get_logger

console = Console()
logger = get_logger(__name__)

RULE = "━" * 40


def format_ahead(info: RepoInfo) -> str:
    """Ahead count, or "-" when the branch has no upstream to be ahead of."""
    return str(info.ahead) if info.has_upstream else "-"


class DisplayService:
    def __init__(self, verbose: bool = False, debug: bool = False):
        self.verbose = verbose
        self.debug_mode = debug

    def display_repo_table(self, repos: List[RepoInfo]) -> None:
        """Display a table of repository status."""
        table = Table()

        for col in COLUMNS:
            table.add_column(col.label, min_width=col.width or None)

        for info in repos:
            color = STATUS_COLORS.get(info.status.value)
            label = status_label(info.status)
            status_text = f"[{color}]{label}[/{color}]" if color else label
            table.add_row(escape(info.name), status_text, format_ahead(info), escape(info.path))

        console.print(table)

    def _display_header(self, name: str) -> None:
        console.print(RULE)
        console.print(f"📁 {escape(name)}")
        console.print(RULE)

    def _display_outcome(self, error: Optional[BaseException]) -> None:
        if error is None:
            console.print("  [green]✅ done[/green]\n")
        elif is_cancellation(error):
            console.print(f"  [yellow]⚪ skipped: {escape(str(error))}[/yellow]\n")
        else:
            console.print(f"  [red]❌ failed: {escape(str(error))}[/red]\n")

    def display_update_result(
        self, name: str, result: Optional[UpdateResult], error: Optional[BaseException]
    ) -> None:
        """Display the transcript of one repository update."""
        self._display_header(name)

        if result is not None:
            for command in result.commands:
                console.print(f"  $ {escape(command)}")
            for message in result.skipped_messages:
                console.print(f"  [yellow]⚪ {escape(message)}[/yellow]")

        self._display_outcome(error)

    def display_cleanup_result(
        self, name: str, result: Optional[CleanupResult], error: Optional[BaseException]
    ) -> None:
        """Display the transcript of one branch cleanup."""
        self._display_header(name)

        if result is not None:
            for command in result.commands:
                console.print(f"  $ {escape(command)}")
            if result.dry_run:
                for plan in result.planned_deletes:
                    console.print(f"  📝 would delete: {escape(plan.branch)} ({plan.target})")
            for deleted in result.deleted_branches:
                console.print(f"  🗑️  deleted: {escape(deleted.branch)} ({deleted.target})")
            for message in result.skipped_messages:
                console.print(f"  [yellow]⚪ {escape(message)}[/yellow]")
            for err in result.errors:
                console.print(f"  [red]❌ {escape(str(err))}[/red]")

        self._display_outcome(error)

    def display_summary(self, summary: JobSummary, title: str = "repo update") -> None:
        """Display counts for an update or cleanup run."""
        console.print(RULE)
        console.print(f"📊 {title} summary")
        console.print(RULE)
        console.print(f"  Total:   {summary.total}")
        console.print(f"  Success: {summary.success}")
        console.print(f"  Failed:  {summary.failed}")
        console.print(f"  Skipped: {summary.skipped}")
        console.print()

    def display_failed_jobs(self, summary: JobSummary) -> None:
        """List failed jobs with their errors."""
        failed = [r for r in summary.results if r.status == JOB_STATUS_FAILED]
        if not failed:
            return

        console.print("[red]Failed repositories:[/red]")
        for job_result in failed:
            console.print(f"  [red]✗ {escape(job_result.name)}: {escape(str(job_result.error))}[/red]")
        console.print()
