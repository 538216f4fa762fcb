"""Command-line interface for git-repo-keeper"""

import signal
import sys
from typing import List, Optional

from rich.console import Console

from git_repo_keeper.cli.args import parse_args
from git_repo_keeper.config import Config
from git_repo_keeper.core.repo_keeper import RepoKeeper
from git_repo_keeper.exceptions import GitRepoKeeperError
from git_repo_keeper.utils.context import OperationContext
from git_repo_keeper.utils.logging import get_logger, setup_logging

console = Console()
logger = get_logger(__name__)

# Context of the running command, cancelled on Ctrl+C
_active_context: Optional[OperationContext] = None

FAILURE_VERBS = {"update": "update", "cleanup": "clean up"}


def _signal_handler(signum, frame):
    """Cancel pending repositories; running git commands finish or time out."""
    if signum == signal.SIGINT and _active_context is not None and not _active_context.cancelled:
        console.print("\n[yellow]Interrupted! Waiting for running git commands to finish...[/yellow]")
        _active_context.cancel()
        return
    raise KeyboardInterrupt


def build_config(parsed_args) -> Config:
    """Build config from parsed arguments."""
    values = {
        "root": parsed_args.root,
        "timeout": parsed_args.timeout,
        "verbose": parsed_args.verbose,
        "debug": parsed_args.debug,
    }
    if parsed_args.command in ("update", "cleanup"):
        values.update(
            jobs=parsed_args.jobs,
            dry_run=parsed_args.dry_run,
            prune=parsed_args.prune,
            log_file=parsed_args.log_file,
        )
    if parsed_args.command == "update":
        values.update(
            autostash=parsed_args.autostash,
            submodule_update=parsed_args.submodule_update,
        )
    elif parsed_args.command == "cleanup":
        values["exclude_branches"] = list(parsed_args.exclude_branches)
    return Config(**values)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    global _active_context

    parsed_args = parse_args(argv)
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        config = build_config(parsed_args)

        if parsed_args.debug:
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        _active_context = OperationContext(timeout=config.timeout)
        previous_handler = signal.signal(signal.SIGINT, _signal_handler)
        try:
            keeper = RepoKeeper(config, _active_context)

            if parsed_args.command == "list":
                keeper.list_repositories()
                return 0

            if parsed_args.command == "cleanup":
                summary = keeper.cleanup_all()
            else:
                summary = keeper.update_all()
        finally:
            signal.signal(signal.SIGINT, previous_handler)

        if summary.failed > 0:
            verb = FAILURE_VERBS[parsed_args.command]
            console.print(f"[red]{summary.failed} repositories failed to {verb}[/red]")
            return 1
        if summary.skipped > 0:
            console.print(f"[yellow]{summary.skipped} repositories skipped (cancelled or timed out)[/yellow]")
            return 1

        console.print(f"[green]✅ Repository {parsed_args.command} complete[/green]")
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except (GitRepoKeeperError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1
    finally:
        _active_context = None


if __name__ == "__main__":
    sys.exit(main())
