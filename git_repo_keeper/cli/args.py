"""Command-line argument parsing for git-repo-keeper."""

import argparse
from typing import List, Optional

from git_repo_keeper.__version__ import __version__


def _add_root_argument(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument("--root", default="~/src", help=help_text)


def _add_jobs_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=0,
        metavar="N",
        help="Number of repositories to process in parallel (default: auto-detect)",
    )


def _add_log_file_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--log-file", metavar="PATH", help="Write a job event log to this file")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the list, update and cleanup sub-commands."""
    parser = argparse.ArgumentParser(
        prog="git-repo-keeper",
        description="Discover git repositories under a directory and keep them up to date",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"git-repo-keeper {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="{list,update,cleanup}")
    subparsers.required = True

    list_parser = subparsers.add_parser("list", help="Show repositories and their status")
    _add_root_argument(list_parser, "Directory to scan (default: ~/src)")
    list_parser.add_argument(
        "--timeout", type=float, default=600.0, metavar="SECONDS", help="Give up after this many seconds"
    )

    update_parser = subparsers.add_parser("update", help="Fetch and safely pull every repository")
    _add_root_argument(update_parser, "Directory to update (default: ~/src)")
    _add_jobs_argument(update_parser)
    update_parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Preview mode - show the commands without running fetch/pull/submodule update",
    )
    update_parser.add_argument(
        "--prune",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Prune deleted remote branches while fetching (default: on)",
    )
    update_parser.add_argument(
        "--autostash",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Pass --autostash to git pull --rebase (default: off)",
    )
    submodule_group = update_parser.add_mutually_exclusive_group()
    submodule_group.add_argument(
        "--submodule",
        dest="submodule_update",
        action="store_true",
        default=False,
        help="Run git submodule update --init --recursive --remote",
    )
    submodule_group.add_argument(
        "--no-submodule",
        dest="submodule_update",
        action="store_false",
        help="Do not touch submodules (default)",
    )
    update_parser.add_argument(
        "--timeout", type=float, default=600.0, metavar="SECONDS", help="Give up after this many seconds"
    )
    _add_log_file_argument(update_parser)

    cleanup_parser = subparsers.add_parser(
        "cleanup", help="Delete local branches already merged into the default branch"
    )
    _add_root_argument(cleanup_parser, "Directory to clean up (default: ~/src)")
    _add_jobs_argument(cleanup_parser)
    cleanup_parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Preview mode - show the branches that would be deleted without deleting them",
    )
    cleanup_parser.add_argument(
        "--prune",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Prune deleted remote branches while fetching (default: on, never in dry-run)",
    )
    cleanup_parser.add_argument(
        "--exclude",
        dest="exclude_branches",
        action="append",
        default=[],
        metavar="BRANCH",
        help="Never delete this branch (repeatable)",
    )
    cleanup_parser.add_argument(
        "--timeout", type=float, default=600.0, metavar="SECONDS", help="Give up after this many seconds"
    )
    _add_log_file_argument(cleanup_parser)

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
