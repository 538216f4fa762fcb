"""Discovery of git working copies under a root directory."""

import os
from typing import List

from git_repo_keeper.constants import GIT_METADATA_NAME, GITDIR_PREFIX
from git_repo_keeper.exceptions import InvalidRootError
from git_repo_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def resolve_root(root: str) -> str:
    """Expand a leading ``~`` or ``~/`` and normalize the path.

    ``~user/`` forms are left untouched.

    Raises:
        InvalidRootError: If root is empty or blank
    """
    if not root or not root.strip():
        raise InvalidRootError(root, "root directory is empty")

    resolved = root
    if resolved == "~" or resolved.startswith("~/"):
        home = os.path.expanduser("~")
        if home == "~":
            raise InvalidRootError(root, "could not determine the home directory")
        resolved = home if resolved == "~" else os.path.join(home, resolved[2:])

    return os.path.normpath(os.path.abspath(resolved))


def validate_root(root: str) -> None:
    """Ensure root exists and is a directory.

    Raises:
        InvalidRootError: If root is missing or not a directory
    """
    if not os.path.exists(root):
        raise InvalidRootError(root, f"root directory not found: {root}")
    if not os.path.isdir(root):
        raise InvalidRootError(root, f"root path is not a directory: {root}")


def has_git_metadata(path: str) -> bool:
    """Check whether ``path`` holds git metadata.

    True for a ``.git`` directory, or for a ``.git`` file holding a
    ``gitdir: <path>`` pointer (worktrees and submodules).
    """
    git_path = os.path.join(path, GIT_METADATA_NAME)

    if os.path.isdir(git_path):
        return True
    if not os.path.isfile(git_path):
        return False

    try:
        with open(git_path, encoding="utf-8", errors="replace") as f:
            line = f.read().strip()
    except OSError as e:
        logger.debug(f"Could not read {git_path}: {e}")
        return False

    if not line.startswith(GITDIR_PREFIX):
        return False

    return line[len(GITDIR_PREFIX):].strip() != ""


def discover(root: str) -> List[str]:
    """Find git working copies at ``root`` and in its immediate child directories.

    The root itself is included when it is a working copy. Grandchildren are
    never visited.

    Args:
        root: Directory to scan; a leading ``~/`` is expanded

    Returns:
        Sorted list of normalized repository paths

    Raises:
        InvalidRootError: If root is empty, missing or not a directory
    """
    resolved_root = resolve_root(root)
    validate_root(resolved_root)

    result = []
    if has_git_metadata(resolved_root):
        result.append(resolved_root)

    try:
        entries = list(os.scandir(resolved_root))
    except OSError as e:
        raise InvalidRootError(root, f"could not read root directory {resolved_root}: {e}") from e

    for entry in entries:
        # Symlinked children are skipped; they can alias a repository listed elsewhere
        if not entry.is_dir(follow_symlinks=False):
            continue
        candidate = os.path.join(resolved_root, entry.name)
        if has_git_metadata(candidate):
            result.append(candidate)

    result.sort()
    logger.debug(f"Discovered {len(result)} repositories under {resolved_root}")
    return result
