"""Service for inspecting and listing repositories"""

import os
from typing import List, Optional

from git_repo_keeper.exceptions import GitOperationError, GitRepoKeeperError, OperationCancelledError
from git_repo_keeper.models.repository import RepoInfo
from git_repo_keeper.services.discovery import discover
from git_repo_keeper.services.git.queries import RepoQueries
from git_repo_keeper.services.status import classify_status
from git_repo_keeper.utils.context import OperationContext
from git_repo_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def inspect(repo_path: str, context: Optional[OperationContext] = None) -> RepoInfo:
    """Observe one repository and classify it.

    Raises:
        GitOperationError: If the dirty or upstream state could not be read
    """
    queries = RepoQueries(repo_path, context)
    path = queries.repo_path

    try:
        dirty = queries.is_dirty()
    except OperationCancelledError:
        raise
    except GitRepoKeeperError as e:
        raise GitOperationError("read working tree state", path, str(e)) from e

    try:
        has_upstream, ahead = queries.get_ahead_count()
    except OperationCancelledError:
        raise
    except GitRepoKeeperError as e:
        raise GitOperationError("read tracking state", path, str(e)) from e

    status = classify_status(dirty, has_upstream, ahead)
    logger.debug(f"{path}: {status.value} (dirty={dirty}, upstream={has_upstream}, ahead={ahead})")

    return RepoInfo(
        name=os.path.basename(path),
        path=path,
        status=status,
        dirty=dirty,
        ahead=ahead,
        has_upstream=has_upstream,
    )


def list_repositories(root: str, context: Optional[OperationContext] = None) -> List[RepoInfo]:
    """Discover repositories under ``root`` and inspect each one, sorted by name."""
    infos = [inspect(path, context) for path in discover(root)]
    infos.sort(key=lambda info: info.name)
    return infos
