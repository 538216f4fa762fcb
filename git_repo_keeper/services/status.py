"""Repository status classification."""

from git_repo_keeper.constants import STATUS_DISPLAY, STATUS_UNKNOWN
from git_repo_keeper.models.repository import Status


def classify_status(dirty: bool, has_upstream: bool, ahead: int) -> Status:
    """
    Classify a working copy from its observed facts.

    Precedence is DIRTY > NO_UPSTREAM > UNPUSHED > CLEAN. A zero or negative
    ahead count is CLEAN.

    Args:
        dirty: Tracked or untracked changes exist
        has_upstream: The current branch has an upstream configured
        ahead: Commits on HEAD not on the upstream

    Returns:
        Status enum value
    """
    if dirty:
        return Status.DIRTY
    if not has_upstream:
        return Status.NO_UPSTREAM
    if ahead > 0:
        return Status.UNPUSHED
    return Status.CLEAN


def status_label(status) -> str:
    """Display text for a status; anything unrecognized renders as "unknown"."""
    if not isinstance(status, Status):
        return STATUS_UNKNOWN
    return STATUS_DISPLAY.get(status.value, STATUS_UNKNOWN)
