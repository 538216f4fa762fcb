"""Custom exceptions for git-repo-keeper"""

from typing import List, Optional, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from git_repo_keeper.models.repository import CleanupResult, UpdateResult


class GitRepoKeeperError(Exception):
    """Base exception for all git-repo-keeper errors."""

    # Partial transcript, set when the error aborts a repository update or cleanup
    result: Optional[Union["UpdateResult", "CleanupResult"]] = None


class InvalidRootError(GitRepoKeeperError):
    """Exception raised when the discovery root is empty, missing or not a directory."""

    def __init__(self, root: str, message: str):
        self.root = root
        self.message = message
        super().__init__(message)


class GitOperationError(GitRepoKeeperError):
    """Exception raised for errors in Git operations."""

    def __init__(
        self, operation: str, repo_path: Optional[str] = None, message: Optional[str] = None
    ):
        self.operation = operation
        self.repo_path = repo_path
        self.message = message

        error_msg = f"{operation} failed"
        if repo_path:
            error_msg += f" in {repo_path}"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class RepoStateError(GitRepoKeeperError):
    """Exception raised when one or more repository state checks fail.

    Every underlying failure is kept in ``errors``; none is dropped in favour
    of the first one.
    """

    def __init__(self, errors: List[Exception]):
        self.errors = list(errors)
        details = "; ".join(str(e) for e in self.errors)
        super().__init__(f"repository state check failed: {details}")

    @property
    def cancelled(self) -> bool:
        """True when a check failed because the operation was cancelled."""
        return any(isinstance(e, OperationCancelledError) for e in self.errors)


class OperationCancelledError(GitRepoKeeperError):
    """Exception raised when an operation is cancelled or its deadline passes."""

    def __init__(self, reason: str = "operation cancelled"):
        self.reason = reason
        super().__init__(reason)


def is_cancellation(error: Optional[BaseException]) -> bool:
    """Check whether an error only means the run was cancelled or timed out."""
    if isinstance(error, OperationCancelledError):
        return True
    if isinstance(error, RepoStateError):
        return error.cancelled
    return False
