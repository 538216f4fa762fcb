"""Repository models and related enums"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


class Status(Enum):
    """Synchronization status of a working copy."""

    CLEAN = "clean"
    DIRTY = "dirty"
    UNPUSHED = "unpushed"
    NO_UPSTREAM = "no_upstream"


@dataclass(frozen=True)
class UpdateOptions:
    """Options for one repository update run."""

    prune: bool = False  # passed to fetch
    autostash: bool = False  # passed to pull
    submodule_update: bool = False  # gates the submodule step entirely
    dry_run: bool = False  # record commands without running mutating ones


@dataclass
class UpdateResult:
    """Transcript of one repository update.

    ``commands`` holds every command that ran or would have run, in order.
    When ``skipped_messages`` is non-empty no mutating command was executed.
    """

    repo_path: str
    commands: List[str] = field(default_factory=list)
    skipped_messages: List[str] = field(default_factory=list)
    upstream_checked: bool = False
    has_upstream: bool = False

    @property
    def skipped(self) -> bool:
        return bool(self.skipped_messages)


@dataclass
class RepoStateCheck:
    """Safety facts observed together for one working copy."""

    dirty: bool = False
    has_stash: bool = False
    detached: bool = False


@dataclass
class RepoInfo:
    """Reported state of a single repository."""

    name: str
    path: str
    status: Status
    dirty: bool
    ahead: int
    has_upstream: bool


@dataclass(frozen=True)
class CleanupOptions:
    """Options for one branch cleanup run."""

    prune: bool = False  # passed to fetch outside dry-run
    dry_run: bool = False
    exclude_branches: Tuple[str, ...] = ()


@dataclass
class CleanupPlan:
    """A local branch chosen for deletion."""

    branch: str
    target: str


@dataclass
class CleanupResult:
    """Transcript of one branch cleanup.

    ``planned_deletes`` lists every branch selected for deletion, and
    ``deleted_branches`` the ones actually deleted (always empty in dry-run).
    """

    repo_path: str
    dry_run: bool = False
    commands: List[str] = field(default_factory=list)
    planned_deletes: List[CleanupPlan] = field(default_factory=list)
    deleted_branches: List[CleanupPlan] = field(default_factory=list)
    skipped_messages: List[str] = field(default_factory=list)
    errors: List[Exception] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return bool(self.skipped_messages)
