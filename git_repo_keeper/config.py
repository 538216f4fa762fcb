"""Configuration handling for git-repo-keeper"""

from dataclasses import dataclass, field, fields
from typing import List, Optional

from git_repo_keeper.models.repository import CleanupOptions, UpdateOptions


@dataclass
class Config:
    """Configuration for git-repo-keeper with validation."""

    # Discovery
    root: str = "~/src"

    # Update behaviour
    prune: bool = True
    autostash: bool = False
    submodule_update: bool = False
    dry_run: bool = False

    # Cleanup
    exclude_branches: List[str] = field(default_factory=list)  # never deleted by cleanup

    # Execution
    jobs: int = 0  # 0 = auto-detect from CPU count
    timeout: Optional[float] = 600.0  # seconds for the whole run, None = no deadline
    log_file: Optional[str] = None  # job event log for update/cleanup runs
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_root()
        self._validate_jobs()
        self._validate_timeout()

    def _validate_root(self):
        """Validate root is not empty."""
        if not self.root or not self.root.strip():
            raise ValueError("root cannot be empty")
        self.root = self.root.strip()

    def _validate_jobs(self):
        """Validate jobs is not negative."""
        if self.jobs < 0:
            raise ValueError(f"jobs must be zero or positive, got {self.jobs}")

    def _validate_timeout(self):
        """Validate timeout is positive when set."""
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def update_options(self) -> UpdateOptions:
        """Build the per-repository update options from this config."""
        return UpdateOptions(
            prune=self.prune,
            autostash=self.autostash,
            submodule_update=self.submodule_update,
            dry_run=self.dry_run,
        )

    def cleanup_options(self) -> CleanupOptions:
        """Build the per-repository cleanup options from this config."""
        return CleanupOptions(
            prune=self.prune,
            dry_run=self.dry_run,
            exclude_branches=tuple(self.exclude_branches),
        )

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def get(self, key: str, default=None):
        """Get config value by key, dict style."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
