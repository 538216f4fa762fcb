"""Repository services for git-repo-keeper."""

from .discovery import discover
from .status import classify_status, status_label
from .safety_service import SafetyService, detect_unsafe_state
from .update_service import UpdateService, update
from .cleanup_service import CleanupService, cleanup
from .repository_service import inspect, list_repositories

__all__ = [
    "discover",
    "classify_status",
    "status_label",
    "SafetyService",
    "detect_unsafe_state",
    "UpdateService",
    "update",
    "CleanupService",
    "cleanup",
    "inspect",
    "list_repositories",
]
