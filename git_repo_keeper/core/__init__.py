"""Core orchestration for git-repo-keeper."""

from .event_log import JobEventLog, open_event_log
from .job_runner import Job, JobResult, JobSummary, execute
from .repo_keeper import RepoKeeper

__all__ = ["Job", "JobResult", "JobSummary", "JobEventLog", "execute", "open_event_log", "RepoKeeper"]
