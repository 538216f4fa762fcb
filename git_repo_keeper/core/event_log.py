"""Per-run job event log written with --log-file."""

import logging
import time
from datetime import datetime
from typing import Optional

from git_repo_keeper.constants import JOB_EVENT_LABELS
from git_repo_keeper.exceptions import GitRepoKeeperError
from git_repo_keeper.models.job import JobResult, JobSummary
from git_repo_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S.%f")[:-3]


class JobEventLog:
    """Writes one line per job event (queued, started, finished) to a file.

    The file is overwritten on open. Events from concurrent jobs go through
    one logging handler, so lines never interleave.
    """

    def __init__(self, path: str):
        self.path = path
        self.started_at = time.monotonic()
        self._logger = logging.getLogger("git_repo_keeper.job_events")
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False

        try:
            self._handler = logging.FileHandler(path, mode="w", encoding="utf-8")
        except OSError as e:
            raise GitRepoKeeperError(f"could not create log file {path}: {e}") from e
        self._handler.setFormatter(logging.Formatter("%(message)s"))
        self._logger.addHandler(self._handler)

        self._write(f"# git-repo-keeper job log - {datetime.now().astimezone().isoformat(timespec='seconds')}")
        self._write("")

    def _write(self, line: str) -> None:
        self._logger.info(line)

    def queued(self, name: str) -> None:
        self._write(f"{_timestamp()} [QUEUED]   {name}")

    def started(self, name: str) -> None:
        self._write(f"{_timestamp()} [STARTED]  {name}")

    def finished(self, result: JobResult) -> None:
        label = JOB_EVENT_LABELS.get(result.status, "UNKNOWN")
        line = f"{_timestamp()} [{label}] {result.name} ({result.duration:.3f}s)"
        if result.error is not None:
            line += f": {result.error}"
        self._write(line)

    def write_summary(self, summary: JobSummary) -> None:
        self._write("")
        self._write(
            f"# summary: success {summary.success} / failed {summary.failed} / "
            f"skipped {summary.skipped} / total {summary.total}"
        )
        self._write(f"# elapsed: {time.monotonic() - self.started_at:.3f}s")

    def close(self) -> None:
        self._logger.removeHandler(self._handler)
        self._handler.close()
        logger.debug(f"Job log written to {self.path}")


def open_event_log(path: Optional[str]) -> Optional[JobEventLog]:
    """Open a job event log, or return None when no path was given."""
    if not path:
        return None
    return JobEventLog(path)
