"""Bounded parallel execution of per-repository jobs."""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from git_repo_keeper.constants import JOB_STATUS_FAILED, JOB_STATUS_SKIPPED, JOB_STATUS_SUCCESS
from git_repo_keeper.exceptions import is_cancellation
from git_repo_keeper.models.job import JobResult, JobSummary
from git_repo_keeper.utils.context import OperationContext, background
from git_repo_keeper.utils.logging import get_logger

if TYPE_CHECKING:
    from git_repo_keeper.core.event_log import JobEventLog

logger = get_logger(__name__)


@dataclass
class Job:
    """A named unit of work that receives the shared context."""

    name: str
    run: Optional[Callable[[OperationContext], Any]]


def _resolve_status(error: Optional[BaseException]) -> str:
    if error is None:
        return JOB_STATUS_SUCCESS
    if is_cancellation(error):
        return JOB_STATUS_SKIPPED
    return JOB_STATUS_FAILED


def _run_job(job: Job, name: str, context: OperationContext) -> JobResult:
    start = time.monotonic()

    if job.run is None:
        return JobResult(name, JOB_STATUS_FAILED, ValueError("job has no callable"), 0.0)

    pending = context.error()
    if pending is not None:
        return JobResult(name, JOB_STATUS_SKIPPED, pending, 0.0)

    error = None
    try:
        job.run(context)
    except Exception as e:
        logger.debug(f"Job {name} raised {type(e).__name__}: {e}")
        error = e

    return JobResult(name, _resolve_status(error), error, time.monotonic() - start)


def _run_logged_job(
    job: Job, name: str, context: OperationContext, event_log: Optional["JobEventLog"]
) -> JobResult:
    if event_log is not None and job.run is not None and context.error() is None:
        event_log.started(name)
    result = _run_job(job, name, context)
    if event_log is not None:
        event_log.finished(result)
    return result


def execute(
    jobs: List[Job],
    max_workers: int,
    context: Optional[OperationContext] = None,
    event_log: Optional["JobEventLog"] = None,
) -> JobSummary:
    """
    Run jobs with at most ``max_workers`` at a time.

    A failing job never stops the others. Jobs that start after the context
    was cancelled are recorded as skipped without running.

    Args:
        jobs: Jobs to run
        max_workers: Parallelism; values below 1 mean 1
        context: Shared cancellation context
        event_log: Optional log receiving queued/started/finished events

    Returns:
        JobSummary with one result per job, in submission order
    """
    context = context or background()
    summary = JobSummary(total=len(jobs))
    if not jobs:
        return summary

    max_workers = max(1, max_workers)
    names = [job.name if job.name and job.name.strip() else f"job-{i + 1}" for i, job in enumerate(jobs)]

    if event_log is not None:
        for name in names:
            event_log.queued(name)

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="repo-job") as executor:
        futures = [
            executor.submit(_run_logged_job, job, name, context, event_log)
            for job, name in zip(jobs, names)
        ]
        summary.results = [future.result() for future in futures]

    for result in summary.results:
        if result.status == JOB_STATUS_SUCCESS:
            summary.success += 1
        elif result.status == JOB_STATUS_FAILED:
            summary.failed += 1
        else:
            summary.skipped += 1

    if event_log is not None:
        event_log.write_summary(summary)

    logger.info(
        f"Ran {summary.total} jobs: {summary.success} succeeded, "
        f"{summary.failed} failed, {summary.skipped} skipped"
    )
    return summary
