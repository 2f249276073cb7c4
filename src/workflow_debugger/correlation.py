"""Join jobs of a workflow run to their check runs and annotations.

Check runs are fetched once per commit, never per job. Annotation fetches
for different jobs are independent and run concurrently; each one waits
only on its own check run being known.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from workflow_debugger.core.models import Annotation, CheckRun, Job, WorkflowRun
from workflow_debugger.logging import get_logger

if TYPE_CHECKING:
    from workflow_debugger.github.fetchers import ResourceFetcher

logger = get_logger(__name__)


@dataclass
class CorrelatedJob:
    """A job with its matching check run and annotations, if any."""

    job: Job
    check_run: CheckRun | None = None
    annotations: list[Annotation] = field(default_factory=list)


@dataclass
class CorrelatedRun:
    """Jobs of one run enriched with check-run data and the shared logs location."""

    jobs: list[CorrelatedJob]
    logs_location: str | None = None


def resolve_head_sha(jobs: list[Job], run: WorkflowRun | None = None) -> str | None:
    """Find the commit SHA used to look up check runs.

    Run metadata wins when available; otherwise the first job's SHA is used.
    Returns None when neither source has one.
    """
    if run is not None and run.head_sha:
        return run.head_sha
    if jobs and jobs[0].head_sha:
        return jobs[0].head_sha
    return None


def match_check_run(job: Job, check_runs: list[CheckRun]) -> CheckRun | None:
    """Return the first check run whose name equals the job name exactly."""
    for check_run in check_runs:
        if check_run.name == job.name:
            return check_run
    return None


async def _fetch_annotations(
    fetcher: ResourceFetcher,
    owner: str,
    repo: str,
    check_run: CheckRun | None,
) -> list[Annotation]:
    if check_run is None or check_run.annotations_count <= 0:
        return []
    result = await fetcher.list_annotations(owner, repo, check_run.id)
    if not result.ok:
        logger.warning(
            "Skipping annotations",
            check_run_id=check_run.id,
            reason=result.failure.kind.value,
        )
    return result.unwrap_or([])


async def _fetch_check_runs(
    fetcher: ResourceFetcher,
    owner: str,
    repo: str,
    sha: str | None,
) -> list[CheckRun]:
    if sha is None:
        return []
    result = await fetcher.list_check_runs(owner, repo, sha)
    if not result.ok:
        logger.warning("Skipping check-run correlation", sha=sha, reason=result.failure.kind.value)
    return result.unwrap_or([])


async def _fetch_logs_location(
    fetcher: ResourceFetcher,
    owner: str,
    repo: str,
    run_id: int,
) -> str | None:
    result = await fetcher.resolve_logs_location(owner, repo, run_id)
    return result.value if result.ok else None


async def correlate_jobs(
    fetcher: ResourceFetcher,
    owner: str,
    repo: str,
    run_id: int,
    jobs: list[Job],
    run: WorkflowRun | None = None,
) -> CorrelatedRun:
    """
    Attach check runs, annotations and the logs location to a run's jobs.

    Args:
        fetcher: Resource fetcher used for all remote reads.
        owner: Repository owner.
        repo: Repository name.
        run_id: Workflow run the jobs belong to.
        jobs: Jobs to correlate, in display order.
        run: Run metadata, used for the head SHA when available.

    Returns:
        CorrelatedRun with one entry per job, order preserved. Missing
        enrichments are left empty rather than failing the run.
    """
    sha = resolve_head_sha(jobs, run)
    check_runs, logs_location = await asyncio.gather(
        _fetch_check_runs(fetcher, owner, repo, sha),
        _fetch_logs_location(fetcher, owner, repo, run_id),
    )

    matches = [match_check_run(job, check_runs) for job in jobs]
    annotation_sets = await asyncio.gather(
        *(_fetch_annotations(fetcher, owner, repo, check_run) for check_run in matches)
    )

    return CorrelatedRun(
        jobs=[
            CorrelatedJob(job=job, check_run=check_run, annotations=annotations)
            for job, check_run, annotations in zip(jobs, matches, annotation_sets, strict=True)
        ],
        logs_location=logs_location,
    )
