"""Typed accessors for the GitHub Actions resources the tools need."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from workflow_debugger.core.models import (
    Annotation,
    CheckRun,
    Job,
    WorkflowFile,
    WorkflowRun,
)
from workflow_debugger.core.result import FetchResult
from workflow_debugger.github.client import GitHubClient

FAILED_RUNS_PAGE_SIZE = 5


def _runs(data: dict[str, Any]) -> list[WorkflowRun]:
    if data.get("total_count") == 0:
        return []
    return [WorkflowRun.from_api(run) for run in data["workflow_runs"]]


def _jobs(data: dict[str, Any]) -> list[Job]:
    if data.get("total_count") == 0:
        return []
    return [Job.from_api(job) for job in data["jobs"]]


def _check_runs(data: dict[str, Any]) -> list[CheckRun]:
    if data.get("total_count") == 0:
        return []
    return [CheckRun.from_api(check_run) for check_run in data["check_runs"]]


def _annotations(data: Any) -> list[Annotation]:
    # The annotations endpoint answers with a bare list
    if isinstance(data, dict):
        data = data["annotations"]
    return [Annotation.from_api(annotation) for annotation in data]


class ResourceFetcher:
    """Fetches and models GitHub Actions resources.

    Each method issues exactly one request through ``GitHubClient`` and
    returns a ``FetchResult``. Malformed payloads become SHAPE failures.
    """

    def __init__(self, client: GitHubClient):
        self.client = client

    def _repo_url(self, owner: str, repo: str, path: str) -> str:
        return self.client.url(f"/repos/{owner}/{repo}{path}")

    async def list_failed_runs(self, owner: str, repo: str) -> FetchResult[list[WorkflowRun]]:
        """List the most recent failed workflow runs, newest first."""
        url = self._repo_url(
            owner, repo, f"/actions/runs?status=failure&per_page={FAILED_RUNS_PAGE_SIZE}"
        )
        result = await self.client.request(url)
        return result.map(_runs)

    async def get_run(self, owner: str, repo: str, run_id: int) -> FetchResult[WorkflowRun]:
        result = await self.client.request(self._repo_url(owner, repo, f"/actions/runs/{run_id}"))
        return result.map(WorkflowRun.from_api)

    async def list_jobs(self, owner: str, repo: str, run_id: int) -> FetchResult[list[Job]]:
        result = await self.client.request(
            self._repo_url(owner, repo, f"/actions/runs/{run_id}/jobs")
        )
        return result.map(_jobs)

    async def list_check_runs(
        self, owner: str, repo: str, sha: str
    ) -> FetchResult[list[CheckRun]]:
        """List check runs recorded against a commit."""
        result = await self.client.request(
            self._repo_url(owner, repo, f"/commits/{sha}/check-runs")
        )
        return result.map(_check_runs)

    async def list_annotations(
        self, owner: str, repo: str, check_run_id: int
    ) -> FetchResult[list[Annotation]]:
        """List annotations of a check run, in API order."""
        result = await self.client.request(
            self._repo_url(owner, repo, f"/check-runs/{check_run_id}/annotations")
        )
        return result.map(_annotations)

    async def get_file_content(
        self, owner: str, repo: str, path: str
    ) -> FetchResult[WorkflowFile]:
        """Fetch a repository file; content stays base64-encoded."""
        url = self._repo_url(owner, repo, f"/contents/{quote(path.lstrip('/'))}")
        result = await self.client.request(url)
        return result.map(WorkflowFile.from_api)

    async def resolve_logs_location(
        self, owner: str, repo: str, run_id: int
    ) -> FetchResult[str]:
        """Return the log archive endpoint of a run if it is reachable.

        The archive is a zip file; only its location is surfaced.
        """
        url = self._repo_url(owner, repo, f"/actions/runs/{run_id}/logs")
        return await self.client.check_exists(url)
