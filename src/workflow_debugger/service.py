"""Workflow debugging operations behind the MCP tools.

Each operation fetches what it needs, correlates and classifies it, and
returns a plain-text report. Failed fetches degrade to the fixed sentences
in ``workflow_debugger.formatters``; nothing raises to the caller.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import TypeVar

from workflow_debugger.analysis import analyze_jobs
from workflow_debugger.correlation import correlate_jobs
from workflow_debugger.formatters import (
    NO_JOBS,
    RUN_NOT_FOUND,
    format_analysis,
    format_failed_runs,
    format_jobs,
    format_workflow_file,
)
from workflow_debugger.github.client import GitHubClient
from workflow_debugger.github.fetchers import ResourceFetcher
from workflow_debugger.logging import get_logger, tool_ctx

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[str]])


def tool_operation(name: str) -> Callable[[F], F]:
    """Bind the tool name to the logging context for the duration of a call."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> str:
            token = tool_ctx.set(name)
            try:
                logger.info("Tool invoked", arguments=kwargs or list(args[1:]))
                return await func(*args, **kwargs)
            finally:
                tool_ctx.reset(token)

        return wrapper  # type: ignore[return-value]

    return decorator


class WorkflowDebugger:
    """GitHub Actions failure diagnosis operations.

    Usage:
        debugger = WorkflowDebugger.from_settings()
        text = await debugger.analyze_workflow_failure("owner", "repo", 42)
    """

    def __init__(self, fetcher: ResourceFetcher):
        self.fetcher = fetcher

    @classmethod
    def from_settings(cls, client: GitHubClient | None = None) -> WorkflowDebugger:
        """Create a debugger backed by the process-wide settings."""
        return cls(ResourceFetcher(client or GitHubClient()))

    async def _logs_location(self, owner: str, repo: str, run_id: int) -> str | None:
        result = await self.fetcher.resolve_logs_location(owner, repo, run_id)
        return result.value if result.ok else None

    @tool_operation("get-failed-workflow-runs")
    async def get_failed_workflow_runs(self, owner: str, repo: str) -> str:
        """Report recent failed runs, each with its logs reference if reachable."""
        result = await self.fetcher.list_failed_runs(owner, repo)
        runs = result.unwrap_or([])
        logs_locations = await asyncio.gather(
            *(self._logs_location(owner, repo, run.id) for run in runs)
        )
        return format_failed_runs(owner, repo, runs, list(logs_locations))

    @tool_operation("get-workflow-run-jobs")
    async def get_workflow_run_jobs(self, owner: str, repo: str, run_id: int) -> str:
        """Report a run's jobs with steps, annotations and the logs reference."""
        result = await self.fetcher.list_jobs(owner, repo, run_id)
        jobs = result.unwrap_or([])
        if not jobs:
            return NO_JOBS

        correlated = await correlate_jobs(self.fetcher, owner, repo, run_id, jobs)
        return format_jobs(run_id, correlated)

    @tool_operation("get-workflow-file")
    async def get_workflow_file(self, owner: str, repo: str, path: str) -> str:
        """Report the decoded contents of a workflow file."""
        result = await self.fetcher.get_file_content(owner, repo, path)
        return format_workflow_file(path, result.value if result.ok else None)

    @tool_operation("analyze-workflow-failure")
    async def analyze_workflow_failure(self, owner: str, repo: str, run_id: int) -> str:
        """Analyze the failed jobs of a run and suggest fixes."""
        run_result = await self.fetcher.get_run(owner, repo, run_id)
        if not run_result.ok:
            return RUN_NOT_FOUND

        jobs = (await self.fetcher.list_jobs(owner, repo, run_id)).unwrap_or([])
        if not jobs:
            return NO_JOBS

        failed_jobs = [job for job in jobs if job.is_failed]
        if not failed_jobs:
            return format_analysis(owner, repo, run_id, [])

        correlated = await correlate_jobs(
            self.fetcher, owner, repo, run_id, failed_jobs, run=run_result.value
        )
        results = analyze_jobs(correlated.jobs)
        logger.info(
            "Analyzed workflow failure",
            run_id=run_id,
            failed_jobs=len(results),
            failed_steps=sum(len(r.failed_steps) for r in results),
        )
        return format_analysis(owner, repo, run_id, results, correlated.logs_location)
