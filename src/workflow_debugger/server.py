"""MCP server exposing the workflow debugging tools."""

from __future__ import annotations

from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from workflow_debugger.service import WorkflowDebugger

SERVER_NAME = "github-workflow-debugger"

mcp = FastMCP(SERVER_NAME)

Owner = Annotated[str, Field(description="GitHub repository owner (username or organization)")]
Repo = Annotated[str, Field(description="GitHub repository name")]
RunId = Annotated[int, Field(description="Workflow run ID")]


def _debugger() -> WorkflowDebugger:
    return WorkflowDebugger.from_settings()


@mcp.tool(
    name="get-failed-workflow-runs",
    description="Get recent failed workflow runs for a GitHub repository",
)
async def get_failed_workflow_runs(owner: Owner, repo: Repo) -> str:
    return await _debugger().get_failed_workflow_runs(owner, repo)


@mcp.tool(
    name="get-workflow-run-jobs",
    description="Get jobs for a specific workflow run",
)
async def get_workflow_run_jobs(owner: Owner, repo: Repo, runId: RunId) -> str:  # noqa: N803
    return await _debugger().get_workflow_run_jobs(owner, repo, runId)


@mcp.tool(
    name="get-workflow-file",
    description="Get the content of a workflow file",
)
async def get_workflow_file(
    owner: Owner,
    repo: Repo,
    path: Annotated[
        str,
        Field(description="Path to the workflow file (e.g., .github/workflows/main.yml)"),
    ],
) -> str:
    return await _debugger().get_workflow_file(owner, repo, path)


@mcp.tool(
    name="analyze-workflow-failure",
    description="Analyze a failed workflow run and suggest fixes",
)
async def analyze_workflow_failure(owner: Owner, repo: Repo, runId: RunId) -> str:  # noqa: N803
    return await _debugger().analyze_workflow_failure(owner, repo, runId)
