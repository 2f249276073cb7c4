"""Typer CLI for serving and running the workflow debugging tools."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Annotated

import typer

from workflow_debugger.config import get_settings
from workflow_debugger.core.exceptions import MissingTokenError
from workflow_debugger.logging import configure_logging, get_logger
from workflow_debugger.service import WorkflowDebugger

logger = get_logger(__name__)

app = typer.Typer(
    name="workflow-debugger",
    help="Diagnose GitHub Actions workflow failures",
    no_args_is_help=True,
)


class Transport(str, Enum):
    """MCP transports supported by the server."""

    STDIO = "stdio"
    SSE = "sse"
    STREAMABLE_HTTP = "streamable-http"


OwnerArg = Annotated[str, typer.Argument(help="Repository owner (username or organization)")]
RepoArg = Annotated[str, typer.Argument(help="Repository name")]
RunIdArg = Annotated[int, typer.Argument(help="Workflow run ID")]


def _startup() -> None:
    """Configure logging and check the credential; exit 1 if it is missing."""
    settings = get_settings()
    configure_logging(log_level=settings.log_level, json_format=settings.log_json_format)
    try:
        settings.require_token()
    except MissingTokenError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


@app.command()
def serve(
    transport: Annotated[
        Transport,
        typer.Option("--transport", help="MCP transport"),
    ] = Transport.STDIO,
) -> None:
    """Run the MCP server."""
    _startup()
    from workflow_debugger.server import mcp

    logger.info("GitHub Workflow Debugger MCP Server running", transport=transport.value)
    mcp.run(transport=transport.value)


@app.command("failed-runs")
def failed_runs(owner: OwnerArg, repo: RepoArg) -> None:
    """Show recent failed workflow runs."""
    _startup()
    debugger = WorkflowDebugger.from_settings()
    typer.echo(asyncio.run(debugger.get_failed_workflow_runs(owner, repo)))


@app.command()
def jobs(owner: OwnerArg, repo: RepoArg, run_id: RunIdArg) -> None:
    """Show jobs, steps and annotations of a workflow run."""
    _startup()
    debugger = WorkflowDebugger.from_settings()
    typer.echo(asyncio.run(debugger.get_workflow_run_jobs(owner, repo, run_id)))


@app.command("workflow-file")
def workflow_file(
    owner: OwnerArg,
    repo: RepoArg,
    path: Annotated[str, typer.Argument(help="Path to the workflow file")],
) -> None:
    """Show the contents of a workflow file."""
    _startup()
    debugger = WorkflowDebugger.from_settings()
    typer.echo(asyncio.run(debugger.get_workflow_file(owner, repo, path)))


@app.command()
def analyze(owner: OwnerArg, repo: RepoArg, run_id: RunIdArg) -> None:
    """Analyze a failed workflow run and suggest fixes."""
    _startup()
    debugger = WorkflowDebugger.from_settings()
    typer.echo(asyncio.run(debugger.analyze_workflow_failure(owner, repo, run_id)))
