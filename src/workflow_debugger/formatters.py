"""Plain-text report rendering for the workflow debugger tools.

Renderers are pure: identical inputs always give byte-identical text.
Nothing here reads the clock or reorders fetched data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from workflow_debugger.analysis import JobAnalysis
    from workflow_debugger.core.models import Annotation, WorkflowFile, WorkflowRun
    from workflow_debugger.correlation import CorrelatedJob, CorrelatedRun

NO_FAILED_RUNS = "No failed workflow runs found for this repository."
NO_JOBS = "No jobs found for this workflow run."
FILE_NOT_FOUND = "Failed to retrieve workflow file or file not found."
RUN_NOT_FOUND = "Failed to retrieve workflow run details."
NO_FAILED_JOBS = "No failed jobs found in this workflow run."

SEPARATOR = "---"

GENERAL_RECOMMENDATIONS = """
General Recommendations:
1. Check your workflow file for syntax errors
2. Ensure all required secrets and environment variables are set
3. Verify that your workflow has the necessary permissions
4. Check if you're using the latest versions of actions
5. Consider adding debugging steps to your workflow

Example workflow fix for common Node.js setup issues:
```yaml
- name: Setup Node.js
  uses: actions/setup-node@v3  # Make sure to use a recent version
  with:
    node-version: '16'  # Specify a valid Node.js version
    cache: 'npm'        # Enable caching for faster installations
```
"""


def _text(value: str | None) -> str:
    """Render a possibly missing API field."""
    return value if value else "-"


def format_annotation(annotation: Annotation) -> str:
    return (
        f"  - [{annotation.annotation_level.upper()}] "
        f"{annotation.path}:{annotation.start_line}-{annotation.end_line}: "
        f"{annotation.message}"
    )


def format_annotations_block(annotations: list[Annotation]) -> str:
    """Format annotations as a block, or an empty string if there are none."""
    if not annotations:
        return ""
    return "\nAnnotations:\n" + "\n".join(format_annotation(a) for a in annotations)


def format_run(run: WorkflowRun, logs_location: str | None = None) -> str:
    lines = [
        f"Run ID: {run.id}",
        f"Workflow: {_text(run.name)}",
        f"Branch: {_text(run.head_branch)}",
        f"Status: {_text(run.status)}",
        f"Conclusion: {_text(run.conclusion)}",
        f"Created: {_text(run.created_at)}",
        f"URL: {_text(run.html_url)}",
    ]
    if logs_location:
        lines.append(f"Logs: {logs_location}")
    lines.append(SEPARATOR)
    return "\n".join(lines)


def format_failed_runs(
    owner: str,
    repo: str,
    runs: list[WorkflowRun],
    logs_locations: list[str | None] | None = None,
) -> str:
    """
    Format the failed-runs report.

    Args:
        owner: Repository owner.
        repo: Repository name.
        runs: Failed runs in fetch order (most recent first).
        logs_locations: Logs reference per run, aligned with ``runs``.

    Returns:
        Report text, or a fixed sentence when there are no runs.
    """
    if not runs:
        return NO_FAILED_RUNS
    if logs_locations is None:
        logs_locations = [None] * len(runs)
    blocks = [
        format_run(run, logs) for run, logs in zip(runs, logs_locations, strict=True)
    ]
    return f"Recent failed workflow runs for {owner}/{repo}:\n\n" + "\n".join(blocks)


def format_job(correlated_job: CorrelatedJob, logs_location: str | None = None) -> str:
    """Format one job with its steps and annotations."""
    job = correlated_job.job
    steps = "\n".join(
        f"  - Step {step.number}: {step.name} ({step.conclusion or _text(step.status)})"
        for step in job.steps
    )
    logs_text = f"\nLogs: {logs_location}" if logs_location else ""
    return (
        f"Job: {job.name}\n"
        f"Status: {_text(job.status)}\n"
        f"Conclusion: {_text(job.conclusion)}\n"
        f"URL: {_text(job.html_url)}"
        f"{logs_text}\n"
        f"Steps:\n{steps}"
        f"{format_annotations_block(correlated_job.annotations)}\n"
        f"{SEPARATOR}"
    )


def format_jobs(run_id: int, correlated_run: CorrelatedRun | None) -> str:
    """Format the jobs report for a run.

    The logs reference is resolved once per run and repeated on every job.
    """
    if correlated_run is None or not correlated_run.jobs:
        return NO_JOBS
    blocks = [
        format_job(correlated, correlated_run.logs_location)
        for correlated in correlated_run.jobs
    ]
    return f"Jobs for workflow run {run_id}:\n\n" + "\n".join(blocks)


def format_workflow_file(path: str, workflow_file: WorkflowFile | None) -> str:
    """Format a workflow file as a fenced YAML block."""
    if workflow_file is None or not workflow_file.content:
        return FILE_NOT_FOUND
    return f"Workflow file {path}:\n\n```yaml\n{workflow_file.text}\n```"


def format_job_analysis(result: JobAnalysis) -> str:
    steps_analysis = "\n\n".join(
        "  Step: {step}\n  Possible issues:\n{issues}".format(
            step=step.step_name,
            issues="\n".join(
                f"   - Issue: {issue.description}\n     Solution: {issue.solution}"
                for issue in step.possible_issues
            ),
        )
        for step in result.steps
    )
    return (
        f"Job: {result.job_name}\n"
        f"URL: {_text(result.job_url)}\n"
        f"Failed Steps: {', '.join(result.failed_steps)}"
        f"{format_annotations_block(result.annotations)}\n\n"
        f"Analysis:\n{steps_analysis}"
    )


def format_analysis(
    owner: str,
    repo: str,
    run_id: int,
    results: list[JobAnalysis],
    logs_location: str | None = None,
) -> str:
    """
    Format the failure analysis report.

    Args:
        owner: Repository owner.
        repo: Repository name.
        run_id: Analyzed workflow run.
        results: One analysis per failed job, in job order.
        logs_location: Logs reference for the run, if reachable.

    Returns:
        Report text with per-job analysis followed by general recommendations,
        or a fixed sentence when no job failed.
    """
    if not results:
        return NO_FAILED_JOBS
    formatted = f"\n\n{SEPARATOR}\n\n".join(format_job_analysis(r) for r in results)
    logs_section = f"\nWorkflow Logs: {logs_location}\n" if logs_location else ""
    return (
        f"Analysis of workflow run {run_id} for {owner}/{repo}:{logs_section}\n"
        f"{formatted}\n\n{GENERAL_RECOMMENDATIONS}"
    )
