"""Failure analysis of correlated jobs."""

from __future__ import annotations

from dataclasses import dataclass, field

from workflow_debugger.classification import CommonWorkflowIssue, classify
from workflow_debugger.core.models import Annotation
from workflow_debugger.correlation import CorrelatedJob


@dataclass
class StepAnalysis:
    """Candidate issues for one failed step."""

    step_name: str
    possible_issues: list[CommonWorkflowIssue]


@dataclass
class JobAnalysis:
    """Analysis result for one failed job."""

    job_name: str
    job_url: str
    failed_steps: list[str]
    annotations: list[Annotation] = field(default_factory=list)
    steps: list[StepAnalysis] = field(default_factory=list)


def analyze_job(correlated: CorrelatedJob) -> JobAnalysis:
    """Classify every failed step of a job."""
    failed_steps = correlated.job.failed_steps()
    return JobAnalysis(
        job_name=correlated.job.name,
        job_url=correlated.job.html_url,
        failed_steps=[step.name for step in failed_steps],
        annotations=correlated.annotations,
        steps=[
            StepAnalysis(step_name=step.name, possible_issues=classify(step.name))
            for step in failed_steps
        ],
    )


def analyze_jobs(correlated_jobs: list[CorrelatedJob]) -> list[JobAnalysis]:
    return [analyze_job(correlated) for correlated in correlated_jobs]
