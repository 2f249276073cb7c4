"""Data models for GitHub Actions resources.

All models are request-scoped value objects built fresh from GitHub API
JSON on every tool call. ``from_api`` raises ``KeyError`` when an identity
field is missing; callers turn that into a shape failure.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any

FAILURE = "failure"


@dataclass
class WorkflowRun:
    """Represents a GitHub Actions workflow run."""

    id: int
    name: str
    head_branch: str
    head_sha: str
    status: str
    conclusion: str | None
    created_at: str
    html_url: str
    jobs_url: str = ""
    logs_url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> WorkflowRun:
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            head_branch=data.get("head_branch") or "",
            head_sha=data.get("head_sha") or "",
            status=data.get("status") or "",
            conclusion=data.get("conclusion"),
            created_at=data.get("created_at") or "",
            html_url=data.get("html_url") or "",
            jobs_url=data.get("jobs_url") or "",
            logs_url=data.get("logs_url") or "",
        )


@dataclass
class Step:
    """A single step within a job, ordered by ``number``."""

    number: int
    name: str
    status: str
    conclusion: str | None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Step:
        return cls(
            number=data.get("number", 0),
            name=data.get("name") or "",
            status=data.get("status") or "",
            conclusion=data.get("conclusion"),
        )

    @property
    def is_failed(self) -> bool:
        return self.conclusion == FAILURE


@dataclass
class Job:
    """Represents a job within a workflow run."""

    id: int
    name: str
    status: str
    conclusion: str | None
    html_url: str
    head_sha: str
    steps: list[Step] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Job:
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            status=data.get("status") or "",
            conclusion=data.get("conclusion"),
            html_url=data.get("html_url") or "",
            head_sha=data.get("head_sha") or "",
            steps=[Step.from_api(step) for step in data.get("steps") or []],
        )

    @property
    def is_failed(self) -> bool:
        return self.conclusion == FAILURE

    def failed_steps(self) -> list[Step]:
        """Steps whose conclusion is failure, in step order."""
        return [step for step in self.steps if step.is_failed]


@dataclass
class CheckRun:
    """Check-run record attached to a commit, correlated to a job by name."""

    id: int
    name: str
    status: str
    conclusion: str | None
    annotations_count: int = 0
    annotations_url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> CheckRun:
        output = data.get("output") or {}
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            status=data.get("status") or "",
            conclusion=data.get("conclusion"),
            annotations_count=output.get("annotations_count") or 0,
            annotations_url=output.get("annotations_url") or "",
        )


@dataclass
class Annotation:
    """Location-scoped diagnostic attached to a check run."""

    path: str
    start_line: int
    end_line: int
    annotation_level: str
    message: str
    title: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Annotation:
        return cls(
            path=data.get("path") or "",
            start_line=data.get("start_line", 0),
            end_line=data.get("end_line", 0),
            annotation_level=data.get("annotation_level") or "",
            message=data.get("message") or "",
            title=data.get("title"),
        )


@dataclass
class WorkflowFile:
    """Repository file as returned by the contents API."""

    name: str
    path: str
    sha: str
    content: str
    encoding: str = "base64"
    text: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> WorkflowFile:
        """Build the file and decode its content.

        Raises:
            ValueError: If the content is not valid base64.
        """
        workflow_file = cls(
            name=data.get("name") or "",
            path=data.get("path") or "",
            sha=data.get("sha") or "",
            content=data.get("content") or "",
            encoding=data.get("encoding") or "base64",
        )
        workflow_file.text = workflow_file.decoded_text()
        return workflow_file

    def decoded_text(self) -> str:
        """Decode the base64 payload to text.

        GitHub wraps the encoded content at 60 characters; the line breaks are
        discarded by the decoder.
        """
        if not self.content:
            return ""
        return base64.b64decode(self.content).decode("utf-8", errors="replace")
