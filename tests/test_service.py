"""End-to-end tests for the workflow debugging operations.

Requests go through the real client and fetchers against a mock transport.
"""

import pytest

from tests.factories import (
    GitHubStub,
    make_annotation_payload,
    make_check_run_payload,
    make_check_runs_response,
    make_debugger,
    make_file_payload,
    make_job_payload,
    make_jobs_response,
    make_run_payload,
    make_runs_response,
    make_step_payload,
)
from workflow_debugger.classification import get_issue
from workflow_debugger.formatters import (
    FILE_NOT_FOUND,
    NO_FAILED_JOBS,
    NO_FAILED_RUNS,
    NO_JOBS,
    RUN_NOT_FOUND,
)
from workflow_debugger.service import WorkflowDebugger

RUNS = "/repos/owner/repo/actions/runs"
RUN = "/repos/owner/repo/actions/runs/42"
JOBS = "/repos/owner/repo/actions/runs/42/jobs"
CHECK_RUNS = "/repos/owner/repo/commits/abc123/check-runs"


class TestGetFailedWorkflowRuns:
    @pytest.mark.asyncio
    async def test_report_with_logs_per_run(self, github: GitHubStub, debugger: WorkflowDebugger):
        github.add(
            RUNS, make_runs_response([make_run_payload(run_id=42), make_run_payload(run_id=41)])
        )
        github.add_logs(run_id=42)

        text = await debugger.get_failed_workflow_runs("owner", "repo")

        assert text.startswith("Recent failed workflow runs for owner/repo:")
        assert "Logs: https://api.github.com/repos/owner/repo/actions/runs/42/logs" in text
        assert "actions/runs/41/logs" not in text
        assert text.index("Run ID: 42") < text.index("Run ID: 41")

    @pytest.mark.asyncio
    async def test_no_runs(self, github: GitHubStub, debugger: WorkflowDebugger):
        github.add(RUNS, make_runs_response([]))

        assert await debugger.get_failed_workflow_runs("owner", "repo") == NO_FAILED_RUNS

    @pytest.mark.asyncio
    async def test_fetch_failure_reads_as_no_runs(self, debugger: WorkflowDebugger):
        assert await debugger.get_failed_workflow_runs("owner", "repo") == NO_FAILED_RUNS

    @pytest.mark.asyncio
    async def test_identical_data_gives_identical_text(self, github: GitHubStub):
        github.add(RUNS, make_runs_response([make_run_payload(run_id=i) for i in (3, 2, 1)]))
        github.add_logs(run_id=2)

        first = await make_debugger(github).get_failed_workflow_runs("owner", "repo")
        second = await make_debugger(github).get_failed_workflow_runs("owner", "repo")

        assert first == second


class TestGetWorkflowRunJobs:
    @pytest.mark.asyncio
    async def test_jobs_with_annotations(self, github: GitHubStub, debugger: WorkflowDebugger):
        github.add(JOBS, make_jobs_response([make_job_payload(), make_job_payload(1002, "lint")]))
        github.add(
            CHECK_RUNS,
            make_check_runs_response([make_check_run_payload(check_run_id=7, annotations_count=1)]),
        )
        github.add(
            "/repos/owner/repo/check-runs/7/annotations",
            [make_annotation_payload(message="Module not found")],
        )
        github.add_logs()

        text = await debugger.get_workflow_run_jobs("owner", "repo", 42)

        assert text.startswith("Jobs for workflow run 42:\n\nJob: build\n")
        assert "[FAILURE] src/index.js:10-12: Module not found" in text
        assert text.count("Logs: ") == 2
        assert github.count(CHECK_RUNS) == 1

    @pytest.mark.asyncio
    async def test_jobs_fetch_failure(self, github: GitHubStub, debugger: WorkflowDebugger):
        github.add(JOBS, {"message": "Server Error"}, status_code=500)

        assert await debugger.get_workflow_run_jobs("owner", "repo", 42) == NO_JOBS
        assert github.calls == [JOBS]

    @pytest.mark.asyncio
    async def test_zero_jobs(self, github: GitHubStub, debugger: WorkflowDebugger):
        github.add(JOBS, make_jobs_response([]))

        assert await debugger.get_workflow_run_jobs("owner", "repo", 42) == NO_JOBS


class TestGetWorkflowFile:
    @pytest.mark.asyncio
    async def test_decodes_file(self, github: GitHubStub, debugger: WorkflowDebugger):
        github.add(
            "/repos/owner/repo/contents/.github/workflows/ci.yml",
            make_file_payload("name: CI\non: push\n"),
        )

        text = await debugger.get_workflow_file("owner", "repo", ".github/workflows/ci.yml")

        assert "```yaml\nname: CI\non: push\n\n```" in text

    @pytest.mark.asyncio
    async def test_missing_file(self, debugger: WorkflowDebugger):
        text = await debugger.get_workflow_file("owner", "repo", ".github/workflows/nope.yml")
        assert text == FILE_NOT_FOUND

    @pytest.mark.asyncio
    async def test_malformed_content_reports_not_found(
        self, github: GitHubStub, debugger: WorkflowDebugger
    ):
        """Undecodable content renders the not-found sentence instead of raising."""
        github.add(
            "/repos/owner/repo/contents/.github/workflows/ci.yml",
            {"name": "ci.yml", "content": "abc", "encoding": "base64"},
        )

        text = await debugger.get_workflow_file("owner", "repo", ".github/workflows/ci.yml")

        assert text == FILE_NOT_FOUND


class TestAnalyzeWorkflowFailure:
    @pytest.mark.asyncio
    async def test_npm_install_failure_scenario(
        self, github: GitHubStub, debugger: WorkflowDebugger
    ):
        github.add(RUN, make_run_payload(run_id=42, name="CI", head_branch="main"))
        github.add(
            JOBS,
            make_jobs_response(
                [make_job_payload(name="build", steps=[make_step_payload(name="npm install")])]
            ),
        )

        text = await debugger.analyze_workflow_failure("owner", "repo", 42)

        issue = get_issue("dependency-installation-failure")
        assert "Job: build" in text
        assert "Step: npm install" in text
        assert f"   - Issue: {issue.description}\n     Solution: {issue.solution}" in text
        assert "General Recommendations:" in text

    @pytest.mark.asyncio
    async def test_only_failed_jobs_and_steps_analyzed(
        self, github: GitHubStub, debugger: WorkflowDebugger
    ):
        github.add(RUN, make_run_payload())
        github.add(
            JOBS,
            make_jobs_response(
                [
                    make_job_payload(job_id=1, name="lint", conclusion="success"),
                    make_job_payload(
                        job_id=2,
                        name="test",
                        steps=[
                            make_step_payload(number=1, name="Checkout", conclusion="success"),
                            make_step_payload(number=2, name="Run tests"),
                        ],
                    ),
                ]
            ),
        )

        text = await debugger.analyze_workflow_failure("owner", "repo", 42)

        assert "Job: lint" not in text
        assert "Failed Steps: Run tests\n" in text
        assert "Step: Checkout" not in text
        assert get_issue("test-failure").description in text

    @pytest.mark.asyncio
    async def test_correlates_with_run_head_sha(
        self, github: GitHubStub, debugger: WorkflowDebugger
    ):
        github.add(RUN, make_run_payload(head_sha="abc123"))
        github.add(JOBS, make_jobs_response([make_job_payload(head_sha="other")]))
        github.add(
            CHECK_RUNS,
            make_check_runs_response([make_check_run_payload(check_run_id=7, annotations_count=1)]),
        )
        github.add(
            "/repos/owner/repo/check-runs/7/annotations",
            [make_annotation_payload(annotation_level="failure", message="npm ERR! 404")],
        )
        github.add_logs()

        text = await debugger.analyze_workflow_failure("owner", "repo", 42)

        assert "[FAILURE] src/index.js:10-12: npm ERR! 404" in text
        assert "Workflow Logs: https://api.github.com/repos/owner/repo/actions/runs/42/logs" in text

    @pytest.mark.asyncio
    async def test_run_not_found(self, github: GitHubStub, debugger: WorkflowDebugger):
        assert await debugger.analyze_workflow_failure("owner", "repo", 42) == RUN_NOT_FOUND
        assert github.calls == [RUN]

    @pytest.mark.asyncio
    async def test_jobs_absent(self, github: GitHubStub, debugger: WorkflowDebugger):
        github.add(RUN, make_run_payload())

        assert await debugger.analyze_workflow_failure("owner", "repo", 42) == NO_JOBS

    @pytest.mark.asyncio
    async def test_no_failed_jobs(self, github: GitHubStub, debugger: WorkflowDebugger):
        github.add(RUN, make_run_payload())
        github.add(JOBS, make_jobs_response([make_job_payload(conclusion="success")]))

        text = await debugger.analyze_workflow_failure("owner", "repo", 42)

        assert text == NO_FAILED_JOBS
        assert CHECK_RUNS not in github.calls

    @pytest.mark.asyncio
    async def test_missing_token_degrades_to_sentence(self, github: GitHubStub):
        github.add(RUN, make_run_payload())
        debugger = make_debugger(github, token=None)

        assert await debugger.analyze_workflow_failure("owner", "repo", 42) == RUN_NOT_FOUND
        assert github.calls == []


class TestToolLogging:
    @pytest.mark.asyncio
    async def test_tool_name_bound_to_log_events(
        self, github: GitHubStub, debugger: WorkflowDebugger, quiet_logging
    ):
        github.add(RUNS, make_runs_response([]))

        await debugger.get_failed_workflow_runs("owner", "repo")

        assert '"tool": "get-failed-workflow-runs"' in quiet_logging.getvalue()
